"""Tests for /grid/* endpoints"""

from fastapi.testclient import TestClient

from beatgrid_loop.output import RecordingAudioEngine


def test_get_grid(client: TestClient):
    response = client.get("/grid")

    assert response.status_code == 200
    data = response.json()
    assert [i["id"] for i in data["instruments"]] == ["hh", "oh", "sd", "bd"]
    assert data["steps_per_cycle"] == 16
    assert data["current_step"] == -1
    assert len(data["steps"]["bd"]) == 16


def test_available_instruments(client: TestClient):
    response = client.get("/grid/instruments/available")

    ids = [i["id"] for i in response.json()["instruments"]]
    assert "bd" not in ids
    assert "cp" in ids


def test_add_instrument(client: TestClient):
    response = client.post("/grid/instruments", json={"instrument": "cp"})

    assert response.status_code == 200
    snapshot = response.json()["snapshot"]
    assert snapshot["instruments"][-1] == {"id": "cp", "name": "Clap"}


def test_add_instrument_invalid_id(client: TestClient):
    response = client.post("/grid/instruments", json={"instrument": "no spaces"})

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "invalid_argument"


def test_remove_instrument(client: TestClient):
    response = client.delete("/grid/instruments/hh")

    assert response.status_code == 200
    assert "hh" not in response.json()["snapshot"]["steps"]


def test_toggle_step(client: TestClient):
    response = client.post("/grid/steps/toggle", json={"instrument": "sd", "index": 4})

    assert response.status_code == 200
    assert response.json()["snapshot"]["steps"]["sd"][4]["active"] is True


def test_toggle_step_out_of_range(client: TestClient):
    response = client.post("/grid/steps/toggle", json={"instrument": "sd", "index": 16})

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "out_of_range"


def test_toggle_unknown_instrument(client: TestClient):
    response = client.post("/grid/steps/toggle", json={"instrument": "cp", "index": 0})

    assert response.status_code == 404


def test_set_subdivision(client: TestClient):
    response = client.post(
        "/grid/steps/subdivision", json={"instrument": "bd", "index": 2, "subdivision": 3}
    )

    assert response.status_code == 200
    assert response.json()["snapshot"]["steps"]["bd"][2]["subdivision"] == 3


def test_set_subdivision_invalid(client: TestClient):
    response = client.post(
        "/grid/steps/subdivision", json={"instrument": "bd", "index": 2, "subdivision": 8}
    )

    assert response.status_code == 422


def test_update_measure(client: TestClient):
    client.post("/grid/steps/toggle", json={"instrument": "bd", "index": 14})

    response = client.post("/grid/measure", json={"measure": 3})

    snapshot = response.json()["snapshot"]
    assert snapshot["measure"] == 3
    assert snapshot["steps_per_cycle"] == 12
    assert len(snapshot["steps"]["bd"]) == 12


def test_update_measure_too_small(client: TestClient):
    response = client.post("/grid/measure", json={"measure": 2})

    assert response.status_code == 422


def test_reset(client: TestClient):
    client.post("/grid/steps/toggle", json={"instrument": "bd", "index": 0})

    response = client.post("/grid/reset")

    steps = response.json()["snapshot"]["steps"]["bd"]
    assert not any(s["active"] for s in steps)


def test_edit_while_playing_resends_patterns(client: TestClient, engine: RecordingAudioEngine):
    client.post("/playback/start")

    client.post("/grid/steps/toggle", json={"instrument": "bd", "index": 0})

    assert engine.play_count == 2
    bd = next(t for t in engine.tracks if t.instrument == "bd")
    assert bd.pattern.to_pattern_string() == "0"
