"""Tests for the beatgrid CLI"""

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
import yaml
from click.testing import CliRunner

from beatgrid_cli.commands.compile import load_grid_file
from beatgrid_cli.main import cli
from beatgrid_core.constants import FALLBACK_BANKS
from beatgrid_core.exceptions import CatalogUnavailable

GROOVE = {
    "measure": 4,
    "bpm": 120,
    "bank": "RolandTR808",
    "instruments": {
        "hh": {"steps": [0, 4, 8, 12]},
        "bd": {"steps": [0, 2], "subdivisions": {"2": 4}},
        "sd": {"steps": []},
    },
}


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def groove_yaml(tmp_path: Path) -> Path:
    path = tmp_path / "groove.yaml"
    path.write_text(yaml.safe_dump(GROOVE), encoding="utf-8")
    return path


@pytest.fixture
def groove_json(tmp_path: Path) -> Path:
    path = tmp_path / "groove.json"
    path.write_text(json.dumps(GROOVE), encoding="utf-8")
    return path


class TestLoadGridFile:
    def test_yaml(self, groove_yaml: Path):
        assert load_grid_file(groove_yaml)["bank"] == "RolandTR808"

    def test_json(self, groove_json: Path):
        assert load_grid_file(groove_json)["measure"] == 4

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ValueError):
            load_grid_file(path)


class TestCompile:
    def test_json_output(self, runner: CliRunner, groove_yaml: Path):
        result = runner.invoke(cli, ["--json", "compile", str(groove_yaml)])

        assert result.exit_code == 0, result.output
        rows = {r["instrument"]: r for r in json.loads(result.stdout)["data"]}
        assert rows["bd"]["pattern"] == "0,2,2.25,2.5,2.75"
        assert rows["hh"]["pattern"] == "0,4,8,12"
        assert rows["sd"]["pattern"] == "-"
        assert rows["bd"]["bank"] == "RolandTR808"
        assert rows["bd"]["bpm"] == 120

    def test_strudel(self, runner: CliRunner, groove_json: Path):
        result = runner.invoke(cli, ["compile", str(groove_json), "--strudel"])

        assert result.exit_code == 0, result.output
        assert 's("bd").beat("0,2,2.25,2.5,2.75", 16).bank("RolandTR808").cpm(120)' in result.stdout

    def test_overrides(self, runner: CliRunner, groove_yaml: Path):
        result = runner.invoke(
            cli, ["--json", "compile", str(groove_yaml), "--bank", "LinnDrum", "--bpm", "90"]
        )

        rows = json.loads(result.stdout)["data"]
        assert all(r["bank"] == "LinnDrum" and r["bpm"] == 90 for r in rows)

    def test_table_output(self, runner: CliRunner, groove_yaml: Path):
        result = runner.invoke(cli, ["compile", str(groove_yaml)])

        assert result.exit_code == 0
        assert "Compiled patterns" in result.stdout

    def test_out_of_range_step(self, runner: CliRunner, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({"measure": 3, "instruments": {"bd": {"steps": [12]}}}))

        result = runner.invoke(cli, ["compile", str(path)])

        assert result.exit_code != 0

    @pytest.mark.parametrize(
        "row", [[0, 4], {"steps": [0], "subdivisions": [2]}]
    )
    def test_malformed_row_aborts(self, runner: CliRunner, tmp_path: Path, row):
        path = tmp_path / "rows.yaml"
        path.write_text(yaml.safe_dump({"instruments": {"bd": row}}))

        result = runner.invoke(cli, ["compile", str(path)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)

    def test_invalid_yaml(self, runner: CliRunner, tmp_path: Path):
        path = tmp_path / "broken.yaml"
        path.write_text("instruments: [unclosed", encoding="utf-8")

        result = runner.invoke(cli, ["compile", str(path)])

        assert result.exit_code != 0

    def test_missing_file(self, runner: CliRunner):
        result = runner.invoke(cli, ["compile", "does-not-exist.yaml"])

        assert result.exit_code == 2


class TestBanks:
    def test_offline(self, runner: CliRunner):
        result = runner.invoke(cli, ["--json", "banks", "--offline"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["banks"] == list(FALLBACK_BANKS)

    def test_remote(self, runner: CliRunner):
        load = AsyncMock(return_value=["LinnDrum", "RolandTR909"])
        with patch("beatgrid_cli.commands.banks.HttpBankCatalog.load", load):
            result = runner.invoke(cli, ["--json", "banks"])

        assert json.loads(result.stdout)["data"]["banks"] == ["LinnDrum", "RolandTR909"]

    def test_remote_failure_falls_back(self, runner: CliRunner):
        load = AsyncMock(side_effect=CatalogUnavailable("offline"))
        with patch("beatgrid_cli.commands.banks.HttpBankCatalog.load", load):
            result = runner.invoke(cli, ["--json", "banks"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["banks"] == list(FALLBACK_BANKS)


class TestServe:
    def test_passes_host_and_port(self, runner: CliRunner):
        with patch("beatgrid_api.main.run") as run:
            result = runner.invoke(cli, ["serve", "--host", "0.0.0.0", "--port", "9000"])

        assert result.exit_code == 0
        run.assert_called_once_with(host="0.0.0.0", port=9000)
