"""Tests for TransportScheduler"""

from __future__ import annotations

import asyncio

import pytest

from beatgrid_loop.engine import NO_STEP, TransportScheduler, poll_interval_ms, step_duration_ms

from .mocks import FakeClock


class StepRecorder:
    """Collects emitted steps."""

    def __init__(self) -> None:
        self.steps: list[int] = []

    def __call__(self, step: int) -> None:
        self.steps.append(step)


@pytest.fixture
def recorder() -> StepRecorder:
    return StepRecorder()


@pytest.fixture
def scheduler(recorder: StepRecorder, clock: FakeClock) -> TransportScheduler:
    return TransportScheduler(recorder, clock)


class TestStepDuration:
    """Test step duration formula"""

    def test_four_four(self):
        assert step_duration_ms(120, 4, 16) == pytest.approx(62.5)

    def test_three_four_uses_smaller_divisor(self):
        # 3 * 500 / 12 / 1.5
        assert step_duration_ms(120, 3, 12) == pytest.approx(83.3333333)

    def test_five_four(self):
        # 5 * 1000 / 20 / 2
        assert step_duration_ms(60, 5, 20) == pytest.approx(125.0)

    def test_poll_interval_half_step(self):
        assert poll_interval_ms(62.5) == pytest.approx(31.25)

    def test_poll_interval_capped(self):
        assert poll_interval_ms(250.0) == 50.0


class TestManualPolling:
    """Scheduler driven by poll() without an event loop"""

    def test_start_emits_step_zero(self, scheduler: TransportScheduler, recorder: StepRecorder):
        scheduler.start(62.5, 16)

        assert scheduler.running
        assert scheduler.start_time == 1000.0
        assert recorder.steps == [0]

    def test_step_from_elapsed_time(
        self, scheduler: TransportScheduler, recorder: StepRecorder, clock: FakeClock
    ):
        scheduler.start(62.5, 16)
        clock.advance(130)

        assert scheduler.poll() == 2
        assert scheduler.current_step == 2

    def test_wraps_at_cycle_end(self, scheduler: TransportScheduler, clock: FakeClock):
        scheduler.start(62.5, 16)
        clock.advance(62.5 * 17 + 1)

        assert scheduler.poll() == 1

    def test_missed_polls_do_not_drift(self, scheduler: TransportScheduler, clock: FakeClock):
        scheduler.start(100.0, 16)

        clock.advance(50)
        assert scheduler.poll() == 0
        # a long stall skips straight to the right step
        clock.advance(1000)
        assert scheduler.poll() == 10

    def test_step_at_when_stopped(self, scheduler: TransportScheduler):
        assert scheduler.step_at(5000.0) == NO_STEP

    @pytest.mark.parametrize("step_ms, steps", [(0, 16), (-5.0, 16), (62.5, 0)])
    def test_start_rejects_non_positive(
        self, scheduler: TransportScheduler, step_ms: float, steps: int
    ):
        with pytest.raises(ValueError):
            scheduler.start(step_ms, steps)
        assert not scheduler.running


class TestStop:
    """Test stop semantics"""

    def test_stop_emits_no_step(self, scheduler: TransportScheduler, recorder: StepRecorder):
        scheduler.start(62.5, 16)
        scheduler.stop()

        assert recorder.steps == [0, NO_STEP]
        assert scheduler.start_time is None
        assert scheduler.current_step == NO_STEP
        assert not scheduler.running

    def test_stop_when_stopped_is_noop(
        self, scheduler: TransportScheduler, recorder: StepRecorder
    ):
        scheduler.stop()
        scheduler.stop()

        assert recorder.steps == []

    def test_poll_after_stop_emits_nothing(
        self, scheduler: TransportScheduler, recorder: StepRecorder, clock: FakeClock
    ):
        scheduler.start(62.5, 16)
        scheduler.stop()
        clock.advance(200)

        assert scheduler.poll() == NO_STEP
        assert recorder.steps == [0, NO_STEP]


class TestGeneration:
    """Stale ticks from a previous run are dropped"""

    def test_restart_bumps_generation(self, scheduler: TransportScheduler):
        scheduler.start(62.5, 16)
        first = scheduler.generation
        scheduler.start(62.5, 16)

        assert scheduler.generation > first

    def test_stale_tick_dropped(
        self, scheduler: TransportScheduler, recorder: StepRecorder, clock: FakeClock
    ):
        scheduler.start(62.5, 16)
        stale = scheduler.generation
        scheduler.stop()
        scheduler.start(100.0, 12)
        recorder.steps.clear()
        clock.advance(500)

        assert scheduler.poll(stale) == NO_STEP
        assert recorder.steps == []
        assert scheduler.poll(scheduler.generation) == 5

    def test_restart_resets_origin(
        self, scheduler: TransportScheduler, recorder: StepRecorder, clock: FakeClock
    ):
        scheduler.start(62.5, 16)
        clock.advance(300)
        scheduler.start(62.5, 16)

        assert scheduler.start_time == 1300.0
        assert recorder.steps[-1] == 0


class TestAsyncPolling:
    """Scheduler polling on a running event loop"""

    @pytest.mark.asyncio
    async def test_polls_while_running(self, recorder: StepRecorder, clock: FakeClock):
        scheduler = TransportScheduler(recorder, clock)
        scheduler.start(10.0, 16)
        clock.advance(35)

        await asyncio.sleep(0.05)

        assert 3 in recorder.steps
        scheduler.stop()

    @pytest.mark.asyncio
    async def test_stop_then_start_does_not_leak(
        self, recorder: StepRecorder, clock: FakeClock
    ):
        scheduler = TransportScheduler(recorder, clock)
        scheduler.start(10.0, 16)
        old_task = scheduler._task

        scheduler.stop()
        scheduler.start(20.0, 8)
        await asyncio.sleep(0.05)

        assert old_task is not None
        assert old_task.cancelled() or old_task.done()
        assert scheduler._task is not old_task
        # every tick after the restart is inside the new 8-step cycle
        restart = recorder.steps.index(NO_STEP)
        assert all(0 <= s < 8 for s in recorder.steps[restart + 1:])
        scheduler.stop()

    @pytest.mark.asyncio
    async def test_stop_cancels_polling(self, recorder: StepRecorder, clock: FakeClock):
        scheduler = TransportScheduler(recorder, clock)
        scheduler.start(10.0, 16)
        await asyncio.sleep(0.02)

        scheduler.stop()
        count = len(recorder.steps)
        clock.advance(100)
        await asyncio.sleep(0.03)

        assert len(recorder.steps) == count
        assert recorder.steps[-1] == NO_STEP
