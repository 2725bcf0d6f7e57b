"""
Beatgrid Sequencer Controller

Orchestrates:
- GridModel mutations from renderer intents
- PatternCompiler (one descriptor per instrument)
- External audio engine (stacked play / stop)
- TransportScheduler (step highlight)
- Snapshot publishing to the renderer

Dependencies are injected via constructor for testability.
Use create_sequencer() factory for production instances.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ValidationError

from beatgrid_core.constants import (
    DEFAULT_BANK,
    DEFAULT_INSTRUMENTS,
    DEFAULT_MEASURE,
    FALLBACK_BANKS,
)
from beatgrid_core.exceptions import (
    BeatgridError,
    CatalogUnavailable,
    ExternalEngineFailure,
    InvalidArgument,
)
from beatgrid_core.models.pattern import TrackPattern
from beatgrid_core.models.snapshot import InstrumentView, SequencerSnapshot, StepView
from beatgrid_core.protocols import AudioEngine, BankCatalog, ClockSource, SnapshotSink

from ..commands import (
    BankCommand,
    InstrumentCommand,
    MeasureCommand,
    PlayCommand,
    ResetCommand,
    StopCommand,
    SubdivisionCommand,
    TempoCommand,
    ToggleStepCommand,
)
from ..result import CommandResult
from ..state import GridModel, TransportState
from .pattern_compiler import PatternCompiler
from .transport_scheduler import TransportScheduler, step_duration_ms

logger = logging.getLogger(__name__)


class SequencerController:
    """
    Owner of the grid and the playback pipeline.

    Restart policy: any successful mutation while playing runs a full
    stop() then play(). All patterns are recompiled and resent, the step
    duration is recomputed and the highlight clock restarts from zero.
    The engine has no partial-update API.
    """

    def __init__(
        self,
        engine: AudioEngine,
        catalog: BankCatalog | None = None,
        clock: ClockSource | None = None,
        sink: SnapshotSink | None = None,
        *,
        instruments: list[str] | tuple[str, ...] = DEFAULT_INSTRUMENTS,
        measure: int = DEFAULT_MEASURE,
        bpm: float = 60.0,
        bank: str = DEFAULT_BANK,
    ):
        """
        Initialize SequencerController with injected dependencies.

        Args:
            engine: Audio engine (OscAudioEngine or mock)
            catalog: Bank catalog (HttpBankCatalog, None for the built-in list)
            clock: Millisecond clock for the highlight (default: MonotonicClock)
            sink: Renderer snapshot sink (None to publish nowhere)
            instruments: Initial instrument rows
            measure: Initial beats per cycle
            bpm: Initial tempo
            bank: Initial sample bank
        """
        self._engine = engine
        self._catalog = catalog
        self._sink = sink

        self._grid = GridModel(instruments, measure)
        self._transport = TransportState(bpm=self._validate(TempoCommand, bpm=bpm).bpm, bank=bank)
        # Configured bank, restored by init() if the catalog offers it
        self._preferred_bank = bank
        self._transport.set_banks(list(FALLBACK_BANKS))
        self._compiler = PatternCompiler()
        self._scheduler = TransportScheduler(self._on_step, clock)

        # Tracks sent with the last successful play()
        self._tracks: list[TrackPattern] = []

        self._handlers: dict[str, tuple[type[BaseModel], Callable[[Any], Any]]] = {
            "play": (PlayCommand, lambda c: self.play()),
            "stop": (StopCommand, lambda c: self.stop()),
            "reset": (ResetCommand, lambda c: self.reset()),
            "add_instrument": (InstrumentCommand, lambda c: self.add_instrument(c.instrument)),
            "remove_instrument": (
                InstrumentCommand,
                lambda c: self.remove_instrument(c.instrument),
            ),
            "toggle_step": (
                ToggleStepCommand,
                lambda c: self.toggle_step(c.instrument, c.index),
            ),
            "set_subdivision": (
                SubdivisionCommand,
                lambda c: self.set_subdivision(c.instrument, c.index, c.subdivision),
            ),
            "update_tempo": (TempoCommand, lambda c: self.update_tempo(c.bpm)),
            "update_measure": (MeasureCommand, lambda c: self.update_measure(c.measure)),
            "update_bank": (BankCommand, lambda c: self.update_bank(c.bank)),
        }

    # ================================================================
    # Read access
    # ================================================================

    @property
    def grid(self) -> GridModel:
        """The grid (read only; mutate through the controller)."""
        return self._grid

    @property
    def engine(self) -> AudioEngine:
        return self._engine

    @property
    def is_playing(self) -> bool:
        return self._transport.is_playing

    @property
    def bpm(self) -> float:
        return self._transport.bpm

    @property
    def bank(self) -> str:
        return self._transport.bank

    @property
    def banks(self) -> list[str]:
        return list(self._transport.banks)

    @property
    def start_time(self) -> float | None:
        return self._scheduler.start_time

    @property
    def current_step(self) -> int:
        return self._scheduler.current_step

    @property
    def scheduler(self) -> TransportScheduler:
        return self._scheduler

    @property
    def tracks(self) -> list[TrackPattern]:
        """Tracks sent with the last successful play()."""
        return list(self._tracks)

    def step_duration_ms(self) -> float:
        """Highlight step duration for the current tempo and measure."""
        return step_duration_ms(
            self._transport.bpm, self._grid.measure, self._grid.steps_per_cycle
        )

    def compile_tracks(self) -> list[TrackPattern]:
        """Compile the current grid without playing it."""
        return self._compiler.compile_grid(
            self._grid, self._transport.bank, self._transport.bpm
        )

    def snapshot(self) -> SequencerSnapshot:
        """Observable state for renderers."""
        grid = self._grid
        return SequencerSnapshot(
            instruments=[
                InstrumentView(id=i, name=grid.display_name(i)) for i in grid.instruments
            ],
            measure=grid.measure,
            steps_per_cycle=grid.steps_per_cycle,
            bpm=self._transport.bpm,
            bank=self._transport.bank,
            banks=list(self._transport.banks),
            steps={
                i: [StepView(active=s.active, subdivision=s.subdivision) for s in grid.steps(i)]
                for i in grid.instruments
            },
            current_step=self._scheduler.current_step,
            is_playing=self._transport.is_playing,
        )

    # ================================================================
    # Lifecycle
    # ================================================================

    async def init(self) -> list[str]:
        """
        Load the bank catalog.

        Catalog failures are not fatal: the built-in bank list is used and
        the current bank is moved onto it if needed.

        Returns:
            The active bank list
        """
        banks: list[str] = []
        if self._catalog is not None:
            try:
                banks = await self._catalog.load()
            except CatalogUnavailable as e:
                logger.warning(f"Bank catalog unavailable, using built-in banks: {e}")

        if not banks:
            banks = list(FALLBACK_BANKS)

        if self._preferred_bank in banks:
            self._transport.bank = self._preferred_bank
        self._transport.set_banks(banks)
        logger.info(f"Loaded {len(banks)} bank(s), current bank: {self._transport.bank}")

        self._publish()
        return self.banks

    def play(self) -> list[TrackPattern]:
        """
        Compile every instrument, hand the tracks to the engine and start
        the highlight clock.

        Returns:
            The tracks sent to the engine

        Raises:
            ExternalEngineFailure: engine rejected the tracks; playback stays
                stopped and no highlight runs
            InvalidArgument: tempo gives no usable step duration (nothing is
                sent to the engine)
        """
        if self._transport.is_playing:
            self.stop()

        step_ms = self.step_duration_ms()
        if not step_ms > 0:
            raise InvalidArgument(
                f"Step duration must be positive, got {step_ms}ms at {self._transport.bpm} BPM"
            )

        tracks = self.compile_tracks()
        try:
            self._engine.play(tracks)
        except Exception as e:
            self._transport.is_playing = False
            logger.error(f"Audio engine failed to play: {e}")
            self._publish()
            raise ExternalEngineFailure(f"Audio engine failed to play: {e}") from e

        self._tracks = tracks
        self._transport.is_playing = True
        self._scheduler.start(step_ms, self._grid.steps_per_cycle)

        logger.info(
            f"Playback started: {len(tracks)} track(s), "
            f"{self._transport.bpm} BPM, bank {self._transport.bank}"
        )
        return tracks

    def stop(self) -> None:
        """
        Silence the engine and stop the highlight clock.

        No-op when already stopped.

        Raises:
            ExternalEngineFailure: engine failed to stop; local state is
                stopped regardless
        """
        if not self._transport.is_playing and not self._scheduler.running:
            return

        try:
            self._engine.stop()
        except Exception as e:
            logger.error(f"Audio engine failed to stop: {e}")
            raise ExternalEngineFailure(f"Audio engine failed to stop: {e}") from e
        finally:
            self._transport.is_playing = False
            self._scheduler.stop()

        logger.info("Playback stopped")

    # ================================================================
    # Grid intents
    # ================================================================

    def add_instrument(self, instrument: str) -> bool:
        """
        Add an instrument row. No-op (no restart) if already present.

        Returns:
            True if the instrument was added
        """
        cmd = self._validate(InstrumentCommand, instrument=instrument)
        checkpoint = self._checkpoint()
        if not self._grid.add_instrument(cmd.instrument):
            return False
        self._after_mutation(f"added {cmd.instrument}", checkpoint)
        return True

    def remove_instrument(self, instrument: str) -> bool:
        """
        Remove an instrument row and discard its steps and subdivisions.

        Returns:
            True if the instrument was removed
        """
        cmd = self._validate(InstrumentCommand, instrument=instrument)
        checkpoint = self._checkpoint()
        if not self._grid.remove_instrument(cmd.instrument):
            return False
        self._after_mutation(f"removed {cmd.instrument}", checkpoint)
        return True

    def toggle_step(self, instrument: str, index: int) -> bool:
        """
        Flip one step.

        Returns:
            The step's new active value

        Raises:
            OutOfRange: index outside the current cycle
            InvalidArgument: unknown instrument
        """
        cmd = self._validate(ToggleStepCommand, instrument=instrument, index=index)
        checkpoint = self._checkpoint()
        active = self._grid.toggle_step(cmd.instrument, cmd.index)
        self._after_mutation(f"toggled {cmd.instrument}[{cmd.index}]", checkpoint)
        return active

    def set_subdivision(self, instrument: str, index: int, subdivision: int) -> None:
        """
        Set a step's subdivision (1-4).

        Raises:
            InvalidArgument: subdivision outside 1-4 or unknown instrument
            OutOfRange: index outside the current cycle
        """
        cmd = self._validate(
            SubdivisionCommand, instrument=instrument, index=index, subdivision=subdivision
        )
        checkpoint = self._checkpoint()
        self._grid.set_subdivision(cmd.instrument, cmd.index, cmd.subdivision)
        self._after_mutation(
            f"{cmd.instrument}[{cmd.index}] subdivision={cmd.subdivision}", checkpoint
        )

    def update_measure(self, measure: int) -> None:
        """
        Change beats per cycle; steps beyond the new cycle are discarded.

        Raises:
            InvalidArgument: measure below 3
        """
        cmd = self._validate(MeasureCommand, measure=measure)
        checkpoint = self._checkpoint()
        self._grid.set_measure(cmd.measure)
        self._after_mutation(f"measure={cmd.measure}", checkpoint)

    def reset(self) -> None:
        """Clear every step back to defaults (instruments are kept)."""
        checkpoint = self._checkpoint()
        self._grid.reset()
        self._after_mutation("grid reset", checkpoint)

    # ================================================================
    # Transport intents
    # ================================================================

    def update_tempo(self, bpm: float) -> None:
        """
        Change tempo.

        Raises:
            InvalidArgument: bpm not positive
        """
        cmd = self._validate(TempoCommand, bpm=bpm)
        checkpoint = self._checkpoint()
        old_bpm = self._transport.bpm
        self._transport.bpm = cmd.bpm
        self._after_mutation(f"BPM {old_bpm} → {cmd.bpm}", checkpoint)

    def update_bank(self, bank: str) -> None:
        """
        Change sample bank.

        Raises:
            InvalidArgument: bank not in the active bank list
        """
        cmd = self._validate(BankCommand, bank=bank)
        if cmd.bank not in self._transport.banks:
            raise InvalidArgument(f"Unknown bank: {cmd.bank}")
        checkpoint = self._checkpoint()
        self._transport.bank = cmd.bank
        self._after_mutation(f"bank={cmd.bank}", checkpoint)

    # ================================================================
    # Dispatch (used by the HTTP layer)
    # ================================================================

    def dispatch(self, command: str, payload: dict[str, Any] | None = None) -> CommandResult:
        """
        Apply an intent by name.

        Args:
            command: Intent name (e.g. "toggle_step")
            payload: Intent payload, validated by the matching command model

        Returns:
            CommandResult with the snapshot as data on success, or the
            error code of the raised BeatgridError
        """
        entry = self._handlers.get(command)
        if entry is None:
            return CommandResult.error(f"Unknown command: {command}", code="unknown_command")

        model, handler = entry
        try:
            cmd = self._validate(model, **(payload or {}))
            handler(cmd)
        except BeatgridError as e:
            logger.debug(f"{command} rejected: {e}")
            return CommandResult.from_exception(e)

        return CommandResult.ok(data=self.snapshot().model_dump())

    # ================================================================
    # Internal
    # ================================================================

    @staticmethod
    def _validate(model: type[Any], **payload: Any) -> Any:
        try:
            return model(**payload)
        except ValidationError as e:
            raise InvalidArgument(f"Invalid {model.__name__}: {e}") from e

    def _checkpoint(self) -> tuple[GridModel, float, str]:
        return self._grid.copy(), self._transport.bpm, self._transport.bank

    def _after_mutation(self, description: str, checkpoint: tuple[GridModel, float, str]) -> None:
        """
        Publish, or restart playback when playing.

        A failed restart rolls the mutation back before re-raising, so the
        caller sees the grid and transport exactly as they were.
        """
        if not self._transport.is_playing:
            logger.debug(f"Grid changed ({description})")
            self._publish()
            return

        logger.debug(f"Restarting playback ({description})")
        try:
            self.stop()
            self.play()
        except BeatgridError:
            self._grid, self._transport.bpm, self._transport.bank = checkpoint
            logger.warning(f"Restart failed, reverted ({description})")
            self._publish()
            raise

    def _on_step(self, step: int) -> None:
        self._publish()

    def _publish(self) -> None:
        if self._sink is not None:
            self._sink.publish(self.snapshot())
