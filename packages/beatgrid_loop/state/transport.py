"""Transport state (tempo, bank, play flag)."""

from __future__ import annotations

from dataclasses import dataclass, field

from beatgrid_core.constants import DEFAULT_BANK, FALLBACK_BANKS


@dataclass
class TransportState:
    """Playback settings shared by the engine and the highlight clock."""

    bpm: float = 60.0
    bank: str = DEFAULT_BANK
    banks: list[str] = field(default_factory=lambda: list(FALLBACK_BANKS))
    is_playing: bool = False

    def set_banks(self, banks: list[str]) -> None:
        """
        Replace the active bank list.

        The current bank always stays a member: if it is missing from the
        new list it becomes the list's first entry.
        """
        self.banks = list(banks)
        if self.bank not in self.banks:
            self.bank = self.banks[0]
