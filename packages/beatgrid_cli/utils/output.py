"""Output formatting utilities"""

import json
import sys
from typing import Any

from rich.console import Console
from rich.table import Table

_TRACK_COLUMNS = (
    ("Instrument", "instrument", {"style": "cyan"}),
    ("Pattern", "pattern", {}),
    ("Steps", "steps_per_cycle", {"justify": "right"}),
    ("Bank", "bank", {}),
    ("BPM", "bpm", {"justify": "right"}),
)


class OutputFormatter:
    """Renders command results as rich text or as JSON envelopes"""

    def __init__(self, json_mode: bool = False, console: Console | None = None):
        """
        Args:
            json_mode: Print {"status": ..., ...} JSON instead of rich text
            console: Rich console for human mode
        """
        self.json_mode = json_mode
        self.console = console or Console()

    def success(self, message: str, data: Any = None) -> None:
        """Report success, listing list-valued data one item per line"""
        if self.json_mode:
            self._dump({"status": "success", "message": message, "data": data})
            return

        self.console.print(f"[green]✓[/green] {message}")
        if isinstance(data, dict):
            for key, value in data.items():
                if isinstance(value, list):
                    self.console.print(f"  [bold]{key}[/bold]")
                    for item in value:
                        self.console.print(f"    {item}", highlight=False)
                else:
                    self.console.print(f"  [bold]{key}[/bold]: {value}")

    def error(self, message: str, details: str | None = None) -> None:
        """Report an error on stderr"""
        if self.json_mode:
            self._dump({"status": "error", "message": message, "details": details}, err=True)
            return

        err = Console(stderr=True)
        err.print(f"[red]✗[/red] {message}")
        if details:
            err.print(f"  {details}", markup=False)

    def tracks(self, rows: list[dict[str, Any]]) -> None:
        """Compiled tracks as a table"""
        if self.json_mode:
            self._dump({"status": "success", "data": rows})
            return

        table = Table(title="Compiled patterns")
        for header, _, options in _TRACK_COLUMNS:
            table.add_column(header, **options)
        for row in rows:
            table.add_row(*(str(row[key]) for _, key, _ in _TRACK_COLUMNS))
        self.console.print(table)

    def text(self, body: str) -> None:
        """Code listing, printed without markup or wrapping"""
        if self.json_mode:
            self._dump({"status": "success", "data": body})
            return
        self.console.print(body, markup=False, highlight=False, soft_wrap=True)

    @staticmethod
    def _dump(payload: dict[str, Any], err: bool = False) -> None:
        print(json.dumps(payload, indent=2), file=sys.stderr if err else sys.stdout)
