"""
services/renderer.py – Build display entries and push them to a display.

The renderer knows nothing about widgets; it talks to any object that
satisfies ResultsDisplay (the Qt worker, or a fake in tests).
"""

import logging
from typing import List, Protocol, Sequence

from models.game_record import DisplayEntry, GameRecord
from services.config import SearchConfig

logger = logging.getLogger(__name__)


class ResultsDisplay(Protocol):
    def clear(self) -> None: ...

    def set_busy(self, busy: bool) -> None: ...

    def show(self, entries: List[DisplayEntry]) -> None: ...


class Renderer:
    def __init__(self, display: ResultsDisplay, config: SearchConfig) -> None:
        self._display = display
        self._config = config

    def clear(self) -> None:
        """Empty the list and drop the busy indicator."""
        self._display.clear()
        self._display.set_busy(False)

    def set_busy(self, busy: bool) -> None:
        self._display.set_busy(busy)

    def render(self, records: Sequence[GameRecord]) -> List[DisplayEntry]:
        """Replace the display contents with the first ``result_cap`` records."""
        entries = [self.entry_for(r) for r in records[: self._config.result_cap]]
        self._display.show(entries)
        return entries

    def entry_for(self, record: GameRecord) -> DisplayEntry:
        return DisplayEntry(
            target=f"game/{_numeric_id(record.id)}",
            label=self._label(record),
            record=record,
        )

    def _label(self, record: GameRecord) -> str:
        if not self._config.show_year:
            return record.name
        return f"{record.name} ({record.year or self._config.year_placeholder})"


def _numeric_id(game_id: str) -> int:
    try:
        return int(game_id)
    except ValueError:
        logger.debug("Non-numeric catalogue id %r rendered as 0", game_id)
        return 0
