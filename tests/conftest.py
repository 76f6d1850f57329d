"""Shared fakes for the search pipeline tests."""
import asyncio
from typing import Dict, List, Optional, Tuple

from models.game_record import DisplayEntry, GameRecord


def make_games(prefix: str, count: int, start: int = 1) -> List[GameRecord]:
    """Build *count* records with ids start..start+count-1."""
    return [
        GameRecord(id=str(i), name=f"{prefix} {i}", year="2000")
        for i in range(start, start + count)
    ]


class FakeCatalog:
    """In-memory stand-in for CatalogClient.

    Responses are keyed by (kind, query) where kind is "text", "exact" or "id".
    A value that is an exception instance is raised instead of returned.
    ``delays`` lets a test hold a call open for a number of seconds.
    """

    def __init__(self, responses: Optional[Dict[Tuple[str, str], object]] = None,
                 delays: Optional[Dict[Tuple[str, str], float]] = None):
        self.responses = responses or {}
        self.delays = delays or {}
        self.calls: List[Tuple[str, str]] = []

    async def _answer(self, key: Tuple[str, str]) -> List[GameRecord]:
        self.calls.append(key)
        delay = self.delays.get(key)
        if delay:
            await asyncio.sleep(delay)
        value = self.responses.get(key, [])
        if isinstance(value, Exception):
            raise value
        return list(value)

    async def search_by_text(self, query: str, exact: bool = False) -> List[GameRecord]:
        return await self._answer(("exact" if exact else "text", query))

    async def lookup_by_id(self, game_id: str) -> List[GameRecord]:
        return await self._answer(("id", game_id))


class FakeDisplay:
    """Records every call the renderer makes, in order."""

    def __init__(self):
        self.events: List[tuple] = []
        self.entries: List[DisplayEntry] = []
        self.busy = False

    def clear(self) -> None:
        self.events.append(("clear",))
        self.entries = []

    def set_busy(self, busy: bool) -> None:
        self.events.append(("busy", busy))
        self.busy = busy

    def show(self, entries: List[DisplayEntry]) -> None:
        self.events.append(("show", len(entries)))
        self.entries = list(entries)


class StepClock:
    """Deterministic clock returning successive values from a list."""

    def __init__(self, *values: int):
        self._values = list(values)

    def __call__(self) -> int:
        return self._values.pop(0)

