"""
services/query_planner.py – Decide which catalogue calls a query needs.

Strategies, highest priority first:

  1. Identifier lookup  – only when the query is a canonical decimal integer.
  2. Exact name search  – only when the fuzzy search is large (noisy).
  3. Fuzzy name search  – always.

The identifier lookup and the fuzzy→exact chain run concurrently; both must
finish (the ``gather`` below) before anything is handed to the merger.
A failing call contributes no records instead of aborting the search.
"""

import asyncio
import logging
from typing import Awaitable, List, Protocol

from models.game_record import GameRecord
from services.config import EXACT_MATCH_THRESHOLD
from services.exceptions import CatalogError

logger = logging.getLogger(__name__)


class CatalogLookup(Protocol):
    async def search_by_text(self, query: str, exact: bool = False) -> List[GameRecord]: ...

    async def lookup_by_id(self, game_id: str) -> List[GameRecord]: ...


def is_canonical_integer(query: str) -> bool:
    """True when *query* is exactly the printed form of a base-10 integer."""
    try:
        return str(int(query, 10)) == query
    except ValueError:
        return False


class QueryPlanner:
    def __init__(
        self,
        client: CatalogLookup,
        exact_match_threshold: int = EXACT_MATCH_THRESHOLD,
    ) -> None:
        self._client = client
        self._threshold = exact_match_threshold

    async def plan(self, query: str) -> List[GameRecord]:
        """
        Run every strategy that applies to *query*.

        Returns
        -------
        List[GameRecord]
            ``[id matches] + [exact matches] + [fuzzy matches]``, duplicates
            included; de-duplication is the merger's job.
        """
        if not query:
            return []

        by_id: Awaitable[List[GameRecord]]
        if is_canonical_integer(query):
            by_id = self._guarded("id lookup", self._client.lookup_by_id(query))
        else:
            by_id = _nothing()

        id_matches, text_matches = await asyncio.gather(by_id, self._text_matches(query))
        return id_matches + text_matches

    async def _text_matches(self, query: str) -> List[GameRecord]:
        base = await self._guarded("text search", self._client.search_by_text(query))
        # Threshold applies to the raw fuzzy count only.
        if len(base) <= self._threshold:
            return base
        logger.debug("%d fuzzy results for %r, adding exact matches", len(base), query)
        exact = await self._guarded(
            "exact search", self._client.search_by_text(query, exact=True)
        )
        return exact + base

    @staticmethod
    async def _guarded(label: str, call: Awaitable[List[GameRecord]]) -> List[GameRecord]:
        try:
            return list(await call)
        except CatalogError as exc:
            logger.warning("Catalogue %s failed: %s", label, exc)
            return []


async def _nothing() -> List[GameRecord]:
    return []
