"""
services/search_orchestrator.py – Incremental search for one input field.

Flow
----
  on_input(text)
      → Debouncer (quiet period)
      → StalenessGuard.begin_job()       stamp the job before any await
      → QueryPlanner.plan()              concurrent catalogue calls, joined
      → result_merger.merge()            de-duplicate, keep priority order
      → StalenessGuard.is_superseded()   drop the job if a newer one started
      → Renderer.render()

A superseded job never touches the display: the list and the busy indicator
are left for the job that replaced it.
"""

import logging
from typing import List, Optional

from models.game_record import DisplayEntry
from services import result_merger
from services.config import SearchConfig
from services.debouncer import Debouncer
from services.query_planner import CatalogLookup, QueryPlanner
from services.renderer import Renderer, ResultsDisplay
from services.staleness_guard import StalenessGuard

logger = logging.getLogger(__name__)


class SearchOrchestrator:
    def __init__(
        self,
        client: CatalogLookup,
        display: ResultsDisplay,
        config: Optional[SearchConfig] = None,
        *,
        guard: Optional[StalenessGuard] = None,
        debouncer: Optional[Debouncer] = None,
    ) -> None:
        self._config = config or SearchConfig()
        self._planner = QueryPlanner(client, self._config.exact_match_threshold)
        self._renderer = Renderer(display, self._config)
        self._guard = guard or StalenessGuard()
        self._debouncer = debouncer or Debouncer()

    def on_input(self, text: str) -> None:
        """Keystroke trigger; the search runs once typing pauses."""
        self._debouncer.schedule(lambda: self.run_search(text), self._config.debounce_ms)

    async def run_search(self, query: str) -> Optional[List[DisplayEntry]]:
        """
        Execute one search job.

        Returns
        -------
        The rendered entries, or None when the job was superseded before it
        could render.
        """
        token = self._guard.begin_job()

        if not query:
            self._renderer.clear()
            return []

        self._renderer.set_busy(True)
        records = result_merger.merge(await self._planner.plan(query))

        if self._guard.is_superseded(token):
            logger.debug("Discarding stale results for %r", query)
            return None

        entries = self._renderer.render(records)
        self._renderer.set_busy(False)
        logger.info("%d results for %r (%d shown)", len(records), query, len(entries))
        return entries

    async def shutdown(self) -> None:
        """Cancel the pending search and any in flight, then wait for them to unwind."""
        self._debouncer.cancel()
        self._debouncer.cancel_running()
        await self._debouncer.join()
