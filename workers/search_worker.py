"""
workers/search_worker.py – Background QThread hosting the search event loop.

Signal contract
---------------
  cleared()            : Results list must be emptied
  busy_changed(bool)   : Busy indicator on / off
  results_ready(object): List[DisplayEntry] replacing the list contents
  error(str)           : User-friendly message when the loop itself dies

Every search job runs on this thread's single asyncio loop; the GUI thread
only hands over keystrokes through ``submit()``. Signals emitted here reach
the window through Qt's queued connections, in emission order.
"""

import asyncio
import logging
import threading
from typing import List, Optional

from PySide6.QtCore import QThread, Signal

from models.game_record import DisplayEntry
from services.catalog_client import CatalogClient
from services.config import SearchConfig
from services.search_orchestrator import SearchOrchestrator

logger = logging.getLogger(__name__)


class SearchWorker(QThread):
    """
    Runs the search orchestrator on a background thread.

    Instantiate, connect signals, call start(); call stop() before exit.
    """

    # ── Signals ───────────────────────────────────────────────────────────────
    cleared       = Signal()
    busy_changed  = Signal(bool)
    results_ready = Signal(object)
    error         = Signal(str)

    def __init__(self, config: SearchConfig, parent=None) -> None:
        super().__init__(parent)
        self._config = config
        self._orchestrator: Optional[SearchOrchestrator] = None
        self._stop_event: Optional[asyncio.Event] = None
        # Guards the hand-over state below, shared with the GUI thread.
        self._lock = threading.Lock()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._stop_requested = False
        self._pending_text: Optional[str] = None

    # ── ResultsDisplay (called on the worker thread) ──────────────────────────

    def clear(self) -> None:
        self.cleared.emit()

    def set_busy(self, busy: bool) -> None:
        self.busy_changed.emit(busy)

    def show(self, entries: List[DisplayEntry]) -> None:
        self.results_ready.emit(entries)

    # ── GUI-thread API ────────────────────────────────────────────────────────

    def submit(self, text: str) -> None:
        """
        Forward a keystroke to the orchestrator without blocking.

        Until the loop is up only the latest text is kept; it is replayed
        as soon as the loop starts.
        """
        with self._lock:
            if self._loop is None:
                self._pending_text = text
                return
            self._loop.call_soon_threadsafe(self._orchestrator.on_input, text)

    def stop(self) -> None:
        """Cancel in-flight searches and let the loop exit. Safe before start()."""
        with self._lock:
            self._stop_requested = True
            if self._loop is not None:
                self._loop.call_soon_threadsafe(self._stop_event.set)

    # ── QThread entry point ───────────────────────────────────────────────────

    def run(self) -> None:
        try:
            asyncio.run(self._serve())
        except Exception as exc:
            logger.exception("Search loop crashed")
            self.error.emit(f"Search stopped unexpectedly: {exc}")

    async def _serve(self) -> None:
        self._stop_event = asyncio.Event()
        async with CatalogClient(self._config) as client:
            self._orchestrator = SearchOrchestrator(client, self, self._config)
            with self._lock:
                if self._stop_requested:
                    return
                self._loop = asyncio.get_running_loop()
                pending, self._pending_text = self._pending_text, None
            try:
                logger.debug("Search loop ready")
                if pending is not None:
                    self._orchestrator.on_input(pending)
                await self._stop_event.wait()
                await self._orchestrator.shutdown()
            finally:
                # Closed loops must not receive call_soon_threadsafe().
                with self._lock:
                    self._loop = None
