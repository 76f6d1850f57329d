"""
main_window.py – BoardSearch main window.

Layout
------
  ┌──────────────────────────────────────────────────────┐
  │  [Search bar]                                        │  ← TOP
  ├──────────────────────────────────────────────────────┤
  │                                                      │
  │  Results list (QListWidget, double-click to open)    │
  │                                                      │
  ├──────────────────────────────────────────────────────┤
  │  Busy indicator                                      │  ← BOTTOM
  │  Status log (QPlainTextEdit, read-only)              │
  └──────────────────────────────────────────────────────┘
"""

from __future__ import annotations

import datetime
import logging
from typing import List

from PySide6.QtCore import QObject, Qt, QUrl, Signal, Slot
from PySide6.QtGui import QDesktopServices, QFont
from PySide6.QtWidgets import (
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QPlainTextEdit,
    QProgressBar,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from models.game_record import DisplayEntry
from services.config import SearchConfig
from workers.search_worker import SearchWorker

# ── Theme ─────────────────────────────────────────────────────────────────────
_SURFACE    = "#f6f1e7"
_PANEL      = "#fffdf8"
_INK        = "#2b2620"
_INK_MUTED  = "#8a7f70"
_HIGHLIGHT  = "#c0572f"
_RULE       = "#ddd3c2"
_LOG_WARN   = "#b7791f"
_LOG_ERROR  = "#c53030"

_STYLESHEET = f"""
QWidget {{ background: {_SURFACE}; color: {_INK}; font-size: 13px; }}
QLineEdit#searchBar, QListWidget#resultList, QPlainTextEdit#logArea {{
    background: {_PANEL};
    border: 1px solid {_RULE};
    border-radius: 4px;
}}
QLineEdit#searchBar {{ padding: 6px 10px; }}
QLineEdit#searchBar:focus {{ border-color: {_HIGHLIGHT}; }}
QListWidget#resultList::item {{ padding: 6px 10px; }}
QListWidget#resultList::item:selected {{ background: {_HIGHLIGHT}; color: {_PANEL}; }}
QProgressBar {{ border: 1px solid {_RULE}; border-radius: 3px; text-align: center; }}
QProgressBar::chunk {{ background: {_HIGHLIGHT}; }}
QPlainTextEdit#logArea {{ color: {_INK_MUTED}; font-family: monospace; font-size: 12px; }}
QStatusBar {{ color: {_INK_MUTED}; border-top: 1px solid {_RULE}; }}
"""


class MainWindow(QMainWindow):
    """Primary application window."""

    def __init__(self, config: SearchConfig) -> None:
        super().__init__()
        self.setWindowTitle("BoardSearch  ·  Board Game Lookup")
        self.setMinimumSize(720, 560)
        self.resize(900, 700)
        self.setStyleSheet(_STYLESHEET)

        self._config = config
        self._worker = SearchWorker(config, parent=self)
        self._log_bridge = _LogBridge(self)

        self._build_ui()
        self._connect_signals()
        self._worker.start()
        self._set_status("Type a game name or catalogue id.")

    # ── UI construction ───────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QWidget()
        self.setCentralWidget(root)
        layout = QVBoxLayout(root)
        layout.setContentsMargins(24, 24, 24, 16)
        layout.setSpacing(16)

        self._search_bar = QLineEdit()
        self._search_bar.setObjectName("searchBar")
        self._search_bar.setPlaceholderText("Search board games…")
        self._search_bar.setClearButtonEnabled(True)
        self._search_bar.setMinimumHeight(40)
        self._search_bar.setFont(QFont('Segoe UI', 15))
        layout.addWidget(self._search_bar)

        self._result_list = QListWidget()
        self._result_list.setObjectName("resultList")
        self._result_list.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        layout.addWidget(self._result_list, stretch=1)

        self._progress_bar = QProgressBar()
        self._progress_bar.setRange(0, 1)
        self._progress_bar.setValue(0)
        self._progress_bar.setFormat("Idle")
        self._progress_bar.setFixedHeight(20)
        layout.addWidget(self._progress_bar)

        self._log_area = QPlainTextEdit()
        self._log_area.setObjectName("logArea")
        self._log_area.setReadOnly(True)
        self._log_area.setMaximumBlockCount(500)
        self._log_area.setFixedHeight(120)
        layout.addWidget(self._log_area)

        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)

    # ── Signal wiring ─────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._search_bar.textChanged.connect(self._worker.submit)
        self._result_list.itemActivated.connect(self._on_entry_activated)
        self._worker.cleared.connect(self._on_cleared)
        self._worker.busy_changed.connect(self._on_busy_changed)
        self._worker.results_ready.connect(self._on_results_ready)
        self._worker.error.connect(self._on_worker_error)
        self._log_bridge.record.connect(self._on_log_record)

    # ── Slots ─────────────────────────────────────────────────────────────────

    @Slot()
    def _on_cleared(self) -> None:
        self._result_list.clear()
        self._set_status("Type a game name or catalogue id.")

    @Slot(bool)
    def _on_busy_changed(self, busy: bool) -> None:
        if busy:
            self._progress_bar.setRange(0, 0)  # indeterminate
            self._progress_bar.setFormat("Searching…")
        else:
            self._progress_bar.setRange(0, 1)
            self._progress_bar.setValue(0)
            self._progress_bar.setFormat("Idle")

    @Slot(object)
    def _on_results_ready(self, entries: List[DisplayEntry]) -> None:
        self._result_list.clear()
        for entry in entries:
            item = QListWidgetItem(entry.label)
            item.setData(Qt.ItemDataRole.UserRole, entry)
            item.setToolTip(entry.target)
            self._result_list.addItem(item)
        self._set_status(f"{len(entries)} games shown.")

    @Slot(QListWidgetItem)
    def _on_entry_activated(self, item: QListWidgetItem) -> None:
        entry: DisplayEntry = item.data(Qt.ItemDataRole.UserRole)
        url = f"{self._config.site_url}/{entry.target}"
        self._log(f"Opening {url}")
        QDesktopServices.openUrl(QUrl(url))

    @Slot(str)
    def _on_worker_error(self, msg: str) -> None:
        self._log(msg, level=logging.ERROR)
        self._set_status("Search unavailable – see log.")

    @Slot(int, str)
    def _on_log_record(self, level: int, msg: str) -> None:
        self._log(msg, level=level)

    # ── UI helpers ────────────────────────────────────────────────────────────

    def _set_status(self, msg: str) -> None:
        self._status_bar.showMessage(msg)

    def _log(self, msg: str, *, level: int = logging.INFO) -> None:
        ts = datetime.datetime.now().strftime("%H:%M:%S")
        if level >= logging.ERROR:
            line = f'<span style="color:{_LOG_ERROR}">[{ts}] ✗  {msg}</span>'
        elif level >= logging.WARNING:
            line = f'<span style="color:{_LOG_WARN}">[{ts}] !  {msg}</span>'
        else:
            line = f'<span style="color:{_INK_MUTED}">[{ts}]  {msg}</span>'
        self._log_area.appendHtml(line)
        sb = self._log_area.verticalScrollBar()
        sb.setValue(sb.maximum())

    # ── Qt overrides ──────────────────────────────────────────────────────────

    def closeEvent(self, event) -> None:
        self._log_bridge.detach()
        self._worker.stop()
        self._worker.wait(5000)
        super().closeEvent(event)


# ── Logging bridge ────────────────────────────────────────────────────────────


class _LogBridge(QObject):
    """Forwards WARNING+ records from any thread to the log area."""

    record = Signal(int, str)

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self._handler = _SignalHandler(self)
        self._handler.setLevel(logging.WARNING)
        logging.getLogger().addHandler(self._handler)

    def detach(self) -> None:
        logging.getLogger().removeHandler(self._handler)


class _SignalHandler(logging.Handler):
    def __init__(self, bridge: _LogBridge) -> None:
        super().__init__()
        self._bridge = bridge

    def emit(self, record: logging.LogRecord) -> None:
        self._bridge.record.emit(record.levelno, self.format(record))
