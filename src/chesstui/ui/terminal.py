"""Terminal front end driven by a Qt event loop.

Console lines are read from stdin through a ``QSocketNotifier``; a ``QTimer``
ticks at the configured rate and refreshes a full-screen ``rich`` live display
when something changed.
Engine output arrives through :class:`~chesstui.engine.qt_bridge.UciProcess`
signals on the same loop.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from PyQt6.QtCore import QCoreApplication, QObject, QSocketNotifier, QTimer
from rich.console import Console, Group
from rich.live import Live
from rich.text import Text

from chesstui.config import AppConfig
from chesstui.engine.qt_bridge import UciProcess
from chesstui.engine.search import IEngine, NoopEngine
from chesstui.game.session import GameSession
from chesstui.ui.board_render import render_screen

_LOGGER = logging.getLogger(__name__)

PROMPT = "> "


class TerminalApp(QObject):
    """Owns the session, the engine process and the redraw loop."""

    def __init__(
        self,
        config: AppConfig,
        *,
        console: Console | None = None,
        stdin: TextIO | None = None,
        engine: IEngine | None = None,
    ) -> None:
        super().__init__()
        self._config = config
        self._console = console if console is not None else Console()
        self._stdin = stdin if stdin is not None else sys.stdin
        self._engine = engine if engine is not None else self._create_engine()
        self._session = GameSession(self._engine, fen=config.start_fen)
        self._session.events.on_changed.append(self._mark_dirty)
        self._session.events.on_quit.append(self._quit)
        self._connect_engine()
        self._dirty = True

        self._timer = QTimer(self)
        self._timer.setInterval(config.tickrate_ms)
        self._timer.timeout.connect(self._on_tick)
        self._notifier: QSocketNotifier | None = None
        self._live: Live | None = None

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    # ── Lifecycle ────────────────────────────────────────────────────────

    def run(self) -> int:
        """Run the event loop until the user quits; returns the exit code."""
        app = QCoreApplication.instance()
        if app is None:
            app = QCoreApplication(sys.argv[:1])

        self._notifier = QSocketNotifier(
            self._stdin.fileno(), QSocketNotifier.Type.Read, self
        )
        self._notifier.activated.connect(self._on_stdin)
        self._timer.start()
        with Live(console=self._console, screen=True, auto_refresh=False) as live:
            self._live = live
            self.redraw()
            try:
                return app.exec()
            finally:
                self._live = None
                self._shutdown()

    def handle_line(self, line: str) -> None:
        """Feed one console line to the session."""
        self._session.execute(line)

    def redraw(self) -> None:
        """Refresh the live display in place, or print once outside :meth:`run`."""
        screen = Group(render_screen(self._session), Text(PROMPT))
        if self._live is not None:
            self._live.update(screen, refresh=True)
        else:
            self._console.print(screen)
        self._dirty = False

    # ── Internal helpers ─────────────────────────────────────────────────

    def _create_engine(self) -> IEngine:
        path = self._config.engine_path
        if path is None:
            return NoopEngine()
        engine = UciProcess(path, parent=self)
        engine.start()
        if not engine.wait_until_ready():
            _LOGGER.warning("Engine %s did not report readyok", path)
        return engine

    def _connect_engine(self) -> None:
        if not isinstance(self._engine, UciProcess):
            return
        self._engine.evaluation_updated.connect(self._session.on_evaluation)
        self._engine.best_move_ready.connect(self._session.on_best_move)
        self._engine.search_no_move.connect(self._session.on_search_no_move)
        self._engine.engine_error.connect(self._session.on_engine_error)

    def _on_stdin(self) -> None:
        line = self._stdin.readline()
        if not line:
            # EOF on stdin ends the session.
            self._quit()
            return
        self.handle_line(line.rstrip("\n"))

    def _on_tick(self) -> None:
        if self._dirty:
            self.redraw()

    def _mark_dirty(self) -> None:
        self._dirty = True

    def _quit(self) -> None:
        self._timer.stop()
        app = QCoreApplication.instance()
        if app is not None:
            app.quit()

    def _shutdown(self) -> None:
        if self._notifier is not None:
            self._notifier.setEnabled(False)
        self._engine.close()
