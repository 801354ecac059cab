"""Qt bridge to an external UCI engine process."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from pathlib import Path

from PyQt6.QtCore import QObject, QProcess, pyqtSignal

from chesstui.core.errors import EngineError
from chesstui.core.notation import STARTING_FEN
from chesstui.engine.search import Evaluation
from chesstui.engine.uci import (
    IS_READY,
    QUIT,
    READY_OK,
    STOP,
    UCI,
    go_command,
    is_bestmove,
    parse_bestmove,
    parse_info,
    position_command,
)

_LOGGER = logging.getLogger(__name__)


class UciProcess(QObject):
    """Owns a UCI engine subprocess and turns its output into signals.

    Output is read through ``QProcess`` signals, so results arrive on the
    thread running the Qt event loop (or inside :meth:`wait_until_ready` /
    :meth:`wait_for_output`, which pump the process directly).
    """

    ready = pyqtSignal()
    evaluation_updated = pyqtSignal(object)
    best_move_ready = pyqtSignal(str)
    search_no_move = pyqtSignal()
    engine_error = pyqtSignal(str)

    def __init__(
        self,
        program: str | Path,
        arguments: Sequence[str] = (),
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._program = str(program)
        self._process = QProcess(self)
        self._process.setProgram(self._program)
        self._process.setArguments(list(arguments))
        self._process.readyReadStandardOutput.connect(self._on_ready_read)
        self._process.errorOccurred.connect(self._on_process_error)

        self._buffer = ""
        self._fen = STARTING_FEN
        self._is_ready = False
        self._is_searching = False
        self._stale_best_moves = 0
        self._stop_pending = False
        self.name = ""

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    @property
    def is_searching(self) -> bool:
        return self._is_searching

    @property
    def is_running(self) -> bool:
        return self._process.state() != QProcess.ProcessState.NotRunning

    # ── Lifecycle ────────────────────────────────────────────────────────

    def start(self, timeout_ms: int = 5000) -> None:
        """Launch the executable and begin the UCI handshake."""
        _LOGGER.info("Starting UCI engine: %s", self._program)
        self._process.start()
        if not self._process.waitForStarted(timeout_ms):
            raise EngineError(
                f"Could not start engine {self._program!r}: "
                f"{self._process.errorString()}"
            )
        self._send(UCI)
        self._send(IS_READY)

    def wait_until_ready(self, timeout_ms: int = 5000) -> bool:
        """Block until ``readyok`` arrives or *timeout_ms* elapses."""
        return self.wait_for_output(lambda: self._is_ready, timeout_ms)

    def wait_for_output(
        self, condition: Callable[[], bool], timeout_ms: int = 5000
    ) -> bool:
        """Pump engine output until ``condition()`` holds or time runs out."""
        deadline = time.monotonic() + timeout_ms / 1000
        while not condition():
            remaining = int((deadline - time.monotonic()) * 1000)
            if remaining <= 0 or not self._process.waitForReadyRead(remaining):
                return bool(condition())
        return True

    def close(self, timeout_ms: int = 2000) -> None:
        """Ask the engine to quit, killing it if it does not comply."""
        if not self.is_running:
            return
        if self._is_searching:
            self.stop_search()
        self._send(QUIT)
        if not self._process.waitForFinished(timeout_ms):
            _LOGGER.warning("Engine did not quit in time, killing it")
            self._process.kill()
            self._process.waitForFinished(timeout_ms)
        self._is_ready = False

    # ── Search control ───────────────────────────────────────────────────

    def set_position(self, fen: str) -> None:
        """Remember *fen*; an active search is restarted on it."""
        self._fen = fen
        if not self._is_searching:
            return
        self._send(STOP)
        self._stale_best_moves += 1
        self._send(position_command(fen))
        self._send(go_command())

    def start_search(self) -> None:
        if self._is_searching:
            return
        # The reply to an earlier stop is still on its way.
        if self._stop_pending:
            self._stale_best_moves += 1
            self._stop_pending = False
        self._send(position_command(self._fen))
        self._send(go_command())
        self._is_searching = True

    def stop_search(self) -> None:
        if not self._is_searching:
            return
        self._send(STOP)
        self._is_searching = False
        self._stop_pending = True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _send(self, command: str) -> None:
        _LOGGER.debug("UCI send: %s", command)
        self._process.write(f"{command}\n".encode())

    def _on_ready_read(self) -> None:
        chunk = self._process.readAllStandardOutput().data().decode(errors="replace")
        *lines, self._buffer = (self._buffer + chunk).split("\n")
        for line in lines:
            self._handle_line(line.strip())

    def _handle_line(self, line: str) -> None:
        if not line:
            return
        _LOGGER.debug("UCI recv: %s", line)

        if line == READY_OK:
            self._is_ready = True
            self.ready.emit()
            return
        if line.startswith("id name "):
            self.name = line[len("id name ") :]
            return

        if is_bestmove(line):
            if self._stale_best_moves:
                self._stale_best_moves -= 1
                return
            self._is_searching = False
            self._stop_pending = False
            move = parse_bestmove(line)
            if move is None:
                self.search_no_move.emit()
            else:
                self.best_move_ready.emit(move)
            return

        # Reports from a search that is being replaced are dropped.
        if self._stale_best_moves:
            return
        evaluation = parse_info(line)
        if evaluation is not None:
            self.evaluation_updated.emit(evaluation)

    def _on_process_error(self, error: QProcess.ProcessError) -> None:
        message = self._process.errorString()
        _LOGGER.warning("Engine process error (%s): %s", error.name, message)
        self._is_searching = False
        self.engine_error.emit(message)
