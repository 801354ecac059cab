"""GameSession: glue between the console, the rules engine and the UCI engine.

Owns the current :class:`Position` and the engine handle. Every successful
move or position load is exported as FEN to the engine. Errors never escape
to the event loop; they are written to the console log instead.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field

from chesstui.core.errors import ChessError, InvalidCommand
from chesstui.core.notation import STARTING_FEN, parse_move
from chesstui.core.position import Position
from chesstui.core.types import Square, parse_square
from chesstui.engine.search import Evaluation, IEngine, NoopEngine
from chesstui.game.commands import HELP_ENTRIES, Command, CommandKind, parse_command

_LOGGER = logging.getLogger(__name__)

ChangeCallback = Callable[[], None]


@dataclass
class SessionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_changed: list[ChangeCallback] = field(default_factory=list)
    on_quit: list[ChangeCallback] = field(default_factory=list)


class GameSession:
    """Interactive session state: position, console log, engine report."""

    _LOG_LIMIT = 500

    __slots__ = (
        "_position",
        "_engine",
        "_handlers",
        "flipped",
        "should_quit",
        "log",
        "evaluation",
        "best_move",
        "events",
    )

    def __init__(self, engine: IEngine | None = None, fen: str | None = None) -> None:
        self._position = Position.from_fen(fen or STARTING_FEN)
        self._engine: IEngine = engine if engine is not None else NoopEngine()
        self.flipped = False
        self.should_quit = False
        self.log: deque[str] = deque(maxlen=self._LOG_LIMIT)
        self.evaluation: Evaluation | None = None
        self.best_move: str | None = None
        self.events = SessionEvents()
        self._handlers: dict[CommandKind, Callable[[str], None]] = {
            CommandKind.EXIT: lambda _arg: self.quit(),
            CommandKind.PRINT_FEN: lambda _arg: self.log_line(self.fen),
            CommandKind.SET_POSITION: self.load_fen,
            CommandKind.PLAY_MOVE: self.play,
            CommandKind.GRAB: lambda arg: self.grab(self._square(arg)),
            CommandKind.DROP: lambda arg: self.drop(self._square(arg)),
            CommandKind.START_SEARCH: lambda _arg: self.start_search(),
            CommandKind.STOP_SEARCH: lambda _arg: self.stop_search(),
            CommandKind.FLIP_BOARD: lambda _arg: self.flip_board(),
            CommandKind.PASS_TURN: lambda _arg: self.pass_turn(),
            CommandKind.LIST_MOVES: lambda _arg: self._log_legal_moves(),
            CommandKind.HISTORY: lambda _arg: self._log_history(),
            CommandKind.HELP: lambda _arg: self._log_help(),
            CommandKind.RESET: lambda _arg: self.load_fen(STARTING_FEN),
        }
        self._engine.set_position(self.fen)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._position

    @property
    def engine(self) -> IEngine:
        return self._engine

    @property
    def fen(self) -> str:
        return self._position.as_fen()

    # ── Console ──────────────────────────────────────────────────────────

    def execute(self, line: str) -> bool:
        """Run one console line. Returns ``False`` if it was rejected."""
        self.log_line(f"> {line}")
        try:
            command = parse_command(line)
            self.dispatch(command)
        except ChessError as exc:
            self._report(exc)
            return False
        finally:
            self._emit_changed()
        return True

    def dispatch(self, command: Command) -> None:
        self._handlers[command.kind](command.argument)

    def log_line(self, text: str) -> None:
        self.log.append(text)

    # ── Board operations ─────────────────────────────────────────────────

    def load_fen(self, fen: str) -> None:
        """Replace the position wholesale."""
        self._position = Position.from_fen(fen)
        self._position_changed()

    def play(self, text: str) -> None:
        """Play a move given in long algebraic notation."""
        move = parse_move(text, self._position.side_to_move)
        self._position.make_move(move)
        self._position_changed()

    def grab(self, square: Square) -> None:
        self._position.grab(square)

    def drop(self, square: Square) -> None:
        self._position.drop(square)
        self._position_changed()

    def pass_turn(self) -> None:
        self._position.pass_turn()
        self._position_changed()

    def flip_board(self) -> None:
        self.flipped = not self.flipped

    def quit(self) -> None:
        self.should_quit = True
        for cb in self.events.on_quit:
            cb()

    # ── Engine ───────────────────────────────────────────────────────────

    def start_search(self) -> None:
        self._engine.set_position(self.fen)
        self._engine.start_search()

    def stop_search(self) -> None:
        self._engine.stop_search()

    def on_evaluation(self, evaluation: Evaluation) -> None:
        self.evaluation = evaluation
        self._emit_changed()

    def on_best_move(self, move: str) -> None:
        self.best_move = move
        self.log_line(f"bestmove {move}")
        self._emit_changed()

    def on_search_no_move(self) -> None:
        self.best_move = None
        self.log_line("engine found no move")
        self._emit_changed()

    def on_engine_error(self, message: str) -> None:
        _LOGGER.warning("Engine error: %s", message)
        self.log_line(f"ERR: engine: {message}")
        self._emit_changed()

    # ── Internal helpers ─────────────────────────────────────────────────

    @staticmethod
    def _square(text: str) -> Square:
        try:
            return parse_square(text.strip().lower())
        except ValueError:
            raise InvalidCommand(text) from None

    def _position_changed(self) -> None:
        self.evaluation = None
        self.best_move = None
        self._engine.set_position(self.fen)

    def _log_legal_moves(self) -> None:
        moves = self._position.get_legal_moves()
        self.log_line(f"{len(moves)} legal moves: {' '.join(m.uci for m in moves)}")

    def _log_history(self) -> None:
        history = self._position.history
        if not history:
            self.log_line("no moves played")
            return
        for ply, move in enumerate(history):
            prefix = f"{ply // 2 + 1}." if ply % 2 == 0 else "..."
            piece = move.piece.symbol if move.piece is not None else ""
            self.log_line(f"{prefix} {piece}{move.uci}")

    def _log_help(self) -> None:
        width = max(len(key) for key, _ in HELP_ENTRIES)
        for key, description in HELP_ENTRIES:
            self.log_line(f"{key:<{width}} - {description}")

    def _report(self, exc: ChessError) -> None:
        _LOGGER.info("Command rejected: %s", exc)
        self.log_line(f"ERR: {exc}")

    def _emit_changed(self) -> None:
        for cb in self.events.on_changed:
            cb()
