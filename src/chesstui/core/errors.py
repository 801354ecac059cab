"""Exception hierarchy for the rules engine and its plumbing.

Every error raised by a :class:`~chesstui.core.position.Position` operation is
raised before the board is touched, so callers may simply report it and carry
on with the unchanged state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chesstui.core.move import Move


class ChessError(Exception):
    """Base class for every error raised by chesstui."""


# ── Piece decoding ───────────────────────────────────────────────────────────


class PieceError(ChessError, ValueError):
    """A square value or FEN character could not be decoded."""


class NoPieceFound(PieceError):
    def __init__(self) -> None:
        super().__init__("no piece at the given position")


class PieceEncodingError(PieceError):
    def __init__(self, value: int) -> None:
        super().__init__(f"piece encoding error: {value:#010b}")
        self.value = value


class UnknownCharacter(PieceError):
    def __init__(self, char: str) -> None:
        super().__init__(f"unknown FEN character: {char!r}")
        self.char = char


# ── Board access ─────────────────────────────────────────────────────────────


class BoardError(ChessError):
    """Invalid access to the board array."""


class OutOfBounds(BoardError):
    def __init__(self, index: int) -> None:
        super().__init__(f"tried to access a square out of bounds: {index}")
        self.index = index


# ── Moves ────────────────────────────────────────────────────────────────────


class MoveError(ChessError):
    """A move or selection request was rejected."""


class WrongTurn(MoveError):
    def __init__(self) -> None:
        super().__init__("tried to move a piece in the wrong turn")


class NoPieceGrabbed(MoveError):
    def __init__(self) -> None:
        super().__init__("tried to drop piece with no piece grabbed")


class IllegalMove(MoveError):
    def __init__(self, move: Move) -> None:
        super().__init__(f"tried to make an illegal move: {move}")
        self.move = move


# ── Text parsing ─────────────────────────────────────────────────────────────


class ParsingError(ChessError, ValueError):
    """Position or move text could not be parsed."""


class ErrorParsingFEN(ParsingError):
    def __init__(self, text: str) -> None:
        super().__init__(f"error parsing fen: {text!r}")
        self.text = text


class MoveParsingError(ParsingError):
    def __init__(self, text: str) -> None:
        super().__init__(f"error parsing move: {text!r}")
        self.text = text


# ── Console commands ─────────────────────────────────────────────────────────


class CommandError(ChessError):
    """A console line did not form a command."""


class NoCommand(CommandError):
    def __init__(self) -> None:
        super().__init__("no command received")


class InvalidCommand(CommandError):
    def __init__(self, text: str) -> None:
        super().__init__(f"invalid command: {text!r}")
        self.text = text


# ── External engine ──────────────────────────────────────────────────────────


class EngineError(ChessError):
    """The external UCI engine could not be started or talked to."""
