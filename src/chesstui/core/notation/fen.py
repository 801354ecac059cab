"""FEN parsing and serialization.

Parsing is lenient: unknown placement characters are skipped,
the rank separator is not counted, and missing trailing fields fall back to
defaults. Only an absent placement field is an error. The en-passant field
and the clocks are read past but not interpreted; serialisation always
writes ``- 0 1`` in their place.
"""

from __future__ import annotations

from typing import NamedTuple

from chesstui.core.enums import CastlingRights, Color
from chesstui.core.errors import ErrorParsingFEN, PieceError
from chesstui.core.piece import Piece

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)
_CASTLING_MAP: dict[str, CastlingRights] = dict(_CASTLING_CHARS)
_DIGITS = "0123456789"


class ParsedFen(NamedTuple):
    """Fields of a FEN string the engine interprets."""

    board: list[int]
    side_to_move: Color
    castling: CastlingRights


def parse_fen(fen: str) -> ParsedFen:
    """Parse a FEN string into board array, side to move and castling rights."""
    parts = fen.split()
    if not parts:
        raise ErrorParsingFEN(fen)

    # 1. Piece placement
    board = [0] * 64
    ix = 0
    for ch in parts[0]:
        if ch == "/":
            continue
        if ch in _DIGITS:
            ix += int(ch)
            continue
        try:
            piece = Piece.from_char(ch)
        except PieceError:
            continue
        if ix < 64:
            board[ix] = piece.value
        ix += 1

    # 2. Side to move
    side_part = parts[1] if len(parts) > 1 else "w"
    side = Color.WHITE if side_part[:1].lower() == "w" else Color.BLACK

    # 3. Castling
    castling = CastlingRights.NONE
    for ch in parts[2] if len(parts) > 2 else "":
        castling |= _CASTLING_MAP.get(ch, CastlingRights.NONE)

    # 4-6. En passant and clocks are not interpreted.
    return ParsedFen(board, side, castling)


def serialize_fen(
    board: list[int], side_to_move: Color, castling: CastlingRights
) -> str:
    """Serialise board, side to move and castling rights to FEN."""
    # 1. Board
    rows: list[str] = []
    for row_idx in range(8):
        empty = 0
        row = ""
        for value in board[row_idx * 8 : row_idx * 8 + 8]:
            if value == 0:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(Piece.decode(value))
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if castling & right)
    if not castling_str:
        castling_str = "-"

    return f"{board_str} {side_str} {castling_str} - 0 1"
