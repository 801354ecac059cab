"""Notation package: FEN and long-algebraic move text."""

from chesstui.core.notation.fen import STARTING_FEN, ParsedFen, parse_fen, serialize_fen
from chesstui.core.notation.lan import parse_move

__all__ = [
    "STARTING_FEN",
    "ParsedFen",
    "parse_fen",
    "serialize_fen",
    "parse_move",
]
