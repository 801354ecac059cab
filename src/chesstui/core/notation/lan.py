"""Long algebraic move text (``e2e4``, ``e7e8q``, ``O-O``) → :class:`Move`."""

from __future__ import annotations

import re

from chesstui.core.enums import Color, PieceType
from chesstui.core.errors import MoveParsingError
from chesstui.core.move import Move
from chesstui.core.piece import Piece
from chesstui.core.types import parse_square

_LAN_RE = re.compile(r"^([a-h][1-8])-?([a-h][1-8])=?([qrbn])?$")
_KINGSIDE = frozenset({"0-0", "O-O"})
_QUEENSIDE = frozenset({"0-0-0", "O-O-O"})
_PROMO_TYPES: dict[str, PieceType] = {
    "q": PieceType.QUEEN,
    "r": PieceType.ROOK,
    "b": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
}


def parse_move(text: str, side_to_move: Color) -> Move:
    """Parse move text for *side_to_move*.

    The colour is needed to resolve castling shorthands and to give the
    promotion piece its colour.
    """
    token = text.strip()
    if token.upper() in _KINGSIDE:
        return Move.castle_kingside(side_to_move)
    if token.upper() in _QUEENSIDE:
        return Move.castle_queenside(side_to_move)

    match = _LAN_RE.match(token.lower())
    if match is None:
        raise MoveParsingError(text)

    from_name, to_name, promo = match.groups()
    promotion = None
    if promo is not None:
        promotion = Piece(side_to_move, _PROMO_TYPES[promo])
    return Move(parse_square(from_name), parse_square(to_name), promotion=promotion)
