"""Piece value object and the single-square codec.

A square holds ``0`` when empty, otherwise exactly one :class:`PieceType` bit
optionally combined with the black colour flag (64).
"""

from __future__ import annotations

from dataclasses import dataclass

from chesstui.core.enums import Color, PieceType
from chesstui.core.errors import NoPieceFound, PieceEncodingError, UnknownCharacter

# FEN character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "K": (Color.WHITE, PieceType.KING),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "R": (Color.WHITE, PieceType.ROOK),
    "B": (Color.WHITE, PieceType.BISHOP),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "P": (Color.WHITE, PieceType.PAWN),
    "k": (Color.BLACK, PieceType.KING),
    "q": (Color.BLACK, PieceType.QUEEN),
    "r": (Color.BLACK, PieceType.ROOK),
    "b": (Color.BLACK, PieceType.BISHOP),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "p": (Color.BLACK, PieceType.PAWN),
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.KING): "♔",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.BLACK, PieceType.KING): "♚",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.PAWN): "♟",
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}

# Encoded value → (Color, PieceType); exactly the twelve legal encodings.
_VALUE_MAP: dict[int, tuple[Color, PieceType]] = {
    int(color) | int(ptype): (color, ptype) for color in Color for ptype in PieceType
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    piece_type: PieceType

    # ── Encoding ─────────────────────────────────────────────────────────

    @property
    def value(self) -> int:
        """Compact square value, e.g. black knight → ``0b01010000``."""
        return int(self.color) | int(self.piece_type)

    @classmethod
    def decode(cls, value: int) -> Piece:
        """Decode a square value.

        Raises :class:`NoPieceFound` for an empty square and
        :class:`PieceEncodingError` for any bit pattern that is not one of
        the twelve piece encodings.
        """
        if value == 0:
            raise NoPieceFound()
        try:
            color, ptype = _VALUE_MAP[value]
        except KeyError:
            raise PieceEncodingError(value) from None
        return cls(color, ptype)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise UnknownCharacter(char) from None
        return cls(color, ptype)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    # ── Predicates ───────────────────────────────────────────────────────

    @property
    def is_white(self) -> bool:
        return self.color == Color.WHITE

    def is_type(self, piece_type: PieceType) -> bool:
        return self.piece_type == piece_type
