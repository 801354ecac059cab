"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag


class Color(IntEnum):
    """Side color, stored as the colour flag of an encoded square value."""

    WHITE = 0
    BLACK = 64

    @property
    def opposite(self) -> Color:
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """One-hot piece type bits used by the square encoding."""

    KING = 1
    QUEEN = 2
    ROOK = 4
    BISHOP = 8
    KNIGHT = 16
    PAWN = 32


class CastlingRights(IntFlag):
    """Packed castling availability, ``KQkq`` from high to low bit."""

    NONE = 0
    BLACK_QUEENSIDE = 1
    BLACK_KINGSIDE = 2
    WHITE_QUEENSIDE = 4
    WHITE_KINGSIDE = 8

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def kingside(cls, color: Color) -> CastlingRights:
        return cls.WHITE_KINGSIDE if color == Color.WHITE else cls.BLACK_KINGSIDE

    @classmethod
    def queenside(cls, color: Color) -> CastlingRights:
        return cls.WHITE_QUEENSIDE if color == Color.WHITE else cls.BLACK_QUEENSIDE

    @classmethod
    def both(cls, color: Color) -> CastlingRights:
        return cls.WHITE_BOTH if color == Color.WHITE else cls.BLACK_BOTH
