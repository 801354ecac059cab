"""Square coordinates and helpers.

Board layout follows FEN order, rank 8 first:
    a8=0, b8=1, ..., h8=7
    a7=8, b7=9, ..., h7=15
    ...
    a1=56, b1=57, ..., h1=63

Three coordinate systems address the same 64 cells:

* :class:`Algebraic`: ``rank`` is the 0-based column (a=0) and ``file`` the
  0-based row counted from White's side (1=0), so ``Algebraic(0, 7)`` is a8.
* :class:`Relative`: ``col``/``row`` as seen on screen, top-left first,
  optionally mirrored when the board is displayed flipped.
* :class:`Index`: the raw array index.

Any two coordinates compare equal when they resolve to the same index.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

Square: TypeAlias = int  # 0–63

_FILES = "abcdefgh"


class Coordinate:
    """Base of the coordinate variants; equality and hashing use :attr:`ix`."""

    __slots__ = ()

    @property
    def ix(self) -> Square:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Coordinate):
            return self.ix == other.ix
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.ix)

    def __str__(self) -> str:
        return square_name(self.ix)

    def to_algebraic(self) -> Algebraic:
        ix = self.ix
        return Algebraic(rank=ix & 7, file=7 - (ix >> 3))

    def to_relative(self, flipped: bool = False) -> Relative:
        ix = 63 - self.ix if flipped else self.ix
        return Relative(col=ix & 7, row=ix >> 3, flipped=flipped)

    def to_index(self) -> Index:
        return Index(self.ix)


@dataclass(frozen=True, slots=True, eq=False)
class Algebraic(Coordinate):
    rank: int
    file: int

    @property
    def ix(self) -> Square:
        return (7 - self.file) * 8 + self.rank


@dataclass(frozen=True, slots=True, eq=False)
class Relative(Coordinate):
    col: int
    row: int
    flipped: bool = False

    @property
    def ix(self) -> Square:
        ix = self.col + self.row * 8
        return 63 - ix if self.flipped else ix


@dataclass(frozen=True, slots=True, eq=False)
class Index(Coordinate):
    value: int

    @property
    def ix(self) -> Square:
        return self.value


def to_index(sq: Coordinate | Square) -> Square:
    """Resolve any coordinate (or a raw index) to a raw index."""
    if isinstance(sq, Coordinate):
        return sq.ix
    return int(sq)


def is_valid_square(sq: int) -> bool:
    """Check whether integer is a valid square index."""
    return 0 <= sq < 64


def file_of(sq: Square) -> int:
    """Column 0–7 (a–h)."""
    return sq & 7


def row_of(sq: Square) -> int:
    """Array row 0–7, rank 8 first."""
    return sq >> 3


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. 0 → 'a8', 63 → 'h1'."""
    if not is_valid_square(sq):
        return f"#{sq}"
    return _FILES[file_of(sq)] + str(8 - row_of(sq))


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → 36."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return (8 - int(name[1])) * 8 + _FILES.index(name[0])


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = range(0, 8)
A7, B7, C7, D7, E7, F7, G7, H7 = range(8, 16)
A6, B6, C6, D6, E6, F6, G6, H6 = range(16, 24)
A5, B5, C5, D5, E5, F5, G5, H5 = range(24, 32)
A4, B4, C4, D4, E4, F4, G4, H4 = range(32, 40)
A3, B3, C3, D3, E3, F3, G3, H3 = range(40, 48)
A2, B2, C2, D2, E2, F2, G2, H2 = range(48, 56)
A1, B1, C1, D1, E1, F1, G1, H1 = range(56, 64)
