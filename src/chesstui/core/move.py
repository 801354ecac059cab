"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chesstui.core.enums import Color, PieceType
from chesstui.core.piece import Piece
from chesstui.core.types import Coordinate, Square, square_name, to_index

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}

# King and rook home squares per colour: king, kingside rook, queenside rook.
HOME_SQUARES: dict[Color, tuple[Square, Square, Square]] = {
    Color.WHITE: (60, 63, 56),
    Color.BLACK: (4, 7, 0),
}


@dataclass(frozen=True, slots=True, eq=False)
class Move:
    """Immutable value object representing a single chess move.

    Only ``from_sq``, ``to_sq`` and ``promotion`` take part in equality.
    A move typed by the user carries none of the auxiliary fields, yet must
    match the annotated move produced by the generator.
    """

    from_sq: Square
    to_sq: Square
    promotion: Piece | None = None
    en_passant: Square | None = None  # captured pawn, not the destination
    castle: Move | None = None  # rook companion
    piece: Piece | None = None  # filled in when recorded into history

    def __post_init__(self) -> None:
        object.__setattr__(self, "from_sq", to_index(self.from_sq))
        object.__setattr__(self, "to_sq", to_index(self.to_sq))
        if self.en_passant is not None:
            object.__setattr__(self, "en_passant", to_index(self.en_passant))

    # ── Constructors ─────────────────────────────────────────────────────

    @classmethod
    def with_promotion(
        cls, from_sq: Coordinate | Square, to_sq: Coordinate | Square, promotion: Piece
    ) -> Move:
        return cls(from_sq, to_sq, promotion=promotion)

    @classmethod
    def en_passant_capture(
        cls,
        from_sq: Coordinate | Square,
        to_sq: Coordinate | Square,
        captured: Coordinate | Square,
    ) -> Move:
        return cls(from_sq, to_sq, en_passant=to_index(captured))

    @classmethod
    def castling(
        cls,
        king_from: Coordinate | Square,
        king_to: Coordinate | Square,
        rook_from: Coordinate | Square,
        rook_to: Coordinate | Square,
    ) -> Move:
        return cls(king_from, king_to, castle=cls(rook_from, rook_to))

    @classmethod
    def castle_kingside(cls, color: Color) -> Move:
        king, rook, _ = HOME_SQUARES[color]
        return cls.castling(king, king + 2, rook, king + 1)

    @classmethod
    def castle_queenside(cls, color: Color) -> Move:
        king, _, rook = HOME_SQUARES[color]
        return cls.castling(king, king - 2, rook, king - 1)

    def recorded(self, piece: Piece) -> Move:
        """Copy of this move carrying the identity of the moved piece."""
        return replace(self, piece=piece)

    # ── Equality ─────────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Move):
            return NotImplemented
        return (
            self.from_sq == other.from_sq
            and self.to_sq == other.to_sq
            and self.promotion == other.promotion
        )

    def __hash__(self) -> int:
        return hash((self.from_sq, self.to_sq, self.promotion))

    # ── Display ──────────────────────────────────────────────────────────

    @property
    def is_castling(self) -> bool:
        return self.castle is not None

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion.piece_type, "")
        return base

    def __repr__(self) -> str:
        return f"Move({self})"

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)
