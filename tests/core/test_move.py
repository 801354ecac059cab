"""Tests for the Move value object."""

from chesstui.core.enums import Color, PieceType
from chesstui.core.move import Move
from chesstui.core.piece import Piece
from chesstui.core.types import (
    A1,
    A8,
    C1,
    C8,
    D1,
    D5,
    D6,
    D8,
    E1,
    E2,
    E4,
    E5,
    E7,
    E8,
    F1,
    F8,
    G1,
    G8,
    H1,
    H8,
    Algebraic,
    Index,
)

WHITE_QUEEN = Piece(Color.WHITE, PieceType.QUEEN)


class TestMoveEquality:
    def test_coordinates_resolve_to_index(self) -> None:
        move = Move(Index(E2), Algebraic(rank=4, file=3))
        assert move.from_sq == E2
        assert move.to_sq == E4
        assert move == Move(E2, E4)

    def test_auxiliary_fields_ignored(self) -> None:
        plain = Move(E1, G1)
        castle = Move.castle_kingside(Color.WHITE)
        assert plain == castle
        assert hash(plain) == hash(castle)

    def test_en_passant_ignored(self) -> None:
        assert Move.en_passant_capture(E5, D6, D5) == Move(E5, D6)

    def test_recorded_piece_ignored(self) -> None:
        pawn = Piece(Color.WHITE, PieceType.PAWN)
        recorded = Move(E2, E4).recorded(pawn)
        assert recorded == Move(E2, E4)
        assert recorded.piece == pawn

    def test_promotion_distinguishes(self) -> None:
        rook = Piece(Color.WHITE, PieceType.ROOK)
        assert Move.with_promotion(E7, E8, WHITE_QUEEN) != Move(E7, E8)
        assert Move.with_promotion(E7, E8, WHITE_QUEEN) != Move.with_promotion(E7, E8, rook)

    def test_usable_in_sets(self) -> None:
        moves = {Move(E2, E4), Move(Index(E2), Index(E4)), Move(E1, G1)}
        assert len(moves) == 2


class TestMoveConstructors:
    def test_white_kingside(self) -> None:
        move = Move.castle_kingside(Color.WHITE)
        assert (move.from_sq, move.to_sq) == (E1, G1)
        assert move.castle is not None
        assert (move.castle.from_sq, move.castle.to_sq) == (H1, F1)
        assert move.is_castling

    def test_white_queenside(self) -> None:
        move = Move.castle_queenside(Color.WHITE)
        assert (move.from_sq, move.to_sq) == (E1, C1)
        assert move.castle is not None
        assert (move.castle.from_sq, move.castle.to_sq) == (A1, D1)

    def test_black_castling(self) -> None:
        kingside = Move.castle_kingside(Color.BLACK)
        queenside = Move.castle_queenside(Color.BLACK)
        assert (kingside.from_sq, kingside.to_sq) == (E8, G8)
        assert kingside.castle is not None
        assert (kingside.castle.from_sq, kingside.castle.to_sq) == (H8, F8)
        assert (queenside.from_sq, queenside.to_sq) == (E8, C8)
        assert queenside.castle is not None
        assert (queenside.castle.from_sq, queenside.castle.to_sq) == (A8, D8)

    def test_en_passant_records_captured_square(self) -> None:
        move = Move.en_passant_capture(E5, D6, Index(D5))
        assert move.en_passant == D5
        assert move.to_sq == D6
        assert not move.is_castling


class TestMoveDisplay:
    def test_uci_string(self) -> None:
        assert str(Move(E2, E4)) == "e2e4"
        assert Move(E2, E4).uci == "e2e4"

    def test_promotion_suffix(self) -> None:
        knight = Piece(Color.BLACK, PieceType.KNIGHT)
        assert str(Move.with_promotion(E7, E8, WHITE_QUEEN)) == "e7e8q"
        assert str(Move.with_promotion(E2, E1, knight)) == "e2e1n"

    def test_repr(self) -> None:
        assert repr(Move(E2, E4)) == "Move(e2e4)"
