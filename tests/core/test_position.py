"""Tests for Position: grab/drop, make_move, special moves and history."""

import pytest

from chesstui.core.enums import CastlingRights, Color, PieceType
from chesstui.core.errors import (
    IllegalMove,
    NoPieceFound,
    NoPieceGrabbed,
    OutOfBounds,
    WrongTurn,
)
from chesstui.core.move import Move
from chesstui.core.notation import STARTING_FEN
from chesstui.core.piece import Piece
from chesstui.core.position import Position, SelectionPhase
from chesstui.core.types import (
    A1,
    A6,
    A7,
    A8,
    C1,
    C8,
    D1,
    D2,
    D4,
    D5,
    D6,
    D7,
    D8,
    E1,
    E2,
    E3,
    E4,
    E5,
    E6,
    E7,
    E8,
    F1,
    F2,
    F3,
    G1,
    H1,
    H2,
    H3,
    H6,
    H7,
    Index,
)

CASTLING_FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"
WHITE_PAWN = Piece(Color.WHITE, PieceType.PAWN)
BLACK_PAWN = Piece(Color.BLACK, PieceType.PAWN)


def play(pos: Position, *moves: tuple[int, int]) -> None:
    for from_sq, to_sq in moves:
        pos.make_move(Move(from_sq, to_sq))


class TestConstruction:
    def test_initial_fen(self) -> None:
        assert Position.initial().as_fen() == STARTING_FEN

    def test_from_fen_fresh_state(self) -> None:
        pos = Position.from_fen(CASTLING_FEN)
        assert pos.selection.is_idle
        assert pos.history == ()
        assert pos.last_move is None
        assert pos.as_fen() == CASTLING_FEN

    def test_rejects_short_board(self) -> None:
        with pytest.raises(ValueError):
            Position([0] * 10)

    def test_piece_at(self) -> None:
        pos = Position.initial()
        assert pos.piece_at(E1) == Piece(Color.WHITE, PieceType.KING)
        with pytest.raises(NoPieceFound):
            pos.piece_at(E4)
        with pytest.raises(OutOfBounds):
            pos.piece_at(64)

    def test_copy_is_independent(self) -> None:
        pos = Position.initial()
        child = pos.copy()
        play(child, (E2, E4))
        assert pos.as_fen() == STARTING_FEN
        assert pos.history == ()
        assert len(child.history) == 1


class TestGrabDrop:
    def test_grab_empty_square(self) -> None:
        pos = Position.initial()
        with pytest.raises(NoPieceFound):
            pos.grab(E4)
        assert pos.selection.is_idle

    def test_grab_wrong_turn(self) -> None:
        pos = Position.initial()
        with pytest.raises(WrongTurn):
            pos.grab(E7)
        assert pos.selection.is_idle

    def test_grab_out_of_bounds(self) -> None:
        with pytest.raises(OutOfBounds):
            Position.initial().grab(Index(64))

    def test_drop_without_grab(self) -> None:
        pos = Position.initial()
        with pytest.raises(NoPieceGrabbed):
            pos.drop(E4)
        assert pos.as_fen() == STARTING_FEN

    def test_drop_out_of_bounds(self) -> None:
        pos = Position.initial()
        pos.grab(E2)
        with pytest.raises(OutOfBounds):
            pos.drop(Index(-1))
        assert pos.selection.square == E2

    def test_grab_sets_selection(self) -> None:
        pos = Position.initial()
        pos.grab(E2)
        assert pos.selection.phase == SelectionPhase.SELECTED
        assert pos.selection.square == E2
        assert set(pos.legal_destinations()) == {E3, E4}

    def test_knight_destinations(self) -> None:
        pos = Position.initial()
        pos.grab(G1)
        assert set(pos.legal_destinations()) == {F3, H3}

    def test_idle_has_no_destinations(self) -> None:
        assert Position.initial().legal_destinations() == []

    def test_drop_moves_piece(self) -> None:
        pos = Position.initial()
        pos.grab(E2)
        pos.drop(E4)
        assert pos.board[E4] == WHITE_PAWN.value
        assert pos.board[E2] == 0
        assert pos.side_to_move == Color.BLACK
        assert pos.selection.is_idle

    def test_illegal_drop_keeps_selection(self) -> None:
        pos = Position.initial()
        pos.grab(E2)
        with pytest.raises(IllegalMove):
            pos.drop(E5)
        assert pos.selection.square == E2
        assert pos.side_to_move == Color.WHITE
        assert pos.as_fen() == STARTING_FEN

    def test_drop_auto_queens_white(self) -> None:
        pos = Position.from_fen("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
        pos.grab(E7)
        pos.drop(E8)
        assert pos.board[E8] == Piece(Color.WHITE, PieceType.QUEEN).value

    def test_drop_auto_queens_black(self) -> None:
        pos = Position.from_fen("4k3/8/8/8/8/8/3p4/K7 b - - 0 1")
        pos.grab(D2)
        pos.drop(D1)
        assert pos.board[D1] == Piece(Color.BLACK, PieceType.QUEEN).value

    def test_drop_castles(self) -> None:
        pos = Position.from_fen(CASTLING_FEN)
        pos.grab(E1)
        pos.drop(G1)
        assert pos.board[G1] == Piece(Color.WHITE, PieceType.KING).value
        assert pos.board[F1] == Piece(Color.WHITE, PieceType.ROOK).value


class TestMakeMove:
    def test_same_square_is_noop(self) -> None:
        pos = Position.initial()
        pos.make_move(Move(E2, E2))
        assert pos.side_to_move == Color.WHITE
        assert pos.history == ()

    def test_illegal_move_leaves_state(self) -> None:
        pos = Position.initial()
        with pytest.raises(IllegalMove) as excinfo:
            pos.make_move(Move(E2, E5))
        assert excinfo.value.move == Move(E2, E5)
        assert pos.as_fen() == STARTING_FEN
        assert pos.history == ()

    def test_history_records_piece(self) -> None:
        pos = Position.initial()
        play(pos, (E2, E4), (E7, E5))
        assert pos.history == (Move(E2, E4), Move(E7, E5))
        assert pos.history[0].piece == WHITE_PAWN
        assert pos.history[1].piece == BLACK_PAWN
        assert pos.last_move == pos.history[-1]

    def test_move_clears_pending_grab(self) -> None:
        pos = Position.initial()
        pos.grab(E2)
        pos.make_move(Move(D2, D4))
        assert pos.selection.is_idle
        assert pos.legal_destinations() == []

    def test_promotion_required(self) -> None:
        pos = Position.from_fen("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
        with pytest.raises(IllegalMove):
            pos.make_move(Move(E7, E8))

    def test_underpromotion(self) -> None:
        pos = Position.from_fen("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
        rook = Piece(Color.WHITE, PieceType.ROOK)
        pos.make_move(Move.with_promotion(E7, E8, rook))
        assert pos.board[E8] == rook.value

    def test_self_check_rejected(self) -> None:
        pos = Position.from_fen("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
        with pytest.raises(IllegalMove):
            pos.make_move(Move(E2, F3))

    def test_pass_turn(self) -> None:
        pos = Position.initial()
        pos.grab(E2)
        pos.pass_turn()
        assert pos.side_to_move == Color.BLACK
        assert pos.selection.is_idle
        assert pos.threats[E3]
        assert not pos.threats[E6]


class TestCheck:
    def test_in_check(self) -> None:
        pos = Position.from_fen("4k3/8/8/8/8/8/8/4K2r w - - 0 1")
        assert pos.is_in_check()

    def test_king_cannot_stay_on_ray(self) -> None:
        pos = Position.from_fen("4k3/8/8/8/8/8/8/4K2r w - - 0 1")
        assert {m.to_sq for m in pos.get_legal_moves()} == {D2, E2, F2}

    def test_not_in_check_at_start(self) -> None:
        assert not Position.initial().is_in_check()


class TestEnPassant:
    def _setup(self) -> Position:
        pos = Position.initial()
        play(pos, (E2, E4), (A7, A6), (E4, E5), (D7, D5))
        return pos

    def test_capture_removes_pushed_pawn(self) -> None:
        pos = self._setup()
        pos.make_move(Move(E5, D6))
        assert pos.board[D6] == WHITE_PAWN.value
        assert pos.board[D5] == 0
        assert pos.board[E5] == 0

    def test_generated_move_is_annotated(self) -> None:
        pos = self._setup()
        capture = next(m for m in pos.get_legal_moves() if m == Move(E5, D6))
        assert capture.en_passant == D5

    def test_only_immediately_after_push(self) -> None:
        pos = self._setup()
        play(pos, (H2, H3), (H7, H6))
        assert Move(E5, D6) not in pos.get_legal_moves()

    def test_not_after_single_steps(self) -> None:
        pos = Position.initial()
        play(pos, (E2, E4), (D7, D6), (E4, E5), (D6, D5))
        assert Move(E5, D6) not in pos.get_legal_moves()


class TestCastling:
    def test_kingside(self) -> None:
        pos = Position.from_fen(CASTLING_FEN)
        pos.make_move(Move(E1, G1))
        assert pos.board[H1] == 0
        assert pos.board[E1] == 0
        assert pos.as_fen() == "r3k2r/8/8/8/8/8/8/R4RK1 b kq - 0 1"

    def test_queenside(self) -> None:
        pos = Position.from_fen(CASTLING_FEN)
        pos.make_move(Move(E1, C1))
        assert pos.board[D1] == Piece(Color.WHITE, PieceType.ROOK).value
        assert pos.board[A1] == 0

    def test_black_castling(self) -> None:
        pos = Position.from_fen(CASTLING_FEN)
        play(pos, (A1, A6), (E8, C8))
        assert pos.board[D8] == Piece(Color.BLACK, PieceType.ROOK).value
        assert pos.castling == CastlingRights.WHITE_KINGSIDE

    def test_blocked(self) -> None:
        pos = Position.from_fen("r3k2r/8/8/8/8/8/8/R3KB1R w KQkq - 0 1")
        assert Move(E1, G1) not in pos.get_legal_moves()
        assert Move(E1, C1) in pos.get_legal_moves()

    def test_through_attacked_square(self) -> None:
        pos = Position.from_fen("r3k2r/8/8/8/8/8/5r2/R3K2R w KQkq - 0 1")
        legal = pos.get_legal_moves()
        assert Move(E1, G1) not in legal
        assert Move(E1, C1) in legal

    def test_out_of_check(self) -> None:
        pos = Position.from_fen("r3k2r/8/8/8/8/8/4r3/R3K2R w KQkq - 0 1")
        legal = pos.get_legal_moves()
        assert Move(E1, G1) not in legal
        assert Move(E1, C1) not in legal

    def test_requires_rook(self) -> None:
        pos = Position.from_fen("4k3/8/8/8/8/8/8/4K3 w KQ - 0 1")
        assert not any(m.is_castling for m in pos.get_legal_moves())

    def test_rook_move_revokes_one_side(self) -> None:
        pos = Position.from_fen(CASTLING_FEN)
        pos.make_move(Move(H1, H2))
        assert pos.castling == CastlingRights.WHITE_QUEENSIDE | CastlingRights.BLACK_BOTH

    def test_king_move_revokes_both(self) -> None:
        pos = Position.from_fen(CASTLING_FEN)
        pos.make_move(Move(E1, E2))
        assert pos.castling == CastlingRights.BLACK_BOTH

    def test_rook_capture_revokes_victim(self) -> None:
        pos = Position.from_fen(CASTLING_FEN)
        pos.make_move(Move(A1, A8))
        assert pos.castling == CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_KINGSIDE
