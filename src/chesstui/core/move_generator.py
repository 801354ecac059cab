"""Pseudo-legal and legal move generation + attack reach."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from chesstui.core.enums import CastlingRights, Color, PieceType
from chesstui.core.move import HOME_SQUARES, Move
from chesstui.core.piece import Piece
from chesstui.core.types import Square

if TYPE_CHECKING:
    from chesstui.core.position import Position


ROOK_DIRS: tuple[int, ...] = (-8, 8, -1, 1)
BISHOP_DIRS: tuple[int, ...] = (-9, -7, 7, 9)
QUEEN_DIRS: tuple[int, ...] = ROOK_DIRS + BISHOP_DIRS
KING_DIRS: tuple[int, ...] = QUEEN_DIRS
KNIGHT_LEAPS: tuple[int, ...] = (-17, -15, -10, -6, 6, 10, 15, 17)

_SLIDER_DIRS: dict[PieceType, tuple[int, ...]] = {
    PieceType.KING: KING_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.BISHOP: BISHOP_DIRS,
}

_PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

_COLOR_MASK = int(Color.BLACK)


# -- Stepping helpers --------------------------------------------------------


def _step(sq: Square, delta: int, max_file_shift: int = 1) -> Square | None:
    """Target of *delta* from *sq*, or ``None`` off-board or on a wrap."""
    to_sq = sq + delta
    if not 0 <= to_sq < 64:
        return None
    if abs((to_sq & 7) - (sq & 7)) > max_file_shift:
        return None
    return to_sq


def _ray(board: list[int], sq: Square, delta: int, single: bool) -> Iterator[Square]:
    """Walk from *sq* along *delta*, stopping on (and including) a blocker."""
    current = sq
    while True:
        nxt = _step(current, delta)
        if nxt is None:
            return
        yield nxt
        if single or board[nxt]:
            return
        current = nxt


def _color_of(value: int) -> Color:
    return Color(value & _COLOR_MASK)


def _pawn_geometry(color: Color) -> tuple[int, int, int, tuple[int, int]]:
    """forward delta, home row, last row, capture deltas."""
    if color == Color.WHITE:
        return -8, 6, 0, (-9, -7)
    return 8, 1, 7, (7, 9)


class MoveGenerator:
    """Generates moves for the side to move of a :class:`Position`.

    The generator only reads the position. Legality filtering is delegated
    to :meth:`Position.leaves_king_in_check` on a private scratch copy.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def get_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        scratch = self._pos.copy()
        return [
            move for move in self.get_all_moves() if not scratch.leaves_king_in_check(move)
        ]

    def get_all_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check), board order."""
        moves: list[Move] = []
        color = self._pos.side_to_move
        for sq, value in enumerate(self._board):
            if not value or _color_of(value) != color:
                continue
            ptype = PieceType(value & ~_COLOR_MASK)
            if ptype == PieceType.PAWN:
                self._gen_pawn(sq, color, moves)
            elif ptype == PieceType.KNIGHT:
                self._gen_knight(sq, color, moves)
            else:
                self._gen_sliding(sq, color, ptype, moves)
                if ptype == PieceType.KING:
                    self._gen_castling(sq, color, moves)
        return moves

    def attack_targets(self, color: Color) -> Iterator[Square]:
        """Every square *color* reaches: rays up to and including a blocker,
        knight leaps, king steps and pawn capture diagonals."""
        board = self._board
        for sq, value in enumerate(board):
            if not value or _color_of(value) != color:
                continue
            ptype = PieceType(value & ~_COLOR_MASK)
            if ptype == PieceType.PAWN:
                for delta in _pawn_geometry(color)[3]:
                    to_sq = _step(sq, delta)
                    if to_sq is not None:
                        yield to_sq
            elif ptype == PieceType.KNIGHT:
                for delta in KNIGHT_LEAPS:
                    to_sq = _step(sq, delta, max_file_shift=2)
                    if to_sq is not None:
                        yield to_sq
            else:
                single = ptype == PieceType.KING
                for delta in _SLIDER_DIRS[ptype]:
                    yield from _ray(board, sq, delta, single)

    # -- Piece-specific generators (private) -------------------------------

    def _is_enemy(self, sq: Square, color: Color) -> bool:
        value = self._board[sq]
        return bool(value) and _color_of(value) != color

    def _gen_sliding(
        self, sq: Square, color: Color, ptype: PieceType, moves: list[Move]
    ) -> None:
        board = self._board
        single = ptype == PieceType.KING
        for delta in _SLIDER_DIRS[ptype]:
            for to_sq in _ray(board, sq, delta, single):
                if not board[to_sq] or _color_of(board[to_sq]) != color:
                    moves.append(Move(sq, to_sq))

    def _gen_knight(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        for delta in KNIGHT_LEAPS:
            to_sq = _step(sq, delta, max_file_shift=2)
            if to_sq is None:
                continue
            if not board[to_sq] or _color_of(board[to_sq]) != color:
                moves.append(Move(sq, to_sq))

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        forward, home_row, last_row, capture_deltas = _pawn_geometry(color)

        one_step = sq + forward
        if 0 <= one_step < 64 and not board[one_step]:
            self._add_pawn_move(sq, one_step, color, last_row, moves)
            two_step = one_step + forward
            if sq >> 3 == home_row and not board[two_step]:
                moves.append(Move(sq, two_step))

        for delta in capture_deltas:
            cap_sq = _step(sq, delta)
            if cap_sq is not None and self._is_enemy(cap_sq, color):
                self._add_pawn_move(sq, cap_sq, color, last_row, moves)

        self._gen_en_passant(sq, color, moves)

    @staticmethod
    def _add_pawn_move(
        sq: Square, to_sq: Square, color: Color, last_row: int, moves: list[Move]
    ) -> None:
        if to_sq >> 3 != last_row:
            moves.append(Move(sq, to_sq))
            return
        for pt in _PROMOTION_TYPES:
            moves.append(Move.with_promotion(sq, to_sq, Piece(color, pt)))

    def _gen_en_passant(self, sq: Square, color: Color, moves: list[Move]) -> None:
        last = self._pos.last_move
        if last is None:
            return
        pushed = last.piece
        if pushed is None and self._board[last.to_sq]:
            pushed = Piece.decode(self._board[last.to_sq])
        if pushed is None or pushed.piece_type != PieceType.PAWN or pushed.color == color:
            return
        # Two-rank push along a single file.
        if abs((last.to_sq >> 3) - (last.from_sq >> 3)) != 2:
            return
        if (last.to_sq & 7) != (last.from_sq & 7):
            return
        # Pushed pawn stands beside the capturing pawn on the same row.
        if last.to_sq >> 3 != sq >> 3 or abs((last.to_sq & 7) - (sq & 7)) != 1:
            return
        if self._board[last.to_sq] != pushed.value:
            return
        to_sq = (last.from_sq + last.to_sq) // 2
        if self._board[to_sq]:
            return
        moves.append(Move.en_passant_capture(sq, to_sq, last.to_sq))

    def _gen_castling(self, sq: Square, color: Color, moves: list[Move]) -> None:
        king_home, kingside_rook, queenside_rook = HOME_SQUARES[color]
        if sq != king_home:
            return

        board = self._board
        threats = self._pos.threats
        rook = Piece(color, PieceType.ROOK).value
        rights = self._pos.castling

        if (
            rights & CastlingRights.kingside(color)
            and board[kingside_rook] == rook
            and not any(board[s] for s in range(sq + 1, kingside_rook))
            and not any(threats[s] for s in (sq, sq + 1, sq + 2))
        ):
            moves.append(Move.castle_kingside(color))

        if (
            rights & CastlingRights.queenside(color)
            and board[queenside_rook] == rook
            and not any(board[s] for s in range(queenside_rook + 1, sq))
            and not any(threats[s] for s in (sq, sq - 1, sq - 2))
        ):
            moves.append(Move.castle_queenside(color))
