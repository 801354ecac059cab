"""Position: complete game state and the only writer of the board array."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto

from chesstui.core.enums import CastlingRights, Color, PieceType
from chesstui.core.errors import IllegalMove, NoPieceGrabbed, OutOfBounds, WrongTurn
from chesstui.core.move import Move
from chesstui.core.move_generator import MoveGenerator
from chesstui.core.notation.fen import parse_fen, serialize_fen
from chesstui.core.piece import Piece
from chesstui.core.threats import compute_threat_map
from chesstui.core.types import Coordinate, Square, is_valid_square, to_index

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    0: CastlingRights.BLACK_QUEENSIDE,
    7: CastlingRights.BLACK_KINGSIDE,
    56: CastlingRights.WHITE_QUEENSIDE,
    63: CastlingRights.WHITE_KINGSIDE,
}


class SelectionPhase(IntEnum):
    """Two-phase grab/drop interaction states."""

    IDLE = auto()
    SELECTED = auto()


@dataclass(frozen=True, slots=True)
class Selection:
    """Current grab/drop selection: idle, or a grabbed square."""

    phase: SelectionPhase = SelectionPhase.IDLE
    square: Square | None = None

    @classmethod
    def idle(cls) -> Selection:
        return cls()

    @classmethod
    def selected(cls, square: Square) -> Selection:
        return cls(SelectionPhase.SELECTED, square)

    @property
    def is_idle(self) -> bool:
        return self.phase == SelectionPhase.IDLE


def _last_row(color: Color) -> int:
    return 0 if color == Color.WHITE else 7


class Position:
    """Board array + side to move + castling rights + last move + history.

    Every public mutator validates first and mutates afterwards, so a raised
    :class:`~chesstui.core.errors.ChessError` leaves the position untouched.
    The threat map is derived state, rebuilt whenever the board or the side
    to move changes.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "last_move",
        "selection",
        "threats",
        "_history",
    )

    def __init__(
        self,
        board: list[int] | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
    ) -> None:
        if board is None:
            board = self._initial_board()
        if len(board) != 64:
            raise ValueError(f"Board must have 64 squares, got {len(board)}")
        self.board: list[int] = list(board)
        self.side_to_move = side_to_move
        self.castling = castling
        self.last_move: Move | None = None
        self.selection = Selection.idle()
        self._history: list[Move] = []
        self.threats = compute_threat_map(self)

    # ── Construction / export ────────────────────────────────────────────

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position."""
        return cls()

    @classmethod
    def from_fen(cls, fen: str) -> Position:
        """Fresh position from FEN: no selection, empty history."""
        board, side, castling = parse_fen(fen)
        return cls(board, side, castling)

    def as_fen(self) -> str:
        return serialize_fen(self.board, self.side_to_move, self.castling)

    @staticmethod
    def _initial_board() -> list[int]:
        board = [0] * 64
        for f, pt in enumerate(_BACK_RANK):
            board[f] = Piece(Color.BLACK, pt).value
            board[8 + f] = Piece(Color.BLACK, PieceType.PAWN).value
            board[48 + f] = Piece(Color.WHITE, PieceType.PAWN).value
            board[56 + f] = Piece(Color.WHITE, pt).value
        return board

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def history(self) -> tuple[Move, ...]:
        """Moves played since construction, in play order."""
        return tuple(self._history)

    def piece_at(self, square: Coordinate | Square) -> Piece:
        ix = to_index(square)
        if not is_valid_square(ix):
            raise OutOfBounds(ix)
        return Piece.decode(self.board[ix])

    def king_square(self, color: Color) -> Square | None:
        try:
            return self.board.index(Piece(color, PieceType.KING).value)
        except ValueError:
            return None

    def is_in_check(self) -> bool:
        king = self.king_square(self.side_to_move)
        return king is not None and bool(self.threats[king])

    def get_all_moves(self) -> list[Move]:
        return MoveGenerator(self).get_all_moves()

    def get_legal_moves(self) -> list[Move]:
        return MoveGenerator(self).get_legal_moves()

    def is_legal(self, move: Move) -> bool:
        return move in self.get_legal_moves()

    def legal_destinations(self) -> list[Square]:
        """Destinations of the grabbed piece's legal moves (empty when idle)."""
        if self.selection.is_idle:
            return []
        origin = self.selection.square
        return list(
            dict.fromkeys(m.to_sq for m in self.get_legal_moves() if m.from_sq == origin)
        )

    # ── Grab / drop ──────────────────────────────────────────────────────

    def grab(self, square: Coordinate | Square) -> None:
        """Select the piece on *square* for a later :meth:`drop`."""
        piece = self.piece_at(square)
        if piece.color != self.side_to_move:
            raise WrongTurn()
        self.selection = Selection.selected(to_index(square))

    def drop(self, square: Coordinate | Square) -> None:
        """Move the grabbed piece to *square*; pawns always promote to a queen."""
        if self.selection.is_idle:
            raise NoPieceGrabbed()
        origin = self.selection.square
        assert origin is not None
        target = to_index(square)
        if not is_valid_square(target):
            raise OutOfBounds(target)

        piece = Piece.decode(self.board[origin])
        promotion = None
        if piece.piece_type == PieceType.PAWN and target >> 3 == _last_row(piece.color):
            promotion = Piece(piece.color, PieceType.QUEEN)

        self.make_move(Move(origin, target, promotion=promotion))
        self.selection = Selection.idle()

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> None:
        """Validate and apply *move*, recording it into the history.

        A pending grab is dropped once the move has been applied.
        """
        if move.from_sq == move.to_sq:
            return
        canonical = next((m for m in self.get_legal_moves() if m == move), None)
        if canonical is None:
            raise IllegalMove(move)

        piece = Piece.decode(self.board[canonical.from_sq])
        recorded = canonical.recorded(piece)
        self._history.append(recorded)

        self._apply(canonical)
        self._update_castling(canonical, piece)
        self.last_move = recorded
        self.selection = Selection.idle()
        self.side_to_move = self.side_to_move.opposite
        self.threats = compute_threat_map(self)

    def pass_turn(self) -> None:
        """Hand the move to the other side without moving a piece."""
        self.side_to_move = self.side_to_move.opposite
        self.selection = Selection.idle()
        self.threats = compute_threat_map(self)

    def leaves_king_in_check(self, move: Move) -> bool:
        """Would the mover's king stand attacked after *move*?

        Applies the move in place, rebuilds the threat map and restores both
        afterwards; call it on a scratch copy.
        """
        mover = self.side_to_move
        saved_threats = self.threats
        undo = self._apply(move)
        try:
            self.threats = compute_threat_map(self)
            king = self.king_square(mover)
            return king is not None and bool(self.threats[king])
        finally:
            self._restore(undo)
            self.threats = saved_threats

    # ── Board mutation (private) ─────────────────────────────────────────

    def _apply(self, move: Move) -> list[tuple[Square, int]]:
        """Apply *move* to the board, returning the squares it overwrote."""
        board = self.board
        touched = [move.from_sq, move.to_sq]
        if move.en_passant is not None:
            touched.append(move.en_passant)
        if move.castle is not None:
            touched += [move.castle.from_sq, move.castle.to_sq]
        undo = [(sq, board[sq]) for sq in touched]

        placed = move.promotion.value if move.promotion is not None else board[move.from_sq]
        board[move.from_sq] = 0
        if move.en_passant is not None:
            board[move.en_passant] = 0
        board[move.to_sq] = placed

        # Slide the rook for castling
        if move.castle is not None:
            rook = board[move.castle.from_sq]
            board[move.castle.from_sq] = 0
            board[move.castle.to_sq] = rook
        return undo

    def _restore(self, undo: list[tuple[Square, int]]) -> None:
        for sq, value in reversed(undo):
            self.board[sq] = value

    def _update_castling(self, move: Move, piece: Piece) -> None:
        castling = self.castling
        if piece.piece_type == PieceType.KING:
            castling &= ~CastlingRights.both(piece.color)
        for sq in (move.from_sq, move.to_sq):
            if sq in _ROOK_CORNERS:
                castling &= ~_ROOK_CORNERS[sq]
        self.castling = castling

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Independent copy, history included."""
        pos = Position.__new__(Position)
        pos.board = self.board.copy()
        pos.side_to_move = self.side_to_move
        pos.castling = self.castling
        pos.last_move = self.last_move
        pos.selection = self.selection
        pos.threats = bytearray(self.threats)
        pos._history = self._history.copy()
        return pos

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = []
            for value in self.board[row * 8 : row * 8 + 8]:
                cells.append(str(Piece.decode(value)) if value else ".")
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
