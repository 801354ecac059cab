"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chesstui.core import Position, STARTING_FEN

    pos = Position.from_fen(STARTING_FEN)
    for move in pos.get_legal_moves():
        print(move)
"""

from chesstui.core.enums import CastlingRights, Color, PieceType
from chesstui.core.errors import (
    BoardError,
    ChessError,
    CommandError,
    EngineError,
    ErrorParsingFEN,
    IllegalMove,
    InvalidCommand,
    MoveError,
    MoveParsingError,
    NoCommand,
    NoPieceFound,
    NoPieceGrabbed,
    OutOfBounds,
    ParsingError,
    PieceEncodingError,
    PieceError,
    UnknownCharacter,
    WrongTurn,
)
from chesstui.core.move import Move
from chesstui.core.move_generator import MoveGenerator
from chesstui.core.notation import STARTING_FEN, parse_fen, parse_move, serialize_fen
from chesstui.core.piece import Piece
from chesstui.core.position import Position, Selection, SelectionPhase
from chesstui.core.threats import compute_threat_map
from chesstui.core.types import (
    Algebraic,
    Coordinate,
    Index,
    Relative,
    Square,
    parse_square,
    square_name,
    to_index,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "PieceType",
    # Types / helpers
    "Algebraic",
    "Coordinate",
    "Index",
    "Relative",
    "Square",
    "parse_square",
    "square_name",
    "to_index",
    # Domain objects
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Selection",
    "SelectionPhase",
    "compute_threat_map",
    # Notation
    "STARTING_FEN",
    "parse_fen",
    "parse_move",
    "serialize_fen",
    # Errors
    "BoardError",
    "ChessError",
    "CommandError",
    "EngineError",
    "ErrorParsingFEN",
    "IllegalMove",
    "InvalidCommand",
    "MoveError",
    "MoveParsingError",
    "NoCommand",
    "NoPieceFound",
    "NoPieceGrabbed",
    "OutOfBounds",
    "ParsingError",
    "PieceEncodingError",
    "PieceError",
    "UnknownCharacter",
    "WrongTurn",
]
