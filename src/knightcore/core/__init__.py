"""Core domain layer - pure chess rules with zero external dependencies.

Quick start::

    from knightcore.core import (
        STARTING_FEN, Board, GameStateService, Move, MoveValidator,
    )

    board = Board.decode(STARTING_FEN)
    validator = MoveValidator()
    validator.apply(board, Move.from_label("e2e4"))
    print(board.encode(), GameStateService(validator).status(board))
"""

from knightcore.core.board import Board
from knightcore.core.enums import PROMOTION_TYPES, Color, GameStatus, PieceType
from knightcore.core.errors import (
    CorruptStateError,
    EngineError,
    FormatError,
    IllegalMoveError,
)
from knightcore.core.game_state import GameStateService, GameStateSnapshot
from knightcore.core.move import Move
from knightcore.core.move_generator import MoveGenerator
from knightcore.core.move_validator import MoveValidator
from knightcore.core.notation import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    move_to_san,
    parse_san,
)
from knightcore.core.piece import Piece
from knightcore.core.position import Position

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    "PieceType",
    "PROMOTION_TYPES",
    # Errors
    "CorruptStateError",
    "EngineError",
    "FormatError",
    "IllegalMoveError",
    # Domain objects
    "Board",
    "Move",
    "Piece",
    "Position",
    # Services
    "GameStateService",
    "GameStateSnapshot",
    "MoveGenerator",
    "MoveValidator",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    "move_to_san",
    "parse_san",
]
