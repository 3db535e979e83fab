"""knightcore - chess rules engine for a networked game service."""

from knightcore.core import (
    STARTING_FEN,
    Board,
    Color,
    CorruptStateError,
    EngineError,
    FormatError,
    GameStateService,
    GameStatus,
    IllegalMoveError,
    Move,
    MoveGenerator,
    MoveValidator,
    Piece,
    PieceType,
    Position,
)
from knightcore.game import GameSession, MoveRecord

__version__ = "0.1.0"

__all__ = [
    "STARTING_FEN",
    "Board",
    "Color",
    "CorruptStateError",
    "EngineError",
    "FormatError",
    "GameSession",
    "GameStateService",
    "GameStatus",
    "IllegalMoveError",
    "Move",
    "MoveGenerator",
    "MoveRecord",
    "MoveValidator",
    "Piece",
    "PieceType",
    "Position",
]
