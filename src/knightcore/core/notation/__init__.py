"""Notation package: FEN and SAN parsing and serialization."""

from knightcore.core.notation.fen import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    placement_to_fen,
)
from knightcore.core.notation.san import move_to_san, parse_san

__all__ = [
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    "placement_to_fen",
    "move_to_san",
    "parse_san",
]
