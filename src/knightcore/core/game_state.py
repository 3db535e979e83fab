"""High-level rules: check, checkmate, stalemate and draw detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final

from knightcore.core.board import Board
from knightcore.core.enums import Color, GameStatus, PieceType
from knightcore.core.move_validator import MoveValidator
from knightcore.core.position import Position

FIFTY_MOVE_HALFMOVES: Final = 100  # 100 half-moves = 50 full moves
REPETITION_THRESHOLD: Final = 3

_MINOR_PIECES: Final = (PieceType.BISHOP, PieceType.KNIGHT)


@dataclass(frozen=True, slots=True)
class GameStateSnapshot:
    """Summary of a board handed to transport or persistence layers."""

    fen: str
    side_to_move: Color
    status: GameStatus
    is_check: bool
    legal_move_count: int
    halfmove_clock: int
    fullmove_number: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "fen": self.fen,
            "currentTurn": self.side_to_move.name,
            "status": self.status.value,
            "isCheck": self.is_check,
            "legalMovesCount": self.legal_move_count,
            "halfMoveClock": self.halfmove_clock,
            "fullMoveNumber": self.fullmove_number,
        }


class GameStateService:
    """Classifies a :class:`Board` without modifying it."""

    __slots__ = ("_validator",)

    def __init__(self, validator: MoveValidator | None = None) -> None:
        self._validator = validator or MoveValidator()

    @property
    def validator(self) -> MoveValidator:
        return self._validator

    # -- Check / mate -------------------------------------------------------

    def in_check(self, board: Board, color: Color) -> bool:
        king_pos = board.king_position(color)
        return self._validator.generator.is_square_attacked(
            board, king_pos, color.opposite
        )

    def has_legal_moves(self, board: Board, color: Color) -> bool:
        return bool(self._validator.legal_moves(board, color))

    def is_checkmate(self, board: Board, color: Color) -> bool:
        if not self.in_check(board, color):
            return False
        return not self.has_legal_moves(board, color)

    def is_stalemate(self, board: Board, color: Color) -> bool:
        if self.in_check(board, color):
            return False
        return not self.has_legal_moves(board, color)

    # -- Draw rules ---------------------------------------------------------

    @staticmethod
    def is_fifty_move_draw(board: Board) -> bool:
        return board.halfmove_clock >= FIFTY_MOVE_HALFMOVES

    @staticmethod
    def is_threefold_repetition(board: Board) -> bool:
        """Counts earlier placements equal to the current one.

        Only the piece-placement field is compared; side to move, castling
        rights and en-passant target are not part of the key.
        """
        return board.count_occurrences(board.placement()) >= REPETITION_THRESHOLD

    @staticmethod
    def is_insufficient_material(board: Board) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-colour bishops)."""
        white = board.pieces(Color.WHITE)
        black = board.pieces(Color.BLACK)

        # K vs K
        if len(white) == 1 and len(black) == 1:
            return True

        # K+minor vs K
        if sorted((len(white), len(black))) == [1, 2]:
            extra_pos = _non_king(board, white if len(white) == 2 else black)
            extra = board[extra_pos] if extra_pos is not None else None
            return extra is not None and extra.piece_type in _MINOR_PIECES

        # K+B vs K+B with same-colour bishops
        if len(white) == 2 and len(black) == 2:
            w_pos = _non_king(board, white)
            b_pos = _non_king(board, black)
            if w_pos is None or b_pos is None:
                return False
            w_piece, b_piece = board[w_pos], board[b_pos]
            if (
                w_piece is not None
                and b_piece is not None
                and w_piece.piece_type == PieceType.BISHOP
                and b_piece.piece_type == PieceType.BISHOP
            ):
                return w_pos.is_light_square == b_pos.is_light_square

        return False

    # -- Classification -----------------------------------------------------

    def status(self, board: Board) -> GameStatus:
        """Rule-derived status for the side to move, first match wins."""
        color = board.side_to_move

        if self.is_checkmate(board, color):
            return GameStatus.CHECKMATE
        if self.is_stalemate(board, color):
            return GameStatus.STALEMATE
        if self.is_fifty_move_draw(board):
            return GameStatus.DRAW_FIFTY_MOVE
        if self.is_threefold_repetition(board):
            return GameStatus.DRAW_REPETITION
        if self.is_insufficient_material(board):
            return GameStatus.DRAW_INSUFFICIENT_MATERIAL
        return GameStatus.IN_PROGRESS

    def snapshot(self, board: Board) -> GameStateSnapshot:
        color = board.side_to_move
        return GameStateSnapshot(
            fen=board.encode(),
            side_to_move=color,
            status=self.status(board),
            is_check=self._validator.is_king_in_check(board, color),
            legal_move_count=len(self._validator.legal_moves(board, color)),
            halfmove_clock=board.halfmove_clock,
            fullmove_number=board.fullmove_number,
        )


def _non_king(board: Board, squares: list[Position]) -> Position | None:
    for pos in squares:
        piece = board[pos]
        if piece is not None and piece.piece_type != PieceType.KING:
            return pos
    return None
