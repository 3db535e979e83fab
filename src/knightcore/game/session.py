"""Game session - one board, one move at a time, with a move log.

The session is what a game service holds between requests.  Each accepted
move is logged with its SAN and the status it produced.  Resignation,
timeouts and agreed draws are decided by the caller and only recorded here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from knightcore.core.board import Board
from knightcore.core.enums import Color, GameStatus, PieceType
from knightcore.core.errors import FormatError, IllegalMoveError
from knightcore.core.game_state import GameStateService, GameStateSnapshot
from knightcore.core.move import Move
from knightcore.core.notation import STARTING_FEN, move_to_san, parse_san
from knightcore.core.position import Position

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move log."""

    move: Move
    san: str
    color: Color
    piece_type: PieceType
    fen_after: str
    was_capture: bool = False
    is_check: bool = False
    is_checkmate: bool = False


@dataclass
class GameSession:
    """Single-owner wrapper around a :class:`Board`.

    Not thread-safe: the owner serialises calls, one move application at a
    time.
    """

    start_fen: str = STARTING_FEN
    service: GameStateService = field(default_factory=GameStateService)
    board: Board = field(init=False)
    status: GameStatus = field(default=GameStatus.IN_PROGRESS, init=False)
    winner: Color | None = field(default=None, init=False)
    history: list[MoveRecord] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        self.board = Board.decode(self.start_fen)
        self.status = self.service.status(self.board)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.board.side_to_move

    @property
    def is_over(self) -> bool:
        return self.status.is_terminal

    @property
    def fen(self) -> str:
        return self.board.encode()

    def legal_moves(self) -> list[Move]:
        return self.service.validator.legal_moves(self.board, self.board.side_to_move)

    def legal_targets(self, square: str) -> list[str]:
        """Destination labels for the piece on *square* (may be empty)."""
        from_pos = Position.from_label(square)
        moves = self.service.validator.legal_moves_for(self.board, from_pos)
        return [move.to_pos.label for move in moves]

    def snapshot(self) -> GameStateSnapshot:
        return self.service.snapshot(self.board)

    # ── Move application ─────────────────────────────────────────────────

    def play(self, from_square: str, to_square: str, promotion: str | None = None) -> MoveRecord:
        """Apply a move given as square labels and an optional promotion letter."""
        promo_type = PieceType.from_letter(promotion) if promotion else None
        if promo_type in (PieceType.PAWN, PieceType.KING):
            raise FormatError(f"Invalid promotion piece: {promotion!r}")
        request = Move(
            Position.from_label(from_square), Position.from_label(to_square), promo_type
        )
        return self.play_move(request)

    def play_san(self, san: str) -> MoveRecord:
        self._ensure_in_progress()
        return self.play_move(parse_san(self.board, san, self.service.validator))

    def play_move(self, request: Move) -> MoveRecord:
        """Validate, apply and log *request*.

        Raises :class:`IllegalMoveError` when the game is over or the move
        is not legal; the board is untouched in both cases.
        """
        self._ensure_in_progress()
        validator = self.service.validator
        board = self.board

        move = validator.match_legal_move(board, request)
        piece = board[move.from_pos]
        assert piece is not None
        color = piece.color
        piece_type = piece.piece_type
        was_capture = board[move.to_pos] is not None or move.is_en_passant
        san = move_to_san(board, move, validator)

        validator.execute(board, move)

        self.status = self.service.status(board)
        is_checkmate = self.status == GameStatus.CHECKMATE
        if is_checkmate:
            self.winner = color

        record = MoveRecord(
            move=move,
            san=san,
            color=color,
            piece_type=piece_type,
            fen_after=board.encode(),
            was_capture=was_capture,
            is_check=validator.is_king_in_check(board, board.side_to_move),
            is_checkmate=is_checkmate,
        )
        self.history.append(record)

        if self.status.is_terminal:
            _LOGGER.info("Game over after %s: %s", san, self.status)
        return record

    # ── Externally assigned endings ──────────────────────────────────────

    def resign(self, color: Color) -> None:
        self._finish(GameStatus.RESIGNATION, winner=color.opposite)

    def flag_timeout(self, color: Color) -> None:
        """*color* ran out of time."""
        self._finish(GameStatus.TIMEOUT, winner=color.opposite)

    def agree_draw(self) -> None:
        self._finish(GameStatus.DRAW_AGREEMENT, winner=None)

    # ── Internal ─────────────────────────────────────────────────────────

    def _ensure_in_progress(self) -> None:
        if self.is_over:
            raise IllegalMoveError(f"Game is not in progress ({self.status})")

    def _finish(self, status: GameStatus, winner: Color | None) -> None:
        self._ensure_in_progress()
        self.status = status
        self.winner = winner
        _LOGGER.info("Game ended: %s, winner=%s", status, winner)
