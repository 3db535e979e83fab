"""Legal move filtering and move execution.

Legality is decided by speculative execution: the candidate is played on
a :meth:`Board.copy` and the copy is inspected for an attacked king.  No
make/unmake bookkeeping is involved, so the live board is never touched
while moves are being tested.
"""

from __future__ import annotations

import logging

from knightcore.core.board import Board
from knightcore.core.enums import Color, PieceType
from knightcore.core.errors import IllegalMoveError
from knightcore.core.move import Move
from knightcore.core.move_generator import (
    KINGSIDE_ROOK_FILE,
    QUEENSIDE_ROOK_FILE,
    MoveGenerator,
)
from knightcore.core.piece import Piece
from knightcore.core.position import Position

_LOGGER = logging.getLogger(__name__)

# Files the king crosses and lands on when castling.
_KINGSIDE_KING_PATH: tuple[int, ...] = (6, 7)
_QUEENSIDE_KING_PATH: tuple[int, ...] = (4, 3)


class MoveValidator:
    """Turns pseudo-legal candidates into legal moves and executes them."""

    __slots__ = ("_generator",)

    def __init__(self, generator: MoveGenerator | None = None) -> None:
        self._generator = generator or MoveGenerator()

    @property
    def generator(self) -> MoveGenerator:
        return self._generator

    # -- Legal move lists ---------------------------------------------------

    def legal_moves(self, board: Board, color: Color) -> list[Move]:
        """All strictly legal moves for *color*."""
        return [
            move
            for move in self._generator.pseudo_legal_moves(board, color)
            if self._is_admissible(board, move, color)
        ]

    def legal_moves_for(self, board: Board, from_pos: Position) -> list[Move]:
        """Legal moves of the piece on *from_pos* (empty for an empty square)."""
        piece = board[from_pos]
        if piece is None:
            return []
        return [
            move
            for move in self._generator.pseudo_legal_moves_for(board, from_pos)
            if self._is_admissible(board, move, piece.color)
        ]

    def _is_admissible(self, board: Board, move: Move, color: Color) -> bool:
        if move.is_castle and not self.can_castle_through(
            board, color, move.is_kingside_castle
        ):
            return False
        return self.is_legal(board, move, color)

    def is_legal(self, board: Board, move: Move, color: Color) -> bool:
        """Does *move* leave *color*'s king safe?  Checked on a scratch copy."""
        scratch = board.copy()
        self.execute(scratch, move)

        king_pos = scratch.find_king(color)
        if king_pos is None:
            _LOGGER.warning(
                "No %s king after %s on %s", color, move, board.encode()
            )
            return False
        return not self._generator.is_square_attacked(scratch, king_pos, color.opposite)

    # -- Validation -----------------------------------------------------------

    def validate(self, board: Board, move: Move) -> bool:
        """Is *move* legal for the side to move?

        Requests typically come from a move label and carry no capture,
        castle or en-passant flags, so matching is on squares and promotion
        kind.
        """
        return self._find_match(board, move) is not None

    def match_legal_move(self, board: Board, move: Move) -> Move:
        """Return the fully flagged legal move matching *move*.

        Raises :class:`IllegalMoveError` when nothing matches.
        """
        match = self._find_match(board, move)
        if match is None:
            _LOGGER.debug("Rejected %s on %s", move, board.encode())
            raise IllegalMoveError(f"Illegal move: {move}")
        return match

    def _find_match(self, board: Board, move: Move) -> Move | None:
        piece = board[move.from_pos]
        if piece is None or piece.color != board.side_to_move:
            return None
        for legal in self.legal_moves_for(board, move.from_pos):
            if legal.same_action(move):
                return legal
        return None

    def apply(self, board: Board, move: Move) -> Move:
        """Validate and execute *move* on *board*; return the executed move."""
        legal = self.match_legal_move(board, move)
        self.execute(board, legal)
        return legal

    # -- Execution ------------------------------------------------------------

    def execute(self, board: Board, move: Move) -> None:
        """Play *move* on *board* in place, including every side effect.

        *move* is trusted to be pseudo-legal; its flags decide how castling,
        en passant and promotion are carried out.
        """
        piece = board[move.from_pos]
        if piece is None:
            raise IllegalMoveError(f"No piece on {move.from_pos}")

        board.en_passant = None

        if move.is_castle:
            self._execute_castling(board, move, piece)
            board.increment_halfmove_clock()
        elif move.is_en_passant:
            board.remove(move.from_pos)
            board[move.to_pos] = piece
            board.remove(Position(move.to_pos.rank - piece.color.direction, move.to_pos.file))
            piece.has_moved = True
            board.reset_halfmove_clock()
        elif move.promotion is not None:
            board.remove(move.from_pos)
            board[move.to_pos] = Piece(move.promotion, piece.color, has_moved=True)
            board.reset_halfmove_clock()
        else:
            is_capture = board[move.to_pos] is not None
            is_pawn_move = piece.piece_type == PieceType.PAWN

            board.remove(move.from_pos)
            board[move.to_pos] = piece
            piece.has_moved = True

            if is_pawn_move and abs(move.to_pos.rank - move.from_pos.rank) == 2:
                board.en_passant = Position(
                    (move.from_pos.rank + move.to_pos.rank) // 2, move.from_pos.file
                )

            if is_capture or is_pawn_move:
                board.reset_halfmove_clock()
            else:
                board.increment_halfmove_clock()

        self._update_castling_rights(board, move, piece)

        board.side_to_move = board.side_to_move.opposite
        if board.side_to_move == Color.WHITE:
            board.fullmove_number += 1

        board.record_position()

    @staticmethod
    def _execute_castling(board: Board, move: Move, king: Piece) -> None:
        rank = king.color.back_rank
        board.remove(move.from_pos)
        board[move.to_pos] = king
        king.has_moved = True

        if move.to_pos.file == 7:
            rook_from = Position(rank, KINGSIDE_ROOK_FILE)
            rook_to = Position(rank, 6)
        else:
            rook_from = Position(rank, QUEENSIDE_ROOK_FILE)
            rook_to = Position(rank, 4)

        rook = board.remove(rook_from)
        board[rook_to] = rook
        if rook is not None:
            rook.has_moved = True

    @staticmethod
    def _update_castling_rights(board: Board, move: Move, piece: Piece) -> None:
        color = piece.color

        if piece.piece_type == PieceType.KING:
            board.set_castling_rights(color, False, False)

        if piece.piece_type == PieceType.ROOK:
            home_rank = color.back_rank
            if move.from_pos == Position(home_rank, QUEENSIDE_ROOK_FILE):
                board.set_castling_rights(color, board.can_castle_kingside(color), False)
            elif move.from_pos == Position(home_rank, KINGSIDE_ROOK_FILE):
                board.set_castling_rights(color, False, board.can_castle_queenside(color))

        # A capture on the opponent's rook corner kills that right.
        opponent = color.opposite
        opp_rank = opponent.back_rank
        if move.to_pos == Position(opp_rank, QUEENSIDE_ROOK_FILE):
            board.set_castling_rights(
                opponent, board.can_castle_kingside(opponent), False
            )
        elif move.to_pos == Position(opp_rank, KINGSIDE_ROOK_FILE):
            board.set_castling_rights(
                opponent, False, board.can_castle_queenside(opponent)
            )

    # -- Check helpers --------------------------------------------------------

    def is_king_in_check(self, board: Board, color: Color) -> bool:
        """Is *color*'s king attacked?  ``False`` when there is no king."""
        king_pos = board.find_king(color)
        if king_pos is None:
            return False
        return self._generator.is_square_attacked(board, king_pos, color.opposite)

    def can_castle_through(self, board: Board, color: Color, kingside: bool) -> bool:
        """King not in check and its path (crossing and landing squares)
        not attacked by the opponent."""
        king_pos = board.find_king(color)
        if king_pos is None or self.is_king_in_check(board, color):
            return False

        rank = color.back_rank
        opponent = color.opposite
        path = _KINGSIDE_KING_PATH if kingside else _QUEENSIDE_KING_PATH
        return not any(
            self._generator.is_square_attacked(board, Position(rank, f), opponent)
            for f in path
        )
