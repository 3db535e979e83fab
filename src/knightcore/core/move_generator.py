"""Pseudo-legal move generation and attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from knightcore.core.enums import PROMOTION_TYPES, Color, PieceType
from knightcore.core.move import Move
from knightcore.core.piece import Piece
from knightcore.core.position import Position

if TYPE_CHECKING:
    from knightcore.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
)

# (rank delta, file delta)
BISHOP_DIRS: tuple[tuple[int, int], ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS

_SLIDER_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}

# King file 5 (e); rook corners and the squares strictly between.
KINGSIDE_ROOK_FILE = 8
QUEENSIDE_ROOK_FILE = 1
KINGSIDE_BETWEEN_FILES: tuple[int, ...] = (6, 7)
QUEENSIDE_BETWEEN_FILES: tuple[int, ...] = (2, 3, 4)
KING_HOME_FILE = 5


class MoveGenerator:
    """Stateless generator of pseudo-legal moves for any :class:`Board`.

    Pseudo-legal moves obey piece geometry and blocking but may leave the
    mover's own king attacked; :class:`~knightcore.core.move_validator.MoveValidator`
    filters them.  Castling candidates only check rights, unmoved pieces and
    empty squares between king and rook.
    """

    __slots__ = ()

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_moves(self, board: Board, color: Color) -> list[Move]:
        """All pseudo-legal moves for *color*, whoever is to move."""
        moves: list[Move] = []
        for from_pos in board.pieces(color):
            piece = board[from_pos]
            assert piece is not None
            self._gen_piece(board, from_pos, piece, moves, include_castling=True)
        return moves

    def pseudo_legal_moves_for(self, board: Board, from_pos: Position) -> list[Move]:
        """Pseudo-legal moves of the piece on *from_pos* (empty if none)."""
        piece = board[from_pos]
        if piece is None:
            return []
        moves: list[Move] = []
        self._gen_piece(board, from_pos, piece, moves, include_castling=True)
        return moves

    # -- Attack detection ---------------------------------------------------

    def is_square_attacked(self, board: Board, square: Position, by_color: Color) -> bool:
        """Is *square* attacked by any piece of *by_color*?

        Non-pawn attackers reuse their move generators (castling excluded);
        a pawn attacks only along its diagonal-capture shape, whether or not
        the target square is occupied.
        """
        for from_pos in board.pieces(by_color):
            piece = board[from_pos]
            assert piece is not None
            if piece.piece_type == PieceType.PAWN:
                if square.rank - from_pos.rank == by_color.direction and abs(
                    square.file - from_pos.file
                ) == 1:
                    return True
                continue

            attacks: list[Move] = []
            self._gen_piece(board, from_pos, piece, attacks, include_castling=False)
            for move in attacks:
                if move.to_pos == square:
                    return True
        return False

    # -- Piece-specific generators (private) -------------------------------

    def _gen_piece(
        self,
        board: Board,
        from_pos: Position,
        piece: Piece,
        moves: list[Move],
        *,
        include_castling: bool,
    ) -> None:
        pt = piece.piece_type
        if pt == PieceType.PAWN:
            self._gen_pawn(board, from_pos, piece.color, moves)
        elif pt == PieceType.KNIGHT:
            self._gen_steps(board, from_pos, piece.color, KNIGHT_OFFSETS, moves)
        elif pt == PieceType.KING:
            self._gen_steps(board, from_pos, piece.color, KING_OFFSETS, moves)
            if include_castling:
                self._gen_castling(board, from_pos, piece, moves)
        else:
            self._gen_sliding(board, from_pos, piece.color, _SLIDER_DIRS[pt], moves)

    def _gen_pawn(
        self, board: Board, from_pos: Position, color: Color, moves: list[Move]
    ) -> None:
        direction = color.direction
        promotion_rank = color.promotion_rank

        one_step = from_pos.offset(direction, 0)
        if one_step is not None and board.is_empty(one_step):
            if one_step.rank == promotion_rank:
                for pt in PROMOTION_TYPES:
                    moves.append(Move(from_pos, one_step, pt))
            else:
                moves.append(Move(from_pos, one_step))

            if from_pos.rank == color.pawn_rank:
                two_step = from_pos.offset(2 * direction, 0)
                if two_step is not None and board.is_empty(two_step):
                    moves.append(Move(from_pos, two_step))

        for d_file in (-1, 1):
            cap_pos = from_pos.offset(direction, d_file)
            if cap_pos is None:
                continue
            target = board[cap_pos]
            if target is not None and target.color != color:
                if cap_pos.rank == promotion_rank:
                    for pt in PROMOTION_TYPES:
                        moves.append(Move(from_pos, cap_pos, pt, is_capture=True))
                else:
                    moves.append(Move(from_pos, cap_pos, is_capture=True))
            elif target is None and cap_pos == board.en_passant:
                moves.append(
                    Move(from_pos, cap_pos, is_capture=True, is_en_passant=True)
                )

    def _gen_steps(
        self,
        board: Board,
        from_pos: Position,
        color: Color,
        offsets: tuple[tuple[int, int], ...],
        moves: list[Move],
    ) -> None:
        for d_rank, d_file in offsets:
            to_pos = from_pos.offset(d_rank, d_file)
            if to_pos is None:
                continue
            target = board[to_pos]
            if target is None:
                moves.append(Move(from_pos, to_pos))
            elif target.color != color:
                moves.append(Move(from_pos, to_pos, is_capture=True))

    def _gen_sliding(
        self,
        board: Board,
        from_pos: Position,
        color: Color,
        directions: tuple[tuple[int, int], ...],
        moves: list[Move],
    ) -> None:
        for d_rank, d_file in directions:
            current = from_pos.offset(d_rank, d_file)
            while current is not None:
                target = board[current]
                if target is None:
                    moves.append(Move(from_pos, current))
                    current = current.offset(d_rank, d_file)
                    continue
                if target.color != color:
                    moves.append(Move(from_pos, current, is_capture=True))
                break

    def _gen_castling(
        self, board: Board, king_pos: Position, king: Piece, moves: list[Move]
    ) -> None:
        color = king.color
        rank = color.back_rank
        if king.has_moved or king_pos != Position(rank, KING_HOME_FILE):
            return

        if board.can_castle_kingside(color) and self._castle_path_ready(
            board, color, KINGSIDE_ROOK_FILE, KINGSIDE_BETWEEN_FILES
        ):
            moves.append(Move(king_pos, Position(rank, 7), is_castle=True))

        if board.can_castle_queenside(color) and self._castle_path_ready(
            board, color, QUEENSIDE_ROOK_FILE, QUEENSIDE_BETWEEN_FILES
        ):
            moves.append(Move(king_pos, Position(rank, 3), is_castle=True))

    @staticmethod
    def _castle_path_ready(
        board: Board, color: Color, rook_file: int, between_files: tuple[int, ...]
    ) -> bool:
        rank = color.back_rank
        rook = board[Position(rank, rook_file)]
        if (
            rook is None
            or rook.piece_type != PieceType.ROOK
            or rook.color != color
            or rook.has_moved
        ):
            return False
        return all(board.is_empty(Position(rank, f)) for f in between_files)
