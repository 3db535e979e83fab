"""FEN parsing and serialization."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from knightcore.core.enums import Color, PieceType
from knightcore.core.errors import FormatError
from knightcore.core.piece import Piece
from knightcore.core.position import Position

if TYPE_CHECKING:
    from knightcore.core.board import Board

STARTING_FEN: Final = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: Final = "KQkq"


def board_from_fen(fen: str) -> Board:
    """Parse a FEN string into a :class:`Board`.

    The clock fields are optional; a string with only the first four fields
    decodes with halfmove clock 0 and fullmove number 1.
    """
    from knightcore.core.board import Board

    if not isinstance(fen, str):
        raise FormatError(f"Invalid FEN: {fen!r}")
    parts = fen.split()
    if len(parts) < 4:
        raise FormatError(f"Invalid FEN (need at least 4 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]
    board = Board.empty()

    # 1. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise FormatError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    for rank_idx, rank_text in enumerate(ranks):
        rank = 8 - rank_idx
        file = 1
        for ch in rank_text:
            if "0" <= ch <= "9":
                step = int(ch)
                if not (1 <= step <= 8):
                    raise FormatError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file > 8:
                    raise FormatError(f"Invalid FEN rank width: {fen!r}")
                board[Position(rank, file)] = Piece.from_fen_char(ch)
                file += 1
            if file > 9:
                raise FormatError(f"Invalid FEN rank width: {fen!r}")
        if file != 9:
            raise FormatError(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        board.side_to_move = Color.WHITE
    elif side_part == "b":
        board.side_to_move = Color.BLACK
    else:
        raise FormatError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    if castling_part != "-":
        if any(ch not in _CASTLING_CHARS for ch in castling_part) or len(
            set(castling_part)
        ) != len(castling_part):
            raise FormatError(f"Invalid FEN castling field: {castling_part!r}")
    board.set_castling_rights(Color.WHITE, "K" in castling_part, "Q" in castling_part)
    board.set_castling_rights(Color.BLACK, "k" in castling_part, "q" in castling_part)

    # 4. En passant
    if ep_part != "-":
        board.en_passant = _parse_en_passant(board, ep_part)

    # 5–6. Clocks (optional)
    if len(parts) > 4:
        board.halfmove_clock = _parse_counter(parts[4], "halfmove clock", minimum=0)
    if len(parts) > 5:
        board.fullmove_number = _parse_counter(parts[5], "fullmove number", minimum=1)

    return board


def _parse_en_passant(board: Board, text: str) -> Position:
    """The target must sit behind a pawn that just made a double push."""
    target = Position.from_label(text)
    mover = board.side_to_move
    if target.rank != (6 if mover == Color.WHITE else 3) or not board.is_empty(target):
        raise FormatError(f"Invalid FEN en-passant square: {text!r}")
    pushed = board[Position(target.rank - mover.direction, target.file)]
    if (
        pushed is None
        or pushed.piece_type != PieceType.PAWN
        or pushed.color != mover.opposite
    ):
        raise FormatError(f"Invalid FEN en-passant square: {text!r}")
    return target


def _parse_counter(text: str, name: str, *, minimum: int) -> int:
    # ASCII digits only; "+5" or non-Latin digits would not round-trip.
    if not (text.isascii() and text.isdigit()):
        raise FormatError(f"Invalid FEN {name}: {text!r}")
    value = int(text)
    if value < minimum:
        raise FormatError(f"Invalid FEN {name}: {text!r}")
    return value


def placement_to_fen(board: Board) -> str:
    """Serialise only the piece-placement field."""
    rows: list[str] = []
    for rank in range(8, 0, -1):
        empty = 0
        row = ""
        for file in range(1, 9):
            piece = board[Position(rank, file)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += piece.fen_char
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def castling_to_fen(board: Board) -> str:
    castling_str = ""
    if board.can_castle_kingside(Color.WHITE):
        castling_str += "K"
    if board.can_castle_queenside(Color.WHITE):
        castling_str += "Q"
    if board.can_castle_kingside(Color.BLACK):
        castling_str += "k"
    if board.can_castle_queenside(Color.BLACK):
        castling_str += "q"
    return castling_str or "-"


def board_to_fen(board: Board) -> str:
    """Serialise a :class:`Board` to FEN."""
    ep_str = board.en_passant.label if board.en_passant is not None else "-"
    return " ".join(
        (
            placement_to_fen(board),
            board.side_to_move.fen_char,
            castling_to_fen(board),
            ep_str,
            str(board.halfmove_clock),
            str(board.fullmove_number),
        )
    )
