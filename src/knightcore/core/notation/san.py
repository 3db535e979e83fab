"""SAN (Standard Algebraic Notation) rendering and parsing."""

from __future__ import annotations

from knightcore.core.board import Board
from knightcore.core.enums import PieceType
from knightcore.core.errors import FormatError, IllegalMoveError
from knightcore.core.move import Move
from knightcore.core.move_validator import MoveValidator
from knightcore.core.position import Position

_FILES = "abcdefgh"
_SAN_PIECE_REV: dict[str, PieceType] = {
    pt.letter: pt for pt in PieceType if pt != PieceType.PAWN
}


def move_to_san(board: Board, move: Move, validator: MoveValidator | None = None) -> str:
    """Convert a legal *move* to SAN given the *board* before the move.

    Castling is rendered as ``O-O`` / ``O-O-O`` without a check suffix.
    """
    validator = validator or MoveValidator()
    move = validator.match_legal_move(board, move)
    piece = board[move.from_pos]
    assert piece is not None

    if move.is_castle:
        return "O-O" if move.is_kingside_castle else "O-O-O"

    san = ""
    is_capture = board[move.to_pos] is not None or move.is_en_passant

    if piece.piece_type == PieceType.PAWN:
        if is_capture:
            san += move.from_pos.file_letter
    else:
        san += piece.piece_type.letter

        # Disambiguation
        ambiguous = [
            m.from_pos
            for m in validator.legal_moves(board, piece.color)
            if m.to_pos == move.to_pos
            and m.from_pos != move.from_pos
            and (other := board[m.from_pos]) is not None
            and other.piece_type == piece.piece_type
        ]
        if ambiguous:
            same_file = any(p.file == move.from_pos.file for p in ambiguous)
            same_rank = any(p.rank == move.from_pos.rank for p in ambiguous)
            if not same_file:
                san += move.from_pos.file_letter
            elif not same_rank:
                san += str(move.from_pos.rank)
            else:
                san += move.from_pos.label

    if is_capture:
        san += "x"

    san += move.to_pos.label

    if move.promotion is not None:
        san += "=" + move.promotion.letter

    # Check / checkmate suffix
    after = board.copy()
    validator.execute(after, move)
    opponent = after.side_to_move
    if validator.is_king_in_check(after, opponent):
        san += "#" if not validator.legal_moves(after, opponent) else "+"

    return san


def parse_san(board: Board, san: str, validator: MoveValidator | None = None) -> Move:
    """Parse a SAN string into a legal :class:`Move` for the side to move."""
    validator = validator or MoveValidator()
    legal = validator.legal_moves(board, board.side_to_move)

    clean = san.strip().rstrip("+#!?")

    # Castling
    if clean in ("O-O", "0-0", "O-O-O", "0-0-0"):
        kingside = clean in ("O-O", "0-0")
        for m in legal:
            if m.is_castle and m.is_kingside_castle == kingside:
                return m
        raise IllegalMoveError(f"Illegal move: {san}")

    # Promotion
    promotion: PieceType | None = None
    if "=" in clean:
        clean, _, promo_text = clean.partition("=")
        promotion = PieceType.from_letter(promo_text)
    elif len(clean) > 2 and clean[-1] in "QRBN" and clean[-2] in "18":
        promotion = PieceType.from_letter(clean[-1])
        clean = clean[:-1]

    if len(clean) < 2:
        raise FormatError(f"Invalid SAN: {san!r}")

    # Destination (last two chars)
    to_pos = Position.from_label(clean[-2:])
    clean = clean[:-2]

    # Capture marker
    if clean.endswith("x"):
        clean = clean[:-1]

    # Piece type
    if clean and clean[0] in _SAN_PIECE_REV:
        piece_type = _SAN_PIECE_REV[clean[0]]
        clean = clean[1:]
    else:
        piece_type = PieceType.PAWN

    # Disambiguation
    from_file: int | None = None
    from_rank: int | None = None
    if len(clean) == 2:
        origin = Position.from_label(clean)
        from_file, from_rank = origin.file, origin.rank
    elif len(clean) == 1:
        if clean in _FILES:
            from_file = _FILES.index(clean) + 1
        elif clean.isdigit() and 1 <= int(clean) <= 8:
            from_rank = int(clean)
        else:
            raise FormatError(f"Invalid SAN: {san!r}")
    elif clean:
        raise FormatError(f"Invalid SAN: {san!r}")

    # Find matching legal move
    candidates: list[Move] = []
    for m in legal:
        p = board[m.from_pos]
        if p is None or p.piece_type != piece_type:
            continue
        if m.to_pos != to_pos or m.promotion != promotion:
            continue
        if from_file is not None and m.from_pos.file != from_file:
            continue
        if from_rank is not None and m.from_pos.rank != from_rank:
            continue
        candidates.append(m)

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise IllegalMoveError(f"Illegal move: {san}")
    raise IllegalMoveError(f"Ambiguous move: {san} -> {[str(m) for m in candidates]}")
