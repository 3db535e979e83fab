"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, field

from knightcore.core.enums import Color, PieceType
from knightcore.core.errors import FormatError

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}


@dataclass(slots=True)
class Piece:
    """A chess piece.

    Kind and color never change.  ``has_moved`` is flipped in place by
    :meth:`MoveValidator.execute <knightcore.core.move_validator.MoveValidator.execute>`
    and gates castling; it is not part of the encoded position, so it is
    ignored by equality.
    """

    piece_type: PieceType
    color: Color
    has_moved: bool = field(default=False, compare=False)

    # ── Serialisation ────────────────────────────────────────────────────

    @property
    def fen_char(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = self.piece_type.letter
        return letter if self.color == Color.WHITE else letter.lower()

    def __str__(self) -> str:
        return self.fen_char

    @classmethod
    def from_fen_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        if len(char) != 1 or not char.isalpha():
            raise FormatError(f"Invalid piece character: {char!r}")
        piece_type = PieceType.from_letter(char)
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(piece_type, color)

    # ── Helpers ──────────────────────────────────────────────────────────

    @property
    def value(self) -> int:
        return self.piece_type.material_value

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    def copy(self) -> Piece:
        return Piece(self.piece_type, self.color, self.has_moved)
