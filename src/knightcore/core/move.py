"""Move value object and move labels (``e2e4``, ``e7e8q``)."""

from __future__ import annotations

from dataclasses import dataclass

from knightcore.core.enums import PieceType
from knightcore.core.errors import FormatError
from knightcore.core.position import Position


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    Equality is structural over all six fields, so a move parsed from a
    label (no flags) differs from the generated move with the same squares
    when that move is a capture, castle or en passant.
    """

    from_pos: Position
    to_pos: Position
    promotion: PieceType | None = None
    is_capture: bool = False
    is_castle: bool = False
    is_en_passant: bool = False

    @property
    def is_promotion(self) -> bool:
        return self.promotion is not None

    @property
    def is_kingside_castle(self) -> bool:
        return self.is_castle and self.to_pos.file == 7

    def same_action(self, other: Move) -> bool:
        """Match on squares and promotion kind only, ignoring flags."""
        return (
            self.from_pos == other.from_pos
            and self.to_pos == other.to_pos
            and self.promotion == other.promotion
        )

    # ── Labels ───────────────────────────────────────────────────────────

    @property
    def label(self) -> str:
        """Long-algebraic label, e.g. ``e7e8q``."""
        base = self.from_pos.label + self.to_pos.label
        if self.promotion is not None:
            base += self.promotion.letter.lower()
        return base

    def __str__(self) -> str:
        return self.label

    @classmethod
    def from_label(cls, label: str) -> Move:
        """Parse a four- or five-character move label."""
        if not isinstance(label, str) or len(label) not in (4, 5):
            raise FormatError(f"Invalid move label: {label!r}")
        from_pos = Position.from_label(label[0:2])
        to_pos = Position.from_label(label[2:4])
        promotion: PieceType | None = None
        if len(label) == 5:
            promotion = PieceType.from_letter(label[4])
            if promotion in (PieceType.PAWN, PieceType.KING):
                raise FormatError(f"Invalid promotion piece in {label!r}")
        return cls(from_pos, to_pos, promotion)
