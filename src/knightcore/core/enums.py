"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import Enum, IntEnum

from knightcore.core.errors import FormatError


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def direction(self) -> int:
        """Rank step of a pawn push: +1 for white, -1 for black."""
        return 1 if self == Color.WHITE else -1

    @property
    def back_rank(self) -> int:
        return 1 if self == Color.WHITE else 8

    @property
    def pawn_rank(self) -> int:
        return 2 if self == Color.WHITE else 7

    @property
    def promotion_rank(self) -> int:
        return 8 if self == Color.WHITE else 1

    @property
    def fen_char(self) -> str:
        return "w" if self == Color.WHITE else "b"

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def letter(self) -> str:
        """Uppercase notation letter, e.g. ``N`` for a knight."""
        return _LETTERS[self]

    @property
    def material_value(self) -> int:
        """Relative material value."""
        return _VALUES[self]

    @classmethod
    def from_letter(cls, letter: str) -> PieceType:
        """Parse a notation letter in either case."""
        try:
            return _FROM_LETTER[letter.upper()]
        except (KeyError, AttributeError):
            raise FormatError(f"Invalid piece letter: {letter!r}") from None


_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 1000,
}
_FROM_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class GameStatus(Enum):
    """Lifecycle status of a game.

    Only the rule-derived members are ever produced by
    :class:`~knightcore.core.game_state.GameStateService`; the remaining ones
    are assigned by whoever runs the game (agreement, resignation, clocks).
    """

    WAITING = "WAITING"
    IN_PROGRESS = "IN_PROGRESS"
    CHECKMATE = "CHECKMATE"
    STALEMATE = "STALEMATE"
    DRAW_AGREEMENT = "DRAW_AGREEMENT"
    DRAW_REPETITION = "DRAW_REPETITION"
    DRAW_FIFTY_MOVE = "DRAW_FIFTY_MOVE"
    DRAW_INSUFFICIENT_MATERIAL = "DRAW_INSUFFICIENT_MATERIAL"
    RESIGNATION = "RESIGNATION"
    TIMEOUT = "TIMEOUT"
    ABANDONED = "ABANDONED"

    @property
    def is_terminal(self) -> bool:
        return self not in (GameStatus.WAITING, GameStatus.IN_PROGRESS)

    @property
    def is_draw(self) -> bool:
        return self in (
            GameStatus.STALEMATE,
            GameStatus.DRAW_AGREEMENT,
            GameStatus.DRAW_REPETITION,
            GameStatus.DRAW_FIFTY_MOVE,
            GameStatus.DRAW_INSUFFICIENT_MATERIAL,
        )

    def __str__(self) -> str:
        return self.value
