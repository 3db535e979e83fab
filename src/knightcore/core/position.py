"""Position - an immutable (rank, file) square coordinate.

Ranks and files are 1-based, matching the square labels used on the wire:
``a1`` is ``Position(1, 1)`` and ``h8`` is ``Position(8, 8)``.  The flat
board index is ``(rank - 1) * 8 + (file - 1)``::

    a1=0, b1=1, ..., h1=7
    a2=8, ...
    a8=56, ..., h8=63
"""

from __future__ import annotations

from dataclasses import dataclass

from knightcore.core.errors import FormatError

_FILES = "abcdefgh"
_RANKS = "12345678"


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Immutable board coordinate with bounds validation."""

    rank: int
    file: int

    def __post_init__(self) -> None:
        if not (1 <= self.rank <= 8 and 1 <= self.file <= 8):
            raise FormatError(
                f"Invalid position: rank={self.rank}, file={self.file}"
            )

    # ── Conversion ───────────────────────────────────────────────────────

    @classmethod
    def from_label(cls, label: str) -> Position:
        """Parse a square label, e.g. ``'e4'`` → ``Position(4, 5)``."""
        if (
            not isinstance(label, str)
            or len(label) != 2
            or label[0] not in _FILES
            or label[1] not in _RANKS
        ):
            raise FormatError(f"Invalid square label: {label!r}")
        return cls(int(label[1]), _FILES.index(label[0]) + 1)

    @classmethod
    def from_index(cls, index: int) -> Position:
        """Inverse of :attr:`index`."""
        if not 0 <= index < 64:
            raise FormatError(f"Invalid square index: {index}")
        return cls((index >> 3) + 1, (index & 7) + 1)

    @property
    def label(self) -> str:
        return _FILES[self.file - 1] + str(self.rank)

    @property
    def index(self) -> int:
        return (self.rank - 1) * 8 + (self.file - 1)

    @property
    def file_letter(self) -> str:
        return _FILES[self.file - 1]

    @property
    def is_light_square(self) -> bool:
        # a1 is dark: (1 + 1) is even.
        return (self.rank + self.file) % 2 == 1

    # ── Geometry ─────────────────────────────────────────────────────────

    def offset(self, d_rank: int, d_file: int) -> Position | None:
        """Shift by a direction; ``None`` when the result is off the board."""
        rank = self.rank + d_rank
        file = self.file + d_file
        if 1 <= rank <= 8 and 1 <= file <= 8:
            return Position(rank, file)
        return None

    def __str__(self) -> str:
        return self.label


ALL_POSITIONS: tuple[Position, ...] = tuple(Position.from_index(i) for i in range(64))
