"""Board - piece placement plus the position state that travels with it."""

from __future__ import annotations

from knightcore.core.enums import Color, PieceType
from knightcore.core.errors import CorruptStateError
from knightcore.core.piece import Piece
from knightcore.core.position import ALL_POSITIONS, Position

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 64-square board with side to move, castling rights,
    en-passant target, clocks and a placement history.

    Squares live in a flat list indexed by :attr:`Position.index`, so
    :meth:`copy` is a bulk list copy plus a copy of each piece (pieces carry
    the mutable ``has_moved`` flag and must never be shared between a live
    board and a scratch copy).
    """

    __slots__ = (
        "_squares",
        "side_to_move",
        "en_passant",
        "_castling",
        "halfmove_clock",
        "fullmove_number",
        "history",
    )

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        self.side_to_move = Color.WHITE
        self.en_passant: Position | None = None
        # [color] -> [kingside, queenside]
        self._castling: list[list[bool]] = [[False, False], [False, False]]
        self.halfmove_clock = 0
        self.fullmove_number = 1
        self.history: list[str] = []

    # -- Element access -----------------------------------------------------

    def get(self, pos: Position) -> Piece | None:
        return self._squares[pos.index]

    def set(self, pos: Position, piece: Piece | None) -> None:
        self._squares[pos.index] = piece

    def remove(self, pos: Position) -> Piece | None:
        """Clear *pos* and return whatever stood there."""
        piece = self._squares[pos.index]
        self._squares[pos.index] = None
        return piece

    def __getitem__(self, pos: Position) -> Piece | None:
        return self._squares[pos.index]

    def __setitem__(self, pos: Position, piece: Piece | None) -> None:
        self._squares[pos.index] = piece

    def is_empty(self, pos: Position) -> bool:
        return self._squares[pos.index] is None

    # -- Castling rights ----------------------------------------------------

    def can_castle_kingside(self, color: Color) -> bool:
        return self._castling[int(color)][0]

    def can_castle_queenside(self, color: Color) -> bool:
        return self._castling[int(color)][1]

    def set_castling_rights(self, color: Color, kingside: bool, queenside: bool) -> None:
        self._castling[int(color)] = [kingside, queenside]

    # -- Clocks ---------------------------------------------------------------

    def increment_halfmove_clock(self) -> None:
        self.halfmove_clock += 1

    def reset_halfmove_clock(self) -> None:
        self.halfmove_clock = 0

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color) -> list[Position]:
        """Squares occupied by *color*, a1 first."""
        squares = self._squares
        return [
            pos
            for pos in ALL_POSITIONS
            if (piece := squares[pos.index]) is not None and piece.color == color
        ]

    def find_king(self, color: Color) -> Position | None:
        for pos in ALL_POSITIONS:
            piece = self._squares[pos.index]
            if (
                piece is not None
                and piece.piece_type == PieceType.KING
                and piece.color == color
            ):
                return pos
        return None

    def king_position(self, color: Color) -> Position:
        """Like :meth:`find_king` but a missing king is a corrupt board."""
        pos = self.find_king(color)
        if pos is None:
            raise CorruptStateError(f"No {color} king on board")
        return pos

    # -- Position history -----------------------------------------------------

    def placement(self) -> str:
        """FEN piece-placement field of the current board."""
        from knightcore.core.notation.fen import placement_to_fen

        return placement_to_fen(self)

    def record_position(self) -> None:
        """Append the current placement to the repetition history."""
        self.history.append(self.placement())

    def count_occurrences(self, placement: str) -> int:
        return sum(1 for entry in self.history if entry == placement)

    # -- Serialisation --------------------------------------------------------

    def encode(self) -> str:
        """Serialise to a FEN string."""
        from knightcore.core.notation.fen import board_to_fen

        return board_to_fen(self)

    @classmethod
    def decode(cls, fen: str) -> Board:
        """Parse a FEN string; raises :class:`FormatError` when malformed."""
        from knightcore.core.notation.fen import board_from_fen

        return board_from_fen(fen)

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = [None if p is None else p.copy() for p in self._squares]
        b.side_to_move = self.side_to_move
        b.en_passant = self.en_passant
        b._castling = [rights.copy() for rights in self._castling]
        b.halfmove_clock = self.halfmove_clock
        b.fullmove_number = self.fullmove_number
        b.history = self.history.copy()
        return b

    def clear(self) -> None:
        self._squares = [None] * 64

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        """No pieces, white to move, no castling rights."""
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for file in range(1, 9):
            b[Position(2, file)] = Piece(PieceType.PAWN, Color.WHITE)
            b[Position(7, file)] = Piece(PieceType.PAWN, Color.BLACK)

        for file, pt in enumerate(_BACK_RANK, start=1):
            b[Position(1, file)] = Piece(pt, Color.WHITE)
            b[Position(8, file)] = Piece(pt, Color.BLACK)
        for color in Color:
            b.set_castling_rights(color, True, True)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._squares == other._squares
            and self.side_to_move == other.side_to_move
            and self.en_passant == other.en_passant
            and self._castling == other._castling
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(8, 0, -1):
            row = []
            for file in range(1, 9):
                p = self[Position(rank, file)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
