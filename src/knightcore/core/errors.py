"""Exception hierarchy raised by the rules engine."""

from __future__ import annotations


class EngineError(Exception):
    """Base class for every error raised by :mod:`knightcore`."""


class FormatError(EngineError, ValueError):
    """Malformed FEN, square label, move label or piece letter."""


class IllegalMoveError(EngineError):
    """A well-formed move that is not legal in the given position.

    This is an expected outcome of user input; callers report it as a
    rejected move rather than a malformed request.
    """


class CorruptStateError(EngineError, RuntimeError):
    """The board is missing a king where one is required."""
