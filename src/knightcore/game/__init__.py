"""Game layer - a single-owner session on top of the rules engine.

Quick start::

    from knightcore.game import GameSession

    session = GameSession()
    record = session.play("e2", "e4")
    print(record.san, session.status)
"""

from knightcore.game.session import GameSession, MoveRecord

__all__ = [
    "GameSession",
    "MoveRecord",
]
