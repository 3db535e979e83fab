"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from knightcore.core.game_state import GameStateService
from knightcore.core.move_generator import MoveGenerator
from knightcore.core.move_validator import MoveValidator


@pytest.fixture
def generator() -> MoveGenerator:
    return MoveGenerator()


@pytest.fixture
def validator(generator: MoveGenerator) -> MoveValidator:
    return MoveValidator(generator)


@pytest.fixture
def service(validator: MoveValidator) -> GameStateService:
    return GameStateService(validator)
