"""Shared test fixtures."""

import pytest

from deuce.engine.formats import get_format
from deuce.engine.scoring import ScoringEngine
from deuce.models.match import Player


@pytest.fixture
def standard_engine():
    """Best-of-three standard match, player one serving first."""
    engine = ScoringEngine(get_format("standard"), "Alice", "Bob")
    engine.start_match(Player.PLAYER_ONE)
    return engine


@pytest.fixture
def no_ad_engine():
    """Best-of-three no-ad match, player one serving first."""
    engine = ScoringEngine(get_format("no_ad"), "Alice", "Bob")
    engine.start_match(Player.PLAYER_ONE)
    return engine
