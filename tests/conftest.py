"""Pytest configuration and shared fixtures."""

import random
from datetime import datetime

import pytest

from thinklink.core.config import Settings
from thinklink.core.kv_store import InMemoryStore
from thinklink.services.interpreter_service import CommandInterpreter
from thinklink.services.scoring_service import TrainableScorer


# Wednesday
FIXED_NOW = datetime(2025, 6, 4, 9, 30)


@pytest.fixture
def fixed_now() -> datetime:
    """Reference time used by date-sensitive tests."""
    return FIXED_NOW


@pytest.fixture
def memory_store() -> InMemoryStore:
    """Provides a fresh InMemoryStore for each test."""
    return InMemoryStore()


@pytest.fixture
def fast_settings() -> Settings:
    """Settings with a short training cap and no durable storage."""
    return Settings(weights_store_path=None, redis_url=None, max_training_epochs=20, learning_rate=0.05)


@pytest.fixture(scope="session")
def trained_scorer() -> TrainableScorer:
    """Scorer fully trained once per session on the bundled samples.

    Tests must not retrain it; build a separate scorer for that.
    """
    config = Settings(weights_store_path=None, redis_url=None)
    return TrainableScorer(InMemoryStore(), rng=random.Random(42), config=config)


@pytest.fixture
def interpreter(trained_scorer: TrainableScorer, fixed_now: datetime) -> CommandInterpreter:
    """Interpreter with a pinned clock whose fallback route always uses the keyword rule."""
    return CommandInterpreter(trained_scorer, rng=random.Random(0), neural_blend=0.0, clock=lambda: fixed_now)
