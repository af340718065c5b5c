import itertools
import random

import pytest

from src.trivia.application.engine import AdaptiveDifficultyEngine
from src.trivia.domain.models import (
    AdaptiveDifficultyConfig,
    DifficultyTier,
    OutcomeEvent,
)
from src.trivia.domain.question_selector import QuestionSelector
from tests.drivers.session_driver import SessionDriver, create_question


@pytest.fixture
def default_config():
    return AdaptiveDifficultyConfig.default()


@pytest.fixture
def engine(default_config):
    """Fresh engine with the default tuning."""
    return AdaptiveDifficultyEngine(default_config)


@pytest.fixture
def make_event():
    """
    Factory for OutcomeEvents with unique question ids and
    increasing timestamps.
    """
    counter = itertools.count(1)

    def _make(
        correct=True,
        category="characters",
        difficulty=DifficultyTier.EASY,
        time_spent_ms=1000,
    ):
        n = next(counter)
        return OutcomeEvent(
            question_id=f"Q{n}",
            category=category,
            difficulty=difficulty,
            correct=correct,
            time_spent_ms=time_spent_ms,
            timestamp=n,
        )

    return _make


@pytest.fixture
def record(make_event):
    """record(target, n, **event_kwargs) feeds n identical outcomes."""

    def _record(target, n, **kwargs):
        for _ in range(n):
            target.record_question_result(make_event(**kwargs))

    return _record


@pytest.fixture
def seeded_selector():
    return QuestionSelector(rng=random.Random(1234))


@pytest.fixture
def sample_pool():
    """Five questions per tier, split over two categories."""
    pool = []
    for tier in DifficultyTier:
        for i in range(5):
            category = "characters" if i % 2 == 0 else "comics"
            pool.append(create_question(f"{tier.value}_{i}", category, tier))
    return pool


@pytest.fixture
def driver(engine):
    return SessionDriver(engine)
