from typing import Protocol, TypeVar

from src.trivia.domain.models import DifficultyTier


class QuestionLike(Protocol):
    """
    Anything the selector can draw from a pool.
    Content tables and the remote API client both provide this shape.
    """

    @property
    def category(self) -> str: ...

    @property
    def difficulty(self) -> DifficultyTier: ...


Q = TypeVar("Q", bound=QuestionLike)


class DifficultySource(Protocol):
    """What the selector needs from an engine or a bare recommender."""

    def get_recommended_difficulty(
        self, category: str | None = None
    ) -> DifficultyTier: ...

    def should_offer_bonus_question(self) -> bool: ...

    def get_bonus_question_difficulty(self) -> DifficultyTier: ...
