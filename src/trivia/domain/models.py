import time
from collections import deque
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.config import GameConfig


# --- Enums ---
class DifficultyTier(str, Enum):
    """Ordered difficulty ladder: EASY < MEDIUM < HARD < EXPERT."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"

    @property
    def rank(self) -> int:
        return _TIER_ORDER.index(self)

    def harder(self) -> "DifficultyTier":
        return _TIER_ORDER[min(self.rank + 1, len(_TIER_ORDER) - 1)]

    def easier(self) -> "DifficultyTier":
        return _TIER_ORDER[max(self.rank - 1, 0)]

    # str already defines comparisons (alphabetical), so all four are explicit.
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DifficultyTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, DifficultyTier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, DifficultyTier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, DifficultyTier):
            return NotImplemented
        return self.rank >= other.rank


_TIER_ORDER: list[DifficultyTier] = [
    DifficultyTier.EASY,
    DifficultyTier.MEDIUM,
    DifficultyTier.HARD,
    DifficultyTier.EXPERT,
]


def _now_ms() -> int:
    return int(time.time() * 1000)


# --- Inbound Facts ---
class OutcomeEvent(BaseModel):
    """
    One answered (or timed-out) question, reported once by the UI layer.
    Categories are free text and times are taken as given.
    """

    model_config = ConfigDict(frozen=True)

    question_id: str
    category: str
    difficulty: DifficultyTier
    correct: bool
    time_spent_ms: int = 0
    timestamp: int = Field(default_factory=_now_ms)


class TriviaQuestion(BaseModel):
    """
    Pool entry. Only `category` and `difficulty` are read by the engine;
    any extra rendering fields are kept as-is.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    category: str
    difficulty: DifficultyTier


# --- Accumulators ---
class DifficultyStat(BaseModel):
    difficulty: DifficultyTier
    questions_answered: int = 0
    correct_answers: int = 0
    average_time_ms: float = 0.0
    accuracy: float = 0.0


class CategoryStat(BaseModel):
    category: str
    questions_answered: int = 0
    correct_answers: int = 0
    average_time_ms: float = 0.0
    accuracy: float = 0.0
    suggested_difficulty: DifficultyTier = DifficultyTier.EASY


def empty_difficulty_performance() -> dict[DifficultyTier, DifficultyStat]:
    return {tier: DifficultyStat(difficulty=tier) for tier in DifficultyTier}


class PlayerPerformance(BaseModel):
    """
    Aggregate root for one player's history.
    Mutated only by PerformanceTracker; callers get deep copies.
    """

    total_questions: int = 0
    correct_answers: int = 0
    average_time_per_question: float = 0.0
    category_performance: dict[str, CategoryStat] = Field(default_factory=dict)
    difficulty_performance: dict[DifficultyTier, DifficultyStat] = Field(
        default_factory=empty_difficulty_performance
    )
    streak_count: int = 0
    longest_streak: int = 0
    recent_performance: deque[OutcomeEvent] = Field(default_factory=deque)

    @classmethod
    def initial(cls, window: int) -> "PlayerPerformance":
        performance = cls()
        performance.recent_performance = deque(maxlen=window)
        return performance


# --- Configuration ---
class AccuracyThresholds(BaseModel):
    model_config = ConfigDict(frozen=True)

    increase_to_medium: float = Field(GameConfig.INCREASE_TO_MEDIUM, ge=0, le=1)
    increase_to_hard: float = Field(GameConfig.INCREASE_TO_HARD, ge=0, le=1)
    increase_to_expert: float = Field(GameConfig.INCREASE_TO_EXPERT, ge=0, le=1)
    decrease_to_easy: float = Field(GameConfig.DECREASE_TO_EASY, ge=0, le=1)
    decrease_to_medium: float = Field(GameConfig.DECREASE_TO_MEDIUM, ge=0, le=1)
    decrease_to_hard: float = Field(GameConfig.DECREASE_TO_HARD, ge=0, le=1)


class AdaptiveDifficultyConfig(BaseModel):
    """Immutable tuning for one engine instance."""

    model_config = ConfigDict(frozen=True)

    min_questions_for_adaptation: int = Field(
        GameConfig.MIN_QUESTIONS_FOR_ADAPTATION, ge=0
    )
    accuracy_thresholds: AccuracyThresholds = Field(
        default_factory=AccuracyThresholds
    )
    streak_bonus_threshold: int = Field(GameConfig.STREAK_BONUS_THRESHOLD, ge=0)
    recent_performance_window: int = Field(
        GameConfig.RECENT_PERFORMANCE_WINDOW, ge=1
    )
    category_mastery_threshold: float = Field(
        GameConfig.CATEGORY_MASTERY_THRESHOLD, ge=0, le=1
    )

    @classmethod
    def default(cls) -> "AdaptiveDifficultyConfig":
        return cls()


# --- Outbound DTOs ---
class PerformanceAnalysis(BaseModel):
    overall_accuracy: float
    recent_accuracy: float
    current_streak: int
    longest_streak: int
    mastered_categories: list[str] = []
    struggling_categories: list[str] = []
    recommended_focus: list[str] = []

    def summary(self) -> dict[str, Any]:
        return {
            "accuracy": round(self.overall_accuracy, 3),
            "recent": round(self.recent_accuracy, 3),
            "streak": self.current_streak,
        }
