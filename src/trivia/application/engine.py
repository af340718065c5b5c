from collections.abc import Mapping, Sequence
from typing import Any

from src.config import GameConfig
from src.shared.telemetry import Telemetry, measure_time
from src.trivia.domain.difficulty_recommender import DifficultyRecommender
from src.trivia.domain.models import (
    AdaptiveDifficultyConfig,
    CategoryStat,
    DifficultyTier,
    OutcomeEvent,
    PerformanceAnalysis,
    PlayerPerformance,
)
from src.trivia.domain.performance_tracker import PerformanceTracker
from src.trivia.domain.ports import Q
from src.trivia.domain.question_selector import QuestionSelector


class AdaptiveDifficultyEngine:
    """
    One player's adaptive state. Construct one per player/session;
    instances share nothing.

    Not thread-safe: hosts running several threads against the same player
    must serialize every call on this object.
    """

    def __init__(self, config: AdaptiveDifficultyConfig | None = None) -> None:
        self.config = config or AdaptiveDifficultyConfig.default()
        self.tracker = PerformanceTracker(self.config)
        self.recommender = DifficultyRecommender(self.tracker, self.config)
        self.telemetry = Telemetry("AdaptiveDifficultyEngine")

    @property
    def performance(self) -> PlayerPerformance:
        return self.tracker.performance

    # --- Writes ---
    @measure_time("record_question_result")
    def record_question_result(self, event: OutcomeEvent) -> None:
        self.tracker.record_question_result(event)

    # --- Reads ---
    def get_recent_accuracy(self) -> float:
        return self.tracker.get_recent_accuracy()

    def get_overall_accuracy(self) -> float:
        return self.tracker.get_overall_accuracy()

    def calculate_category_difficulty(self, stat: CategoryStat) -> DifficultyTier:
        return self.recommender.calculate_category_difficulty(stat)

    def get_recommended_difficulty(self, category: str | None = None) -> DifficultyTier:
        return self.recommender.get_recommended_difficulty(category)

    def should_offer_bonus_question(self) -> bool:
        return self.recommender.should_offer_bonus_question()

    def get_bonus_question_difficulty(self) -> DifficultyTier:
        return self.recommender.get_bonus_question_difficulty()

    def get_category_mastery(self, category: str) -> float:
        return self.recommender.get_category_mastery(category)

    def is_category_mastered(self, category: str) -> bool:
        return self.recommender.is_category_mastered(category)

    def get_weakest_categories(
        self, limit: int = GameConfig.RANKING_LIMIT
    ) -> list[str]:
        return self.recommender.get_weakest_categories(limit)

    def get_strongest_categories(
        self, limit: int = GameConfig.RANKING_LIMIT
    ) -> list[str]:
        return self.recommender.get_strongest_categories(limit)

    @measure_time("performance_analysis")
    def get_performance_analysis(self) -> PerformanceAnalysis:
        analysis = self.recommender.get_performance_analysis()
        self.telemetry.log_info("Performance Analysis", **analysis.summary())
        return analysis

    # --- Snapshot Hooks (persistence belongs to the caller) ---
    def export_performance(self) -> PlayerPerformance:
        return self.tracker.export_performance()

    @measure_time("import_performance")
    def import_performance(
        self, snapshot: PlayerPerformance | Mapping[str, Any]
    ) -> None:
        self.tracker.import_performance(snapshot)

    def reset_performance(self) -> None:
        self.tracker.reset_performance()


_default_selector = QuestionSelector()


def select_adaptive_questions(
    pool: Sequence[Q],
    engine: AdaptiveDifficultyEngine,
    count: int,
    category: str | None = None,
) -> list[Q]:
    return _default_selector.select(pool, engine, count, category)


def get_bonus_question(
    pool: Sequence[Q], engine: AdaptiveDifficultyEngine
) -> Q | None:
    return _default_selector.get_bonus_question(pool, engine)
