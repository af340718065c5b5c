from typing import TYPE_CHECKING

from src.config import GameConfig
from src.trivia.domain.models import (
    AccuracyThresholds,
    AdaptiveDifficultyConfig,
    CategoryStat,
    DifficultyTier,
    PerformanceAnalysis,
    PlayerPerformance,
)

if TYPE_CHECKING:
    from src.trivia.domain.performance_tracker import PerformanceTracker


def tier_for_accuracy(
    accuracy: float, thresholds: AccuracyThresholds
) -> DifficultyTier:
    """Top-down ladder over the 'increase' thresholds."""
    if accuracy >= thresholds.increase_to_expert:
        return DifficultyTier.EXPERT
    if accuracy >= thresholds.increase_to_hard:
        return DifficultyTier.HARD
    if accuracy >= thresholds.increase_to_medium:
        return DifficultyTier.MEDIUM
    return DifficultyTier.EASY


def calculate_category_difficulty(
    stat: CategoryStat, config: AdaptiveDifficultyConfig
) -> DifficultyTier:
    """
    Suggested tier for one category.

    Under-sampled categories stay EASY. Only the increase thresholds are
    consulted, so a category keeps its tier until accuracy drops below the
    rung it earned.
    """
    if stat.questions_answered < config.min_questions_for_adaptation:
        return DifficultyTier.EASY
    return tier_for_accuracy(stat.accuracy, config.accuracy_thresholds)


class DifficultyRecommender:
    """
    Read-only view over a PlayerPerformance.
    Holds no state of its own beyond the config and a performance provider.
    """

    def __init__(
        self, tracker: "PerformanceTracker", config: AdaptiveDifficultyConfig
    ) -> None:
        self.tracker = tracker
        self.config = config

    @property
    def _performance(self) -> PlayerPerformance:
        return self.tracker.performance

    def calculate_category_difficulty(self, stat: CategoryStat) -> DifficultyTier:
        return calculate_category_difficulty(stat, self.config)

    def get_weighted_accuracy(self) -> float:
        return (
            self.tracker.get_overall_accuracy() * GameConfig.OVERALL_ACCURACY_WEIGHT
            + self.tracker.get_recent_accuracy() * GameConfig.RECENT_ACCURACY_WEIGHT
        )

    def get_recommended_difficulty(self, category: str | None = None) -> DifficultyTier:
        perf = self._performance
        minimum = self.config.min_questions_for_adaptation

        if perf.total_questions < minimum:
            return DifficultyTier.EASY

        if category is not None:
            stat = perf.category_performance.get(category)
            if stat is not None and stat.questions_answered >= minimum:
                return stat.suggested_difficulty

        return tier_for_accuracy(
            self.get_weighted_accuracy(), self.config.accuracy_thresholds
        )

    # --- Bonus Questions ---
    def should_offer_bonus_question(self) -> bool:
        return self._performance.streak_count >= self.config.streak_bonus_threshold

    def get_bonus_question_difficulty(self) -> DifficultyTier:
        return DifficultyTier.EXPERT

    # --- Category Rankings ---
    def _ranked_stats(self) -> list[CategoryStat]:
        minimum = self.config.min_questions_for_adaptation
        return [
            stat
            for stat in self._performance.category_performance.values()
            if stat.questions_answered >= minimum
        ]

    def _sampled_stat(self, category: str) -> CategoryStat | None:
        stat = self._performance.category_performance.get(category)
        if stat is None:
            return None
        if stat.questions_answered < self.config.min_questions_for_adaptation:
            return None
        return stat

    def get_category_mastery(self, category: str) -> float:
        stat = self._sampled_stat(category)
        return stat.accuracy if stat else 0.0

    def is_category_mastered(self, category: str) -> bool:
        stat = self._sampled_stat(category)
        if stat is None:
            return False
        return stat.accuracy >= self.config.category_mastery_threshold

    def get_weakest_categories(self, limit: int = GameConfig.RANKING_LIMIT) -> list[str]:
        # Ties resolve by category name in both rankings.
        ranked = sorted(self._ranked_stats(), key=lambda s: (s.accuracy, s.category))
        return [s.category for s in ranked[: max(limit, 0)]]

    def get_strongest_categories(
        self, limit: int = GameConfig.RANKING_LIMIT
    ) -> list[str]:
        ranked = sorted(self._ranked_stats(), key=lambda s: (-s.accuracy, s.category))
        return [s.category for s in ranked[: max(limit, 0)]]

    def get_performance_analysis(self) -> PerformanceAnalysis:
        perf = self._performance
        struggling = self.get_weakest_categories(GameConfig.RANKING_LIMIT)
        mastered = [
            name for name in perf.category_performance if self.is_category_mastered(name)
        ]
        return PerformanceAnalysis(
            overall_accuracy=self.tracker.get_overall_accuracy(),
            recent_accuracy=self.tracker.get_recent_accuracy(),
            current_streak=perf.streak_count,
            longest_streak=perf.longest_streak,
            mastered_categories=mastered,
            struggling_categories=struggling,
            recommended_focus=list(struggling),
        )
