from collections import deque
from collections.abc import Mapping
from typing import Any

from src.shared.telemetry import Telemetry
from src.trivia.domain.difficulty_recommender import calculate_category_difficulty
from src.trivia.domain.models import (
    AdaptiveDifficultyConfig,
    CategoryStat,
    DifficultyStat,
    DifficultyTier,
    OutcomeEvent,
    PlayerPerformance,
)


def _running_mean(old_mean: float, sample: float, n: int) -> float:
    return ((old_mean * (n - 1)) + sample) / n


def _accuracy(correct: int, answered: int) -> float:
    if answered == 0:
        return 0.0
    return correct / answered


class PerformanceTracker:
    """
    Pure Domain Logic.
    Owns the PlayerPerformance aggregate and is its only writer.
    """

    def __init__(self, config: AdaptiveDifficultyConfig) -> None:
        self.config = config
        self.telemetry = Telemetry("PerformanceTracker")
        self._performance = PlayerPerformance.initial(config.recent_performance_window)

    @property
    def performance(self) -> PlayerPerformance:
        """Live aggregate. Use export_performance() for a copy you can keep."""
        return self._performance

    def record_question_result(self, event: OutcomeEvent) -> None:
        perf = self._performance
        self.telemetry.count_outcome(event.correct)

        # 1. Totals & streaks
        perf.total_questions += 1
        if event.correct:
            perf.correct_answers += 1
            perf.streak_count += 1
            perf.longest_streak = max(perf.longest_streak, perf.streak_count)
            if perf.streak_count == self.config.streak_bonus_threshold:
                self.telemetry.log_info(
                    "Bonus Streak Reached", streak=perf.streak_count
                )
        else:
            if perf.streak_count > 0:
                self.telemetry.log_info("Streak Broken", was=perf.streak_count)
            perf.streak_count = 0

        # 2. Global response time
        perf.average_time_per_question = _running_mean(
            perf.average_time_per_question, event.time_spent_ms, perf.total_questions
        )

        # 3. Category (created on first sighting)
        self._update_category(event)

        # 4. Difficulty tier (always present)
        self._update_difficulty(event)

        # 5. Recent window
        perf.recent_performance.append(event)
        while len(perf.recent_performance) > self.config.recent_performance_window:
            perf.recent_performance.popleft()

    def _update_category(self, event: OutcomeEvent) -> None:
        categories = self._performance.category_performance
        stat = categories.get(event.category)
        if stat is None:
            stat = CategoryStat(category=event.category)
            categories[event.category] = stat

        stat.questions_answered += 1
        if event.correct:
            stat.correct_answers += 1
        stat.accuracy = _accuracy(stat.correct_answers, stat.questions_answered)
        stat.average_time_ms = _running_mean(
            stat.average_time_ms, event.time_spent_ms, stat.questions_answered
        )

        previous = stat.suggested_difficulty
        stat.suggested_difficulty = calculate_category_difficulty(stat, self.config)
        if stat.suggested_difficulty != previous:
            self.telemetry.log_info(
                "Category Difficulty Changed",
                category=event.category,
                old=previous.value,
                new=stat.suggested_difficulty.value,
            )

    def _update_difficulty(self, event: OutcomeEvent) -> None:
        tiers = self._performance.difficulty_performance
        stat = tiers.setdefault(
            event.difficulty, DifficultyStat(difficulty=event.difficulty)
        )

        stat.questions_answered += 1
        if event.correct:
            stat.correct_answers += 1
        stat.accuracy = _accuracy(stat.correct_answers, stat.questions_answered)
        stat.average_time_ms = _running_mean(
            stat.average_time_ms, event.time_spent_ms, stat.questions_answered
        )

    # --- Derived Reads ---
    def get_recent_accuracy(self) -> float:
        recent = self._performance.recent_performance
        return _accuracy(sum(1 for e in recent if e.correct), len(recent))

    def get_overall_accuracy(self) -> float:
        perf = self._performance
        return _accuracy(perf.correct_answers, perf.total_questions)

    # --- Snapshot Hooks ---
    def export_performance(self) -> PlayerPerformance:
        return self._performance.model_copy(deep=True)

    def import_performance(
        self, snapshot: PlayerPerformance | Mapping[str, Any]
    ) -> None:
        """
        Replace the aggregate wholesale.
        Accepts a PlayerPerformance or its dumped form (e.g. decoded JSON).
        """
        if isinstance(snapshot, PlayerPerformance):
            restored = snapshot.model_copy(deep=True)
        else:
            restored = PlayerPerformance.model_validate(snapshot)

        for tier in DifficultyTier:
            restored.difficulty_performance.setdefault(
                tier, DifficultyStat(difficulty=tier)
            )
        restored.recent_performance = deque(
            restored.recent_performance,
            maxlen=self.config.recent_performance_window,
        )

        self._performance = restored
        self.telemetry.log_info(
            "Performance Imported",
            total=restored.total_questions,
            categories=len(restored.category_performance),
        )

    def reset_performance(self) -> None:
        self._performance = PlayerPerformance.initial(
            self.config.recent_performance_window
        )
        self.telemetry.log_info("Performance Reset")
