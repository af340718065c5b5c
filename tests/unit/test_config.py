from src.config import Category, GameConfig


class TestCategory:
    def test_all_labels_returns_list(self):
        """Verify all_labels() returns the known category keys."""
        labels = Category.all_labels()

        assert isinstance(labels, list)
        assert "characters" in labels
        assert "comics" in labels
        assert "teams" in labels

    def test_category_has_required_attributes(self):
        """Each category should have label and icon."""
        for cat in Category:
            assert isinstance(cat.label, str)
            assert isinstance(cat.icon, str)
            assert len(cat.label) > 0
            assert len(cat.icon) > 0

    def test_get_icon_returns_correct_icon(self):
        assert Category.get_icon("characters") == "🦸"
        assert Category.get_icon("movies") == "🎬"

    def test_get_icon_returns_default_for_free_text(self):
        assert Category.get_icon("Some Remote Category") == "❓"

    def test_all_categories_have_unique_labels(self):
        labels = Category.all_labels()
        assert len(labels) == len(set(labels))


class TestGameConfig:
    def test_increase_thresholds_are_ordered(self):
        assert (
            GameConfig.INCREASE_TO_MEDIUM
            <= GameConfig.INCREASE_TO_HARD
            <= GameConfig.INCREASE_TO_EXPERT
        )

    def test_decrease_thresholds_are_ordered(self):
        assert (
            GameConfig.DECREASE_TO_EASY
            <= GameConfig.DECREASE_TO_MEDIUM
            <= GameConfig.DECREASE_TO_HARD
        )

    def test_accuracy_weights_sum_to_one(self):
        total = GameConfig.OVERALL_ACCURACY_WEIGHT + GameConfig.RECENT_ACCURACY_WEIGHT
        assert abs(total - 1.0) < 1e-9

    def test_primary_ratio_is_valid_percentage(self):
        assert 0 <= GameConfig.PRIMARY_RATIO <= 1

    def test_window_and_gates_are_positive(self):
        assert GameConfig.RECENT_PERFORMANCE_WINDOW >= 1
        assert GameConfig.MIN_QUESTIONS_FOR_ADAPTATION >= 1
        assert GameConfig.STREAK_BONUS_THRESHOLD >= 1

    def test_categories_matches_enum(self):
        assert GameConfig.CATEGORIES == Category.all_labels()
