from enum import Enum
from typing import Final


class Category(Enum):
    # Enum Member = ("category key", "Icon")
    CHARACTERS = ("characters", "🦸")
    COMICS = ("comics", "📚")
    MOVIES = ("movies", "🎬")
    POWERS = ("powers", "⚡")
    TEAMS = ("teams", "🛡️")
    ORIGINS = ("origins", "🧬")

    def __init__(self, label: str, icon: str):
        self.label = label
        self.icon = icon

    @classmethod
    def get_icon(cls, label: str) -> str:
        """Returns the icon for a given category label, or a default."""
        for category in cls:
            if category.label == label:
                return category.icon
        return "❓"  # Free-text categories from remote content

    @classmethod
    def all_labels(cls) -> list[str]:
        """Returns a list of all known category keys."""
        return [c.label for c in cls]


class GameConfig:
    # --- Adaptation Gate ---
    MIN_QUESTIONS_FOR_ADAPTATION: Final[int] = 5

    # --- Accuracy Ladder ---
    INCREASE_TO_MEDIUM: Final[float] = 0.8
    INCREASE_TO_HARD: Final[float] = 0.85
    INCREASE_TO_EXPERT: Final[float] = 0.9
    DECREASE_TO_EASY: Final[float] = 0.4
    DECREASE_TO_MEDIUM: Final[float] = 0.6
    DECREASE_TO_HARD: Final[float] = 0.75

    # --- Streaks & Mastery ---
    STREAK_BONUS_THRESHOLD: Final[int] = 5
    RECENT_PERFORMANCE_WINDOW: Final[int] = 10
    CATEGORY_MASTERY_THRESHOLD: Final[float] = 0.85

    # --- Weighted Accuracy (overall vs. recent window) ---
    OVERALL_ACCURACY_WEIGHT: Final[float] = 0.3
    RECENT_ACCURACY_WEIGHT: Final[float] = 0.7

    # --- Selection Mix ---
    PRIMARY_RATIO: Final[float] = 0.7
    RANKING_LIMIT: Final[int] = 3

    # --- Categories ---
    CATEGORIES = Category.all_labels()
