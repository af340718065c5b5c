import math
import random
from collections.abc import Sequence

from src.config import GameConfig
from src.shared.telemetry import Telemetry
from src.trivia.domain.ports import DifficultySource, Q


class QuestionSelector:
    """
    Pure Domain Logic.
    Builds a batch that is mostly the recommended tier, with the remainder
    drawn from other tiers for calibration and variety.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()
        self.telemetry = Telemetry("QuestionSelector")

    def select(
        self,
        pool: Sequence[Q],
        engine: DifficultySource,
        count: int,
        category: str | None = None,
    ) -> list[Q]:
        if count <= 0:
            return []

        # 1. Target tier
        recommended = engine.get_recommended_difficulty(category)

        # 2. Universe
        universe = [q for q in pool if category is None or q.category == category]
        if not universe:
            return []

        # 3. Segregate by index so equal-looking items stay distinct
        primary = [i for i, q in enumerate(universe) if q.difficulty == recommended]
        secondary = [i for i, q in enumerate(universe) if q.difficulty != recommended]

        # 4. Targets
        primary_target = math.ceil(count * GameConfig.PRIMARY_RATIO)
        secondary_target = count - primary_target

        # 5. Independent draws
        self.rng.shuffle(primary)
        self.rng.shuffle(secondary)
        chosen = primary[:primary_target] + secondary[:secondary_target]

        # 6. Backfill from whatever was not drawn
        if len(chosen) < count:
            taken = set(chosen)
            leftovers = [i for i in range(len(universe)) if i not in taken]
            self.rng.shuffle(leftovers)
            chosen.extend(leftovers[: count - len(chosen)])

        # 7. Hide the primary/secondary ordering
        self.rng.shuffle(chosen)

        self.telemetry.log_info(
            "Adaptive Selection",
            recommended=recommended.value,
            category=category,
            primary=len(primary),
            secondary=len(secondary),
            requested=count,
            selected=len(chosen),
        )
        return [universe[i] for i in chosen]

    def get_bonus_question(
        self, pool: Sequence[Q], engine: DifficultySource
    ) -> Q | None:
        if not engine.should_offer_bonus_question():
            return None

        bonus_tier = engine.get_bonus_question_difficulty()
        candidates = [q for q in pool if q.difficulty == bonus_tier]
        if not candidates:
            self.telemetry.log_info("No Bonus Question Available", tier=bonus_tier.value)
            return None
        return self.rng.choice(candidates)

