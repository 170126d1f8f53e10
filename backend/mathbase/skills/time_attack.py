"""Time attack: 60 seconds, all four operators from the first round."""

import random

from mathbase.utils.answer_computer import OPERATORS

from .arithmetic import MAX_TIER
from .multiple_choice import MultipleChoiceContract

GAME_DURATION = 60
TIME_BONUS = 2
BASE_POINTS = 10
COMBO_STEP = 3
COMBO_BONUS = 5


def points_for(combo: int) -> int:
    """Points for a correct answer given the combo before it."""
    return BASE_POINTS + (combo // COMBO_STEP) * COMBO_BONUS


class TimeAttackContract(MultipleChoiceContract):
    game_id = "timeAttack"
    # difficulty is the magnitude tier itself here, one per 10 points
    difficulty_divisor = 10
    distractor_pct = 0.15

    ranges = {
        "+": [
            ((1, 20), (1, 20)),
            ((20, 69), (20, 69)),
            ((50, 149), (50, 149)),
            ((100, 299), (100, 299)),
        ],
        "-": [
            ((10, 34), None),
            ((30, 109), None),
            ((50, 199), None),
            ((100, 399), None),
        ],
        "×": [
            ((2, 11), (2, 11)),
            ((3, 14), (3, 14)),
            ((5, 19), (3, 14)),
            ((10, 29), (5, 19)),
        ],
        "÷": [
            ((2, 10), (2, 11)),
            ((2, 13), (3, 14)),
            ((3, 17), (5, 19)),
            ((5, 24), (10, 29)),
        ],
    }

    def tier_for(self, difficulty: int) -> int:
        return min(difficulty, MAX_TIER)

    def operation_for(self, rng: random.Random, difficulty: int) -> str:
        return rng.choice(OPERATORS)
