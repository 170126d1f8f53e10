"""Multiple choice: pick the result among four options."""

import random

from mathbase.models.game import ArithmeticQuestion
from mathbase.skills.base import clamp_difficulty
from mathbase.skills.distractors import DEFAULT_MAX_ATTEMPTS, build_distractors, shuffled_options

from .arithmetic import ArithmeticContract


class MultipleChoiceContract(ArithmeticContract):
    game_id = "multipleChoice"
    difficulty_divisor = 5
    distractor_pct = 0.2

    ranges = {
        "+": [
            ((1, 15), (1, 15)),
            ((15, 64), (15, 64)),
            ((50, 149), (50, 149)),
            ((100, 399), (100, 399)),
        ],
        "-": [
            ((10, 29), None),
            ((30, 109), None),
            ((50, 199), None),
            ((150, 549), None),
        ],
        "×": [
            ((2, 9), (2, 9)),
            ((3, 14), (3, 14)),
            ((5, 19), (5, 19)),
            ((10, 29), (5, 19)),
        ],
        "÷": [
            ((2, 7), (2, 9)),
            ((2, 11), (3, 14)),
            ((3, 14), (5, 19)),
            ((5, 19), (10, 29)),
        ],
    }

    def __init__(self, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.max_attempts = max_attempts

    def build_variant(self, rng: random.Random, difficulty: int = 0) -> ArithmeticQuestion:
        operation, num1, num2, answer = self.build_core(rng, difficulty)
        wrong = build_distractors(
            rng, answer, pct=self.distractor_pct, max_attempts=self.max_attempts,
        )
        return ArithmeticQuestion(
            num1=num1,
            num2=num2,
            operation=operation,
            answer=answer,
            difficulty=clamp_difficulty(difficulty),
            options=shuffled_options(rng, answer, wrong),
        )
