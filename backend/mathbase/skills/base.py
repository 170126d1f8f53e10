"""Base contract for practice-round generation.

Every game (quiz, sequence, memory, ...) subclasses GameContract and
overrides the relevant methods. All randomness comes from the injected
``rng`` so rounds can be reproduced in tests.
"""

import random


class GameContract:
    game_id: str = ""
    # difficulty = score // difficulty_divisor
    difficulty_divisor: int = 1

    def difficulty_for(self, score: int) -> int:
        return max(0, int(score)) // self.difficulty_divisor

    def build_variant(self, rng: random.Random, difficulty: int = 0):
        return None

    def validate(self, round_) -> list[str]:
        return []


def clamp_difficulty(difficulty: int) -> int:
    """Negative difficulties are treated as the easiest level."""
    return max(0, int(difficulty))
