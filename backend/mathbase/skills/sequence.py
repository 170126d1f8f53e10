"""
Sequence puzzles: find the hidden term of a six-term pattern.

Pattern families unlock with difficulty:
    0+  arithmetic, geometric
    2+  squares
    3+  fibonacci
    4+  primes
    5+  cubes

The hidden term is never the first or the last one, so the pattern can
always be read from both sides. Distractors follow the multiple-choice rules
and additionally never repeat a term that is already on screen.
"""

import random

from mathbase.models.game import Sequence
from mathbase.skills.distractors import DEFAULT_MAX_ATTEMPTS, build_distractors, shuffled_options

from .base import GameContract, clamp_difficulty

SEQUENCE_LENGTH = 6
FIBONACCI_SEED = (1, 1, 2, 3, 5, 8)
PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)

_UNLOCKS = (
    (0, "arithmetic"),
    (0, "geometric"),
    (2, "squares"),
    (3, "fibonacci"),
    (4, "primes"),
    (5, "cubes"),
)


def unlocked_patterns(difficulty: int) -> list[str]:
    return [name for threshold, name in _UNLOCKS if difficulty >= threshold]


def _arithmetic(rng: random.Random, level: int) -> tuple[list[int], int, int, str]:
    if level == 0:
        start, step = rng.randint(1, 10), rng.randint(2, 6)
    elif level == 1:
        start, step = rng.randint(10, 39), rng.randint(5, 14)
    else:
        start, step = rng.randint(20, 69), rng.randint(10, 29)
    numbers = [start + step * i for i in range(SEQUENCE_LENGTH)]
    return numbers, start, step, f"+{step}"


def _geometric(rng: random.Random, level: int) -> tuple[list[int], int, int, str]:
    start = rng.randint(1, 3)
    ratio = rng.randint(2, 3) if level == 0 else rng.randint(2, 4)
    numbers = [start * ratio ** i for i in range(SEQUENCE_LENGTH)]
    return numbers, start, ratio, f"×{ratio}"


def _squares(rng: random.Random, level: int) -> tuple[list[int], int, int, str]:
    offset = rng.randint(0, 4) + level
    numbers = [(i + 1 + offset) ** 2 for i in range(SEQUENCE_LENGTH)]
    return numbers, 1 + offset, 1, "n²"


def _fibonacci(rng: random.Random, level: int) -> tuple[list[int], int, int, str]:
    mult = rng.randint(1, level + 1)
    numbers = [n * mult for n in FIBONACCI_SEED]
    return numbers, mult, mult, "a + b = c"


def _primes(rng: random.Random, level: int) -> tuple[list[int], int, int, str]:
    start_idx = rng.randint(0, len(PRIMES) - SEQUENCE_LENGTH)
    numbers = list(PRIMES[start_idx:start_idx + SEQUENCE_LENGTH])
    return numbers, start_idx, 1, "primes"


def _cubes(rng: random.Random, level: int) -> tuple[list[int], int, int, str]:
    offset = rng.randint(0, 2)
    numbers = [(i + 1 + offset) ** 3 for i in range(SEQUENCE_LENGTH)]
    return numbers, 1 + offset, 1, "n³"


PATTERN_BUILDERS = {
    "arithmetic": _arithmetic,
    "geometric": _geometric,
    "squares": _squares,
    "fibonacci": _fibonacci,
    "primes": _primes,
    "cubes": _cubes,
}


def expected_terms(pattern: str, start: int, step: int) -> list[int]:
    """Rebuild the six terms from the family parameters stored on a Sequence."""
    idx = range(SEQUENCE_LENGTH)
    if pattern == "arithmetic":
        return [start + step * i for i in idx]
    if pattern == "geometric":
        return [start * step ** i for i in idx]
    if pattern == "squares":
        return [(start + i) ** 2 for i in idx]
    if pattern == "cubes":
        return [(start + i) ** 3 for i in idx]
    if pattern == "fibonacci":
        return [n * start for n in FIBONACCI_SEED]
    if pattern == "primes":
        return list(PRIMES[start:start + SEQUENCE_LENGTH])
    raise ValueError(f"unknown pattern {pattern!r}")


class SequenceContract(GameContract):
    game_id = "sequence"
    difficulty_divisor = 3
    distractor_pct = 0.15

    def __init__(self, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.max_attempts = max_attempts

    def build_variant(self, rng: random.Random, difficulty: int = 0) -> Sequence:
        difficulty = clamp_difficulty(difficulty)
        pattern = rng.choice(unlocked_patterns(difficulty))
        level = difficulty // 2

        numbers, start, step, hint = PATTERN_BUILDERS[pattern](rng, level)

        hidden_index = rng.randint(1, SEQUENCE_LENGTH - 2)
        answer = numbers[hidden_index]
        wrong = build_distractors(
            rng,
            answer,
            pct=self.distractor_pct,
            exclude=numbers,
            signed_zero_offset=True,
            max_attempts=self.max_attempts,
        )

        return Sequence(
            numbers=numbers,
            pattern=pattern,
            hidden_index=hidden_index,
            answer=answer,
            options=shuffled_options(rng, answer, wrong),
            hint=hint,
            start=start,
            step=step,
            difficulty=difficulty,
        )

    def validate(self, sequence: Sequence) -> list[str]:
        issues = []
        if len(sequence.numbers) != SEQUENCE_LENGTH:
            issues.append("length")
        if sequence.numbers != expected_terms(sequence.pattern, sequence.start, sequence.step):
            issues.append("pattern_mismatch")
        if not 1 <= sequence.hidden_index <= SEQUENCE_LENGTH - 2:
            issues.append("hidden_index_out_of_range")
        elif sequence.numbers[sequence.hidden_index] != sequence.answer:
            issues.append("answer_mismatch")

        options = sequence.options
        if len(options) != 4 or len(set(options)) != 4:
            issues.append("options_not_distinct")
        if options.count(sequence.answer) != 1:
            issues.append("answer_not_in_options")
        shown = set(sequence.numbers)
        if any(o in shown or o <= 0 for o in options if o != sequence.answer):
            issues.append("distractor_collides")
        return issues
