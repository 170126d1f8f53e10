"""
Wrong-answer sampling shared by the multiple-choice style games.

Candidates are drawn as ``answer + offset`` with the offset range scaled to a
share of the answer (at least 5). Non-positive values, the answer itself,
repeats and any value in ``exclude`` are rejected. The retry loop is capped;
when it runs out the remaining slots are filled deterministically with the
nearest acceptable values above the answer.
"""

import logging
import random
from typing import Iterable

logger = logging.getLogger("mathbase.distractors")

DEFAULT_MAX_ATTEMPTS = 100
MIN_OFFSET_RANGE = 5


def offset_range_for(answer: int, pct: float) -> int:
    return max(MIN_OFFSET_RANGE, int(answer * pct))


def _acceptable(candidate: int, answer: int, taken: list[int], exclude: set[int]) -> bool:
    return (
        candidate > 0
        and candidate != answer
        and candidate not in taken
        and candidate not in exclude
    )


def filler_distractors(answer: int, taken: list[int], exclude: Iterable[int], count: int) -> list[int]:
    """Deterministic fallback: answer+1, answer+2, ... skipping rejected values."""
    excluded = set(exclude)
    out: list[int] = []
    candidate = max(answer, 0)
    while len(out) < count:
        candidate += 1
        if _acceptable(candidate, answer, taken + out, excluded):
            out.append(candidate)
    return out


def build_distractors(
    rng: random.Random,
    answer: int,
    *,
    pct: float,
    count: int = 3,
    exclude: Iterable[int] = (),
    signed_zero_offset: bool = False,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> list[int]:
    """
    Sample ``count`` unique wrong answers near ``answer``.

    A zero offset becomes +1, or a random ±1 when ``signed_zero_offset`` is set
    (sequence rounds).
    """
    excluded = set(exclude)
    spread = offset_range_for(answer, pct)
    wrong: list[int] = []

    attempts = 0
    while len(wrong) < count and attempts < max_attempts:
        attempts += 1
        offset = rng.randrange(-spread, spread)
        if offset == 0:
            offset = rng.choice((1, -1)) if signed_zero_offset else 1
        candidate = answer + offset
        if _acceptable(candidate, answer, wrong, excluded):
            wrong.append(candidate)

    if len(wrong) < count:
        logger.warning(
            "distractor sampling exhausted %d attempts for answer=%s; using filler",
            max_attempts, answer,
        )
        wrong.extend(filler_distractors(answer, wrong, excluded, count - len(wrong)))

    return wrong


def shuffled_options(rng: random.Random, answer: int, wrong: list[int]) -> list[int]:
    options = [*wrong, answer]
    rng.shuffle(options)
    return options
