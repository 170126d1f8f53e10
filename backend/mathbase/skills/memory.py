"""
Memory pairs: match each expression card with the card showing its value.

Every value on a board is unique, so each expression has exactly one partner.
The difficulty here is a session level that goes up by one each time the
player clears a board and chooses to continue.
"""

import logging
import random

from mathbase.models.game import Card
from mathbase.utils.answer_computer import apply_operator

from .base import GameContract, clamp_difficulty

logger = logging.getLogger("mathbase.memory")

DEFAULT_PAIRS = 6
# draw budget per requested pair before falling back to filler pairs
ATTEMPTS_PER_PAIR = 50
MAX_TIER = 2

# (num1 range, num2 range) per tier
OPERAND_RANGES = [
    ((1, 10), (1, 10)),
    ((5, 19), (5, 19)),
    ((10, 29), (3, 14)),
]
DIVISOR_RANGE = (2, 9)
QUOTIENT_RANGE = (2, 11)


def operators_for(tier: int) -> tuple[str, ...]:
    return ("+", "-", "×", "÷") if tier >= MAX_TIER else ("+", "-", "×")


def draw_expression(rng: random.Random, tier: int) -> tuple[str, int]:
    """Return (expression text, value) for one card pair."""
    operation = rng.choice(operators_for(tier))
    first, second = OPERAND_RANGES[tier]
    num1 = rng.randint(*first)
    num2 = rng.randint(*second)

    if operation == "-":
        num1, num2 = max(num1, num2), min(num1, num2)
    elif operation == "÷":
        divisor = rng.randint(*DIVISOR_RANGE)
        quotient = rng.randint(*QUOTIENT_RANGE)
        num1, num2 = divisor * quotient, divisor

    return f"{num1} {operation} {num2}", apply_operator(operation, num1, num2)


def memory_score(moves: int, elapsed: int, pairs: int) -> int:
    move_penalty = max(0, (moves - pairs) * 5)
    return max(10, 100 - move_penalty - elapsed // 10)


def stars(moves: int, elapsed: int, pairs: int) -> int:
    move_ratio = pairs / max(moves, 1)
    time_ratio = pairs * 3 / max(elapsed, 1)
    average = (move_ratio + time_ratio) / 2
    if average >= 0.7:
        return 3
    if average >= 0.4:
        return 2
    return 1


class MemoryContract(GameContract):
    game_id = "memory"

    def __init__(self, attempts_per_pair: int = ATTEMPTS_PER_PAIR):
        self.attempts_per_pair = attempts_per_pair

    def max_attempts_for(self, pair_count: int) -> int:
        return self.attempts_per_pair * pair_count

    def tier_for(self, difficulty: int) -> int:
        return min(clamp_difficulty(difficulty) // 2, MAX_TIER)

    def build_pairs(self, rng: random.Random, pair_count: int, difficulty: int = 0) -> list[tuple[str, int]]:
        if pair_count < 1:
            raise ValueError("pair_count must be at least 1")

        tier = self.tier_for(difficulty)
        pairs: list[tuple[str, int]] = []
        seen: set[int] = set()

        max_attempts = self.max_attempts_for(pair_count)
        attempts = 0
        while len(pairs) < pair_count and attempts < max_attempts:
            attempts += 1
            expr, value = draw_expression(rng, tier)
            if value not in seen:
                seen.add(value)
                pairs.append((expr, value))

        if len(pairs) < pair_count:
            logger.warning(
                "memory deck exhausted %d attempts with %d/%d pairs; using filler",
                max_attempts, len(pairs), pair_count,
            )
            value = max(seen, default=0)
            while len(pairs) < pair_count:
                value += 1
                pairs.append((f"{value} + 0", value))

        return pairs

    def build_variant(self, rng: random.Random, difficulty: int = 0, pair_count: int = DEFAULT_PAIRS) -> list[Card]:
        cards: list[Card] = []
        for expr, value in self.build_pairs(rng, pair_count, difficulty):
            cards.append(Card(id=len(cards), label=expr, value=value, kind="expression"))
            cards.append(Card(id=len(cards), label=str(value), value=value, kind="value"))
        rng.shuffle(cards)
        return cards

    def validate(self, cards: list[Card]) -> list[str]:
        issues = []
        if not cards or len(cards) % 2:
            issues.append("card_count")
        if len({c.id for c in cards}) != len(cards):
            issues.append("duplicate_ids")

        by_value: dict[int, list[Card]] = {}
        for card in cards:
            by_value.setdefault(card.value, []).append(card)
        for group in by_value.values():
            if sorted(c.kind for c in group) != ["expression", "value"]:
                issues.append("unpaired_value")
                break

        for card in cards:
            if card.kind == "expression":
                left, op, right = card.label.split(" ")
                if apply_operator(op, int(left), int(right)) != card.value:
                    issues.append("expression_mismatch")
                    break
        return issues
