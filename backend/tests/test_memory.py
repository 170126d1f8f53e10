"""
Tests for the memory-pair deck builder and its scoring.
"""
import random
from collections import Counter

import pytest

from mathbase.skills.memory import MemoryContract, draw_expression, memory_score, stars
from mathbase.utils.answer_computer import apply_operator

memory = MemoryContract()


class _SameValueRng(random.Random):
    """Every expression comes out as '1 + 1', so values always collide."""

    def choice(self, seq):
        return seq[0]

    def randint(self, a, b):
        return 1


# ---------------------------------------------------------------------------
# Deck shape
# ---------------------------------------------------------------------------

class TestDeck:
    def test_two_cards_per_value(self):
        for difficulty in range(0, 6):
            for seed in range(40):
                cards = memory.build_variant(random.Random(seed), difficulty, pair_count=6)
                assert len(cards) == 12
                counts = Counter(c.value for c in cards)
                assert set(counts.values()) == {2}
                assert memory.validate(cards) == []

    def test_each_value_has_expression_and_value_card(self):
        cards = memory.build_variant(random.Random(7), 2, pair_count=6)
        for value in {c.value for c in cards}:
            kinds = sorted(c.kind for c in cards if c.value == value)
            assert kinds == ["expression", "value"]

    def test_ids_are_unique(self):
        cards = memory.build_variant(random.Random(3), 0, pair_count=8)
        assert sorted(c.id for c in cards) == list(range(16))

    def test_single_pair(self):
        cards = memory.build_variant(random.Random(1), 0, pair_count=1)
        assert len(cards) == 2

    def test_zero_pairs_rejected(self):
        with pytest.raises(ValueError):
            memory.build_variant(random.Random(1), 0, pair_count=0)


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

class TestExpressions:
    def test_expression_matches_value(self):
        for tier in range(3):
            for seed in range(200):
                expr, value = draw_expression(random.Random(seed), tier)
                left, op, right = expr.split(" ")
                assert apply_operator(op, int(left), int(right)) == value

    def test_subtraction_written_larger_first(self):
        for seed in range(300):
            expr, value = draw_expression(random.Random(seed), 1)
            left, op, right = expr.split(" ")
            if op == "-":
                assert int(left) >= int(right)
                assert value >= 0

    def test_division_only_at_top_tier(self):
        low = {draw_expression(random.Random(s), 1)[0].split(" ")[1] for s in range(300)}
        high = {draw_expression(random.Random(s), 2)[0].split(" ")[1] for s in range(300)}
        assert "÷" not in low
        assert "÷" in high

    def test_tier_from_difficulty(self):
        assert memory.tier_for(0) == 0
        assert memory.tier_for(3) == 1
        assert memory.tier_for(10) == 2


# ---------------------------------------------------------------------------
# Retry cap
# ---------------------------------------------------------------------------

class TestFiller:
    def test_colliding_values_fall_back_to_filler(self):
        contract = MemoryContract(attempts_per_pair=1)
        pairs = contract.build_pairs(_SameValueRng(), 3, 0)
        assert pairs == [("1 + 1", 2), ("3 + 0", 3), ("4 + 0", 4)]

    def test_filler_deck_still_validates(self):
        contract = MemoryContract(attempts_per_pair=1)
        cards = contract.build_variant(_SameValueRng(), 0, pair_count=4)
        assert contract.validate(cards) == []

    def test_budget_scales_with_pair_count(self):
        assert memory.max_attempts_for(20) == 20 * memory.max_attempts_for(1)

    def test_large_easy_board_needs_no_filler(self):
        for seed in range(50):
            pairs = memory.build_pairs(random.Random(seed), 20, 0)
            assert len({value for _, value in pairs}) == 20
            assert not any(expr.endswith(" + 0") for expr, _ in pairs)


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

class TestScoring:
    def test_perfect_board(self):
        assert memory_score(6, 0, 6) == 100

    def test_move_and_time_penalties(self):
        # 4 extra moves → -20, 35 s → -3
        assert memory_score(10, 35, 6) == 77

    def test_floor_of_ten(self):
        assert memory_score(60, 600, 6) == 10

    def test_stars(self):
        assert stars(6, 18, 6) == 3
        assert stars(12, 40, 6) == 2
        assert stars(40, 300, 6) == 1
