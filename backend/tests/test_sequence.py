"""
Tests for the sequence puzzle generator.
"""
import random

import pytest

from mathbase.models.game import Sequence
from mathbase.skills.sequence import (
    PATTERN_BUILDERS,
    PRIMES,
    SequenceContract,
    expected_terms,
    unlocked_patterns,
)

seq_contract = SequenceContract()


def _by_pattern(pattern: str, difficulty: int, seeds: int = 400) -> list[Sequence]:
    out = []
    for seed in range(seeds):
        s = seq_contract.build_variant(random.Random(seed), difficulty)
        if s.pattern == pattern:
            out.append(s)
    return out


# ---------------------------------------------------------------------------
# Pattern unlocking
# ---------------------------------------------------------------------------

class TestUnlocks:
    def test_pool_by_difficulty(self):
        assert unlocked_patterns(0) == ["arithmetic", "geometric"]
        assert unlocked_patterns(2) == ["arithmetic", "geometric", "squares"]
        assert unlocked_patterns(3)[-1] == "fibonacci"
        assert unlocked_patterns(4)[-1] == "primes"
        assert unlocked_patterns(5) == list(PATTERN_BUILDERS)

    def test_only_unlocked_patterns_generated(self):
        seen = {seq_contract.build_variant(random.Random(s), 1).pattern for s in range(200)}
        assert seen == {"arithmetic", "geometric"}

    def test_all_patterns_reachable(self):
        seen = {seq_contract.build_variant(random.Random(s), 10).pattern for s in range(400)}
        assert seen == set(PATTERN_BUILDERS)


# ---------------------------------------------------------------------------
# Structural invariants
# ---------------------------------------------------------------------------

class TestSequenceRounds:
    def test_rounds_validate(self):
        for difficulty in range(0, 12):
            for seed in range(60):
                s = seq_contract.build_variant(random.Random(seed), difficulty)
                assert seq_contract.validate(s) == [], (difficulty, seed, s)

    def test_hidden_index_never_at_the_ends(self):
        indexes = {seq_contract.build_variant(random.Random(s), 6).hidden_index for s in range(300)}
        assert indexes == {1, 2, 3, 4}

    def test_answer_is_the_hidden_term(self):
        for seed in range(200):
            s = seq_contract.build_variant(random.Random(seed), 8)
            assert s.numbers[s.hidden_index] == s.answer
            assert len(s.numbers) == 6

    def test_distractors_never_show_a_visible_term(self):
        for seed in range(300):
            s = seq_contract.build_variant(random.Random(seed), 10)
            wrong = [o for o in s.options if o != s.answer]
            assert len(wrong) == 3
            assert not set(wrong) & set(s.numbers)
            assert all(w > 0 for w in wrong)
            assert len(set(s.options)) == 4


# ---------------------------------------------------------------------------
# Family formulas
# ---------------------------------------------------------------------------

class TestFamilies:
    def test_arithmetic_ranges_by_level(self):
        for s in _by_pattern("arithmetic", 0):
            assert 1 <= s.start <= 10 and 2 <= s.step <= 6
            assert s.hint == f"+{s.step}"
        for s in _by_pattern("arithmetic", 4):
            assert 20 <= s.start <= 69 and 10 <= s.step <= 29

    def test_geometric(self):
        for s in _by_pattern("geometric", 0):
            assert s.numbers == [s.start * s.step ** i for i in range(6)]
            assert 2 <= s.step <= 3
            assert s.hint == f"×{s.step}"

    def test_squares_and_cubes(self):
        for s in _by_pattern("squares", 5):
            assert all(int(round(n ** 0.5)) ** 2 == n for n in s.numbers)
            assert s.hint == "n²"
        for s in _by_pattern("cubes", 5):
            assert s.numbers == [(s.start + i) ** 3 for i in range(6)]
            assert 1 <= s.start <= 3

    def test_fibonacci_recurrence(self):
        found = _by_pattern("fibonacci", 5)
        assert found
        for s in found:
            n = s.numbers
            assert all(n[i] + n[i + 1] == n[i + 2] for i in range(1, 4))
            assert s.hint == "a + b = c"

    def test_primes_are_consecutive(self):
        for s in _by_pattern("primes", 4):
            i = PRIMES.index(s.numbers[0])
            assert s.numbers == list(PRIMES[i:i + 6])

    @pytest.mark.parametrize("pattern", list(PATTERN_BUILDERS))
    def test_expected_terms_matches_builder(self, pattern):
        for seed in range(50):
            numbers, start, step, _ = PATTERN_BUILDERS[pattern](random.Random(seed), seed % 4)
            assert expected_terms(pattern, start, step) == numbers

    def test_validate_flags_tampered_terms(self):
        s = seq_contract.build_variant(random.Random(2), 0)
        broken = s.model_copy(update={"numbers": [*s.numbers[:-1], s.numbers[-1] + 1]})
        assert "pattern_mismatch" in seq_contract.validate(broken)
