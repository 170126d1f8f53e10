"""
Tests for the arithmetic games: quiz, multipleChoice, complete, timeAttack.

Every generated round is checked against the contract's own validate()
over many seeds and difficulties, plus targeted checks for operator
unlocking, magnitude tiers and the complete-the-equation display.
"""
import random

import pytest

from mathbase.skills.arithmetic import draw_operands, pick_operation
from mathbase.skills.complete import OPERATION_HIDDEN_FROM, CompleteContract
from mathbase.skills.multiple_choice import MultipleChoiceContract
from mathbase.skills.quiz import QuizContract
from mathbase.skills.time_attack import TimeAttackContract, points_for
from mathbase.utils.answer_computer import OPERATORS, apply_operator

CONTRACTS = [QuizContract(), MultipleChoiceContract(), CompleteContract(), TimeAttackContract()]


# ---------------------------------------------------------------------------
# Shared properties
# ---------------------------------------------------------------------------

class TestAllArithmeticGames:
    @pytest.mark.parametrize("contract", CONTRACTS, ids=lambda c: c.game_id)
    def test_rounds_validate(self, contract):
        for difficulty in range(0, 12):
            for seed in range(40):
                q = contract.build_variant(random.Random(seed), difficulty)
                assert contract.validate(q) == [], (difficulty, seed, q)

    @pytest.mark.parametrize("contract", CONTRACTS, ids=lambda c: c.game_id)
    def test_answer_is_consistent_and_non_negative(self, contract):
        for seed in range(200):
            rng = random.Random(seed)
            q = contract.build_variant(rng, rng.randint(0, 20))
            assert apply_operator(q.operation, q.num1, q.num2) == q.answer
            assert q.answer >= 0

    @pytest.mark.parametrize("contract", CONTRACTS, ids=lambda c: c.game_id)
    def test_negative_difficulty_is_clamped(self, contract):
        a = contract.build_variant(random.Random(3), -5)
        b = contract.build_variant(random.Random(3), 0)
        assert a == b
        assert a.difficulty == 0

    def test_division_is_exact(self):
        for seed in range(300):
            num1, num2, answer = draw_operands(random.Random(seed), "÷", ((2, 9), (2, 9)))
            assert num1 % num2 == 0
            assert num1 // num2 == answer

    def test_subtraction_never_negative(self):
        for seed in range(300):
            num1, num2, answer = draw_operands(random.Random(seed), "-", ((5, 19), None))
            assert 1 <= num2 <= num1
            assert answer >= 0


# ---------------------------------------------------------------------------
# Operator pool and tiers
# ---------------------------------------------------------------------------

class TestOperatorPool:
    def test_difficulty_zero_is_addition_only(self):
        assert {pick_operation(random.Random(s), 0) for s in range(100)} == {"+"}

    def test_pool_grows_with_difficulty(self):
        assert {pick_operation(random.Random(s), 1) for s in range(200)} == {"+", "-"}
        assert {pick_operation(random.Random(s), 2) for s in range(200)} == {"+", "-", "×"}
        assert {pick_operation(random.Random(s), 7) for s in range(200)} == set(OPERATORS)

    def test_quiz_first_tier_addition_range(self):
        quiz = QuizContract()
        for seed in range(100):
            q = quiz.build_variant(random.Random(seed), 0)
            assert q.operation == "+"
            assert 1 <= q.num1 <= 10 and 1 <= q.num2 <= 10

    def test_tier_caps_at_three(self):
        quiz = QuizContract()
        assert quiz.tier_for(0) == 0
        assert quiz.tier_for(3) == 1
        assert quiz.tier_for(50) == 3

    def test_quiz_has_no_options(self):
        assert QuizContract().build_variant(random.Random(1), 4).options is None


class TestDifficultyFromScore:
    def test_divisors(self):
        assert QuizContract().difficulty_for(12) == 2
        assert MultipleChoiceContract().difficulty_for(4) == 0
        assert CompleteContract().difficulty_for(9) == 2
        assert TimeAttackContract().difficulty_for(25) == 2

    def test_negative_score(self):
        assert QuizContract().difficulty_for(-10) == 0


# ---------------------------------------------------------------------------
# Multiple choice / time attack
# ---------------------------------------------------------------------------

class TestOptions:
    @pytest.mark.parametrize("contract", [MultipleChoiceContract(), TimeAttackContract()], ids=lambda c: c.game_id)
    def test_four_distinct_options_with_answer_once(self, contract):
        for seed in range(200):
            rng = random.Random(seed)
            q = contract.build_variant(rng, rng.randint(0, 8))
            assert len(q.options) == 4
            assert len(set(q.options)) == 4
            assert q.options.count(q.answer) == 1
            assert all(o > 0 for o in q.options if o != q.answer)

    def test_time_attack_uses_every_operator_from_the_start(self):
        ta = TimeAttackContract()
        ops = {ta.build_variant(random.Random(s), 0).operation for s in range(200)}
        assert ops == set(OPERATORS)

    def test_time_attack_tier_is_difficulty(self):
        ta = TimeAttackContract()
        assert ta.tier_for(2) == 2
        assert ta.tier_for(9) == 3

    def test_validate_flags_bad_options(self):
        mc = MultipleChoiceContract()
        q = mc.build_variant(random.Random(5), 0)
        broken = q.model_copy(update={"options": [q.answer, q.answer, 0, 1]})
        issues = mc.validate(broken)
        assert "options_not_distinct" in issues
        assert "answer_not_in_options" in issues
        assert "non_positive_distractor" in issues


class TestComboPoints:
    def test_combo_bonus_every_three(self):
        assert points_for(0) == 10
        assert points_for(2) == 10
        assert points_for(3) == 15
        assert points_for(7) == 20


# ---------------------------------------------------------------------------
# Complete the equation
# ---------------------------------------------------------------------------

class TestComplete:
    def test_operation_hidden_only_from_threshold(self):
        c = CompleteContract()
        below = {c.build_variant(random.Random(s), OPERATION_HIDDEN_FROM - 1).question_type for s in range(200)}
        above = {c.build_variant(random.Random(s), OPERATION_HIDDEN_FROM).question_type for s in range(300)}
        assert below == {"operand1", "operand2"}
        assert above == {"operand1", "operand2", "operation"}

    def test_display_templates(self):
        c = CompleteContract()
        for seed in range(200):
            q = c.build_variant(random.Random(seed), 6)
            if q.question_type == "operand1":
                assert q.display_text == f"? {q.operation} {q.num2} = {q.answer}"
                assert q.correct_value == q.num1
            elif q.question_type == "operand2":
                assert q.display_text == f"{q.num1} {q.operation} ? = {q.answer}"
                assert q.correct_value == q.num2
            else:
                assert q.display_text == f"{q.num1} ? {q.num2} = {q.answer}"
                assert q.correct_value == q.operation
                assert q.symbol_options == list(OPERATORS)

    def test_symbol_options_only_when_operator_hidden(self):
        c = CompleteContract()
        for seed in range(100):
            q = c.build_variant(random.Random(seed), 2)
            assert q.symbol_options is None

    def test_validate_catches_wrong_hidden_value(self):
        c = CompleteContract()
        q = c.build_variant(random.Random(8), 0)
        broken = q.model_copy(update={"correct_value": -1})
        assert "hidden_value_mismatch" in c.validate(broken)
