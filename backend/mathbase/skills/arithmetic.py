"""
Shared arithmetic round builder for quiz, multipleChoice, complete and timeAttack.

Each game supplies its own magnitude table: for every operator, four tiers of
operand ranges (inclusive). The tier is derived from the difficulty and the
operator pool grows with it: ``+`` only at difficulty 0, then ``-``, ``×``, ``÷``.

Range conventions per operator:
    "+" / "×":  ((num1_lo, num1_hi), (num2_lo, num2_hi))
    "-":        ((minuend_lo, minuend_hi), None)   subtrahend drawn from 1..minuend
    "÷":        ((divisor_lo, divisor_hi), (quotient_lo, quotient_hi))
"""

import random
from typing import Optional

from mathbase.models.game import ArithmeticQuestion
from mathbase.skills.base import GameContract, clamp_difficulty
from mathbase.utils.answer_computer import OPERATORS, apply_operator

Range = tuple[int, int]
TierTable = dict[str, list[tuple[Range, Optional[Range]]]]

MAX_TIER = 3


def pick_operation(rng: random.Random, difficulty: int) -> str:
    unlocked = min(difficulty + 1, len(OPERATORS))
    return OPERATORS[rng.randrange(unlocked)]


def draw_operands(rng: random.Random, operation: str, ranges: tuple[Range, Optional[Range]]) -> tuple[int, int, int]:
    """Return (num1, num2, answer) for one operator at one tier."""
    first, second = ranges

    if operation == "-":
        num1 = rng.randint(*first)
        num2 = rng.randint(1, num1)
        return num1, num2, num1 - num2

    if operation == "÷":
        # built backwards so the quotient is always exact
        divisor = rng.randint(*first)
        quotient = rng.randint(*second)
        return divisor * quotient, divisor, quotient

    num1 = rng.randint(*first)
    num2 = rng.randint(*second)
    return num1, num2, apply_operator(operation, num1, num2)


class ArithmeticContract(GameContract):
    """Free-answer arithmetic round. Subclasses set ``ranges`` and divisors."""

    ranges: TierTable = {}

    def tier_for(self, difficulty: int) -> int:
        return min(difficulty // 2, MAX_TIER)

    def operation_for(self, rng: random.Random, difficulty: int) -> str:
        return pick_operation(rng, difficulty)

    def build_core(self, rng: random.Random, difficulty: int) -> tuple[str, int, int, int]:
        difficulty = clamp_difficulty(difficulty)
        operation = self.operation_for(rng, difficulty)
        tier = self.tier_for(difficulty)
        num1, num2, answer = draw_operands(rng, operation, self.ranges[operation][tier])
        return operation, num1, num2, answer

    def build_variant(self, rng: random.Random, difficulty: int = 0) -> ArithmeticQuestion:
        operation, num1, num2, answer = self.build_core(rng, difficulty)
        return ArithmeticQuestion(
            num1=num1,
            num2=num2,
            operation=operation,
            answer=answer,
            difficulty=clamp_difficulty(difficulty),
        )

    def validate(self, question: ArithmeticQuestion) -> list[str]:
        issues = []

        if question.operation == "÷" and (question.num2 == 0 or question.num1 % question.num2 != 0):
            issues.append("division_remainder")
            return issues

        if apply_operator(question.operation, question.num1, question.num2) != question.answer:
            issues.append("answer_mismatch")

        if question.answer < 0:
            issues.append("negative_answer")

        if question.options is not None:
            issues.extend(validate_options(question.answer, question.options))

        return issues


def validate_options(answer: int, options: list[int]) -> list[str]:
    issues = []
    if len(options) != 4:
        issues.append("option_count")
    if len(set(options)) != len(options):
        issues.append("options_not_distinct")
    if options.count(answer) != 1:
        issues.append("answer_not_in_options")
    if any(o <= 0 for o in options if o != answer):
        issues.append("non_positive_distractor")
    return issues
