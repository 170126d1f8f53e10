"""Complete the equation: one operand, or the operator itself, is hidden."""

import random

from mathbase.models.game import CompleteQuestion
from mathbase.utils.answer_computer import OPERATORS

from .arithmetic import ArithmeticContract
from .base import clamp_difficulty

# hiding the operator unlocks at this difficulty
OPERATION_HIDDEN_FROM = 3
PLACEHOLDER = "?"


def display_for(question_type: str, num1: int, operation: str, num2: int, answer: int) -> str:
    if question_type == "operand1":
        return f"{PLACEHOLDER} {operation} {num2} = {answer}"
    if question_type == "operand2":
        return f"{num1} {operation} {PLACEHOLDER} = {answer}"
    return f"{num1} {PLACEHOLDER} {num2} = {answer}"


class CompleteContract(ArithmeticContract):
    game_id = "complete"
    difficulty_divisor = 4

    ranges = {
        "+": [
            ((1, 15), (1, 15)),
            ((10, 59), (10, 59)),
            ((30, 129), (30, 129)),
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

    def build_variant(self, rng: random.Random, difficulty: int = 0) -> CompleteQuestion:
        difficulty = clamp_difficulty(difficulty)
        operation, num1, num2, answer = self.build_core(rng, difficulty)

        question_types = ["operand1", "operand2"]
        if difficulty >= OPERATION_HIDDEN_FROM:
            question_types.append("operation")
        question_type = rng.choice(question_types)

        if question_type == "operand1":
            correct_value = num1
        elif question_type == "operand2":
            correct_value = num2
        else:
            correct_value = operation

        return CompleteQuestion(
            num1=num1,
            num2=num2,
            operation=operation,
            answer=answer,
            difficulty=difficulty,
            question_type=question_type,
            display_text=display_for(question_type, num1, operation, num2, answer),
            correct_value=correct_value,
            symbol_options=list(OPERATORS) if question_type == "operation" else None,
        )

    def validate(self, question: CompleteQuestion) -> list[str]:
        issues = super().validate(question)
        if question.display_text.count(PLACEHOLDER) != 1:
            issues.append("placeholder_missing")
        if question.question_type == "operation":
            if question.correct_value != question.operation:
                issues.append("hidden_value_mismatch")
            if question.symbol_options != list(OPERATORS):
                issues.append("symbol_options")
        else:
            expected = question.num1 if question.question_type == "operand1" else question.num2
            if question.correct_value != expected:
                issues.append("hidden_value_mismatch")
        return issues

