"""
Lesson challenge: four-option questions drawn from the topics of a studied module.

Module → topic mapping:
    "1"  fractions or percentage (even split)
    "2"  algebra
    "3"  equations
    "4"  proportion
    "5"  functions

Wrong options are simple perturbations of the correct value. Any perturbation
that collides with the correct option or another option is replaced by the
next free value from a per-question numeric fallback, so the four labels are
always distinct. Questions whose labels carry meaning by position (fraction
compare, solution check) keep their order; every other option list is shuffled.
"""

import random
from typing import Callable, Optional, Sequence

from mathbase.models.game import LessonQuestion
from mathbase.utils.answer_computer import (
    format_fraction,
    format_number,
    signed_term,
    simplify_fraction,
    simplify_ratio,
)

from .base import GameContract

OPTION_COUNT = 4


class UnknownModuleError(LookupError):
    pass


def distinct_options(correct: str, wrong: Sequence[str], alternative: Callable[[int], str]) -> list[str]:
    """
    Return [correct, *wrong] with collisions replaced.

    ``alternative(k)`` for k = 1, 2, ... must yield pairwise different labels.
    """
    options = [correct]
    k = 0
    for label in wrong:
        while label in options:
            k += 1
            label = alternative(k)
        options.append(label)
    return options


def _question(
    rng: random.Random,
    *,
    prompt: str,
    correct: str,
    wrong: Sequence[str],
    alternative: Callable[[int], str],
    category: str,
    module_id: str,
    kind: str,
    explanation: str,
    slots: dict[str, int],
    shuffle: bool = True,
) -> LessonQuestion:
    options = distinct_options(correct, wrong, alternative)
    if shuffle:
        rng.shuffle(options)
    return LessonQuestion(
        prompt=prompt,
        options=options,
        correct_index=options.index(correct),
        category=category,
        module_id=module_id,
        kind=kind,
        explanation=explanation,
        slots=slots,
    )


# ---------------------------------------------------------------------------
# Module 1: fractions
# ---------------------------------------------------------------------------

def fraction_add(rng: random.Random) -> LessonQuestion:
    d = rng.choice([2, 3, 4, 5, 6])
    n1 = rng.randint(1, d - 1)
    n2 = rng.randint(1, d - 1)
    total = n1 + n2
    correct = format_fraction(*simplify_fraction(total, d))
    return _question(
        rng,
        prompt=f"What is {n1}/{d} + {n2}/{d}?",
        correct=correct,
        wrong=[f"{total}/{d * 2}", f"{n1 * n2}/{d}", f"{abs(n1 - n2)}/{d}"],
        alternative=lambda k: f"{total + k}/{d}",
        category="fractions",
        module_id="1",
        kind="fraction_add",
        explanation=f"{n1}/{d} + {n2}/{d} = {total}/{d} = {correct}",
        slots={"n1": n1, "n2": n2, "d": d},
    )


def fraction_multiply(rng: random.Random) -> LessonQuestion:
    n1, d1 = rng.randint(1, 4), rng.randint(2, 5)
    n2, d2 = rng.randint(1, 4), rng.randint(2, 5)
    num, den = n1 * n2, d1 * d2
    correct = format_fraction(*simplify_fraction(num, den))
    return _question(
        rng,
        prompt=f"What is {n1}/{d1} × {n2}/{d2}?",
        correct=correct,
        wrong=[f"{n1 + n2}/{d1 + d2}", f"{num}/{d1 + d2}", f"{n1 + n2}/{den}"],
        alternative=lambda k: f"{num + k}/{den}",
        category="fractions",
        module_id="1",
        kind="fraction_multiply",
        explanation=f"{n1}/{d1} × {n2}/{d2} = {num}/{den} = {correct}",
        slots={"n1": n1, "d1": d1, "n2": n2, "d2": d2},
    )


def fraction_simplify(rng: random.Random) -> LessonQuestion:
    factor = rng.choice([2, 3, 4, 5])
    n = rng.randint(1, 5)
    d = rng.randint(2, 6)
    big_n, big_d = n * factor, d * factor
    correct = format_fraction(*simplify_fraction(big_n, big_d))
    return _question(
        rng,
        prompt=f"Simplify {big_n}/{big_d}:",
        correct=correct,
        wrong=[f"{n + 1}/{d}", f"{n}/{d + 1}", f"{big_n}/{big_d}"],
        alternative=lambda k: f"{big_n + k}/{big_d}",
        category="fractions",
        module_id="1",
        kind="fraction_simplify",
        explanation=f"{big_n}/{big_d} = {correct}",
        slots={"numerator": big_n, "denominator": big_d},
    )


def fraction_compare(rng: random.Random) -> LessonQuestion:
    n1, d1 = rng.randint(1, 3), rng.randint(2, 5)
    n2, d2 = rng.randint(1, 3), rng.randint(2, 5)
    if (n1, d1) == (n2, d2):
        d2 = d1 + 1 if d1 < 5 else d1 - 1

    # cross-multiplied so equal values compare exactly
    left, right = n1 * d2, n2 * d1
    correct_index = 0 if left > right else 1 if left < right else 2
    options = [f"{n1}/{d1}", f"{n2}/{d2}", "They are equal", "Cannot be compared"]

    return LessonQuestion(
        prompt=f"Which fraction is larger: {n1}/{d1} or {n2}/{d2}?",
        options=options,
        correct_index=correct_index,
        category="fractions",
        module_id="1",
        kind="fraction_compare",
        explanation=f"{n1}/{d1} = {n1 / d1:.2f} and {n2}/{d2} = {n2 / d2:.2f}",
        slots={"n1": n1, "d1": d1, "n2": n2, "d2": d2},
    )


# ---------------------------------------------------------------------------
# Module 1: percentage
# ---------------------------------------------------------------------------

def percent_of(rng: random.Random) -> LessonQuestion:
    percent = rng.choice([10, 20, 25, 30, 50])
    base = rng.choice([100, 200, 50, 80, 150])
    result = percent * base / 100
    return _question(
        rng,
        prompt=f"What is {percent}% of {base}?",
        correct=format_number(result),
        wrong=[format_number(result + 10), format_number(result * 2), format_number(result // 2)],
        alternative=lambda k: format_number(result + k),
        category="percentage",
        module_id="1",
        kind="percent_of",
        explanation=f"{percent}% of {base} = {percent}/100 × {base} = {format_number(result)}",
        slots={"percent": percent, "base": base},
    )


def what_percent(rng: random.Random) -> LessonQuestion:
    part = rng.choice([10, 20, 25, 30, 40])
    total = rng.choice([50, 100, 200])
    percent = part / total * 100
    return _question(
        rng,
        prompt=f"{part} is what percent of {total}?",
        correct=f"{format_number(percent)}%",
        wrong=[
            f"{format_number(percent + 10)}%",
            f"{format_number(percent * 2)}%",
            f"{format_number(percent // 2)}%",
        ],
        alternative=lambda k: f"{format_number(percent + k)}%",
        category="percentage",
        module_id="1",
        kind="what_percent",
        explanation=f"{part}/{total} = {format_number(percent / 100)} = {format_number(percent)}%",
        slots={"part": part, "total": total},
    )


def price_increase(rng: random.Random) -> LessonQuestion:
    price = rng.choice([100, 200, 50])
    increase = rng.choice([10, 20, 50])
    delta = price * increase / 100
    result = price + delta
    return _question(
        rng,
        prompt=f"A product costing ${price} goes up by {increase}%. What is the new price?",
        correct=format_number(result),
        wrong=[format_number(price + increase), format_number(result + 20), format_number(price * 2)],
        alternative=lambda k: format_number(result + k),
        category="percentage",
        module_id="1",
        kind="price_increase",
        explanation=f"{price} + {increase}% = {price} + {format_number(delta)} = {format_number(result)}",
        slots={"price": price, "increase": increase},
    )


# ---------------------------------------------------------------------------
# Module 2: algebra
# ---------------------------------------------------------------------------

def evaluate_expression(rng: random.Random) -> LessonQuestion:
    a, b, x = rng.randint(1, 5), rng.randint(1, 10), rng.randint(1, 5)
    result = a * x + b
    return _question(
        rng,
        prompt=f"If f(x) = {a}x + {b}, what is f({x})?",
        correct=str(result),
        wrong=[str(result + a), str(a + b + x), str(result - b)],
        alternative=lambda k: str(result + k),
        category="algebra",
        module_id="2",
        kind="evaluate_expression",
        explanation=f"f({x}) = {a}×{x} + {b} = {a * x} + {b} = {result}",
        slots={"a": a, "b": b, "x": x},
    )


def combine_like_terms(rng: random.Random) -> LessonQuestion:
    a, b = rng.randint(2, 6), rng.randint(1, 5)
    total = a + b
    return _question(
        rng,
        prompt=f"Simplify: {a}x + {b}x",
        correct=f"{total}x",
        wrong=[f"{a * b}x", f"{a}x²", f"{total}x²"],
        alternative=lambda k: f"{total + k}x",
        category="algebra",
        module_id="2",
        kind="combine_like_terms",
        explanation=f"{a}x + {b}x = ({a} + {b})x = {total}x",
        slots={"a": a, "b": b},
    )


def identify_coefficient(rng: random.Random) -> LessonQuestion:
    a, b = rng.randint(1, 5), rng.randint(-5, 4)
    return _question(
        rng,
        prompt=f"In the expression {a}x {signed_term(b)}, what is the coefficient of x?",
        correct=str(a),
        wrong=[str(b), str(a + b), "x"],
        alternative=lambda k: str(a + k),
        category="algebra",
        module_id="2",
        kind="identify_coefficient",
        explanation=f"The coefficient is the number multiplying x, so {a}",
        slots={"a": a, "b": b},
    )


# ---------------------------------------------------------------------------
# Module 3: equations
# ---------------------------------------------------------------------------

def solve_linear(rng: random.Random) -> LessonQuestion:
    x, a = rng.randint(1, 10), rng.randint(1, 5)
    b = a * x
    return _question(
        rng,
        prompt=f"Solve: {a}x = {b}",
        correct=str(x),
        wrong=[str(x + 1), str(x - 1), str(b)],
        alternative=lambda k: str(x + 1 + k),
        category="equations",
        module_id="3",
        kind="solve_linear",
        explanation=f"{a}x = {b} → x = {b}/{a} = {x}",
        slots={"a": a, "b": b, "x": x},
    )


def check_solution(rng: random.Random) -> LessonQuestion:
    x, a, b = rng.randint(1, 5), rng.randint(2, 4), rng.randint(1, 10)
    result = a * x + b
    return _question(
        rng,
        prompt=f"Is x = {x} a solution of {a}x + {b} = {result}?",
        correct="Yes",
        wrong=["No", "It depends", "Cannot be determined"],
        alternative=lambda k: str(k),
        category="equations",
        module_id="3",
        kind="check_solution",
        explanation=f"{a}×{x} + {b} = {a * x} + {b} = {result} ✓",
        slots={"a": a, "b": b, "x": x, "result": result},
        shuffle=False,
    )


def age_problem(rng: random.Random) -> LessonQuestion:
    age, years = rng.randint(5, 14), rng.randint(2, 6)
    future = age + years
    return _question(
        rng,
        prompt=f"In {years} years Sam will be {future}. How old is Sam now?",
        correct=str(age),
        wrong=[str(age + 1), str(future), str(age - years)],
        alternative=lambda k: str(age + 1 + k),
        category="equations",
        module_id="3",
        kind="age_problem",
        explanation=f"x + {years} = {future} → x = {future} - {years} = {age}",
        slots={"age": age, "years": years},
    )


# ---------------------------------------------------------------------------
# Module 4: proportion
# ---------------------------------------------------------------------------

def simplify_ratio_question(rng: random.Random) -> LessonQuestion:
    a, b = rng.randint(2, 11), rng.randint(2, 11)
    p, q = simplify_ratio(a, b)
    return _question(
        rng,
        prompt=f"Simplify the ratio {a}:{b}",
        correct=f"{p}:{q}",
        wrong=[f"{a}:{b}", f"{q}:{p}", f"1:{b // a}"],
        alternative=lambda k: f"{p}:{q + k}",
        category="proportion",
        module_id="4",
        kind="simplify_ratio",
        explanation=f"{a}:{b} = {p}:{q} (dividing by {a // p})",
        slots={"a": a, "b": b},
    )


def rule_of_three(rng: random.Random) -> LessonQuestion:
    a = rng.choice([2, 3, 4, 5])
    b = rng.choice([10, 20, 30, 40])
    c = rng.choice([4, 6, 8, 10])
    x = b * c / a
    return _question(
        rng,
        prompt=f"If {a} items cost ${b}, how much do {c} cost?",
        correct=format_number(x),
        wrong=[format_number(x + 10), format_number(a * c / b), format_number(a + b + c)],
        alternative=lambda k: format_number(x + k),
        category="proportion",
        module_id="4",
        kind="rule_of_three",
        explanation=f"{a} → {b}\n{c} → x\nx = ({b} × {c}) / {a} = {format_number(x)}",
        slots={"a": a, "b": b, "c": c},
    )


def missing_term(rng: random.Random) -> LessonQuestion:
    a, b = rng.randint(1, 5), rng.randint(2, 6)
    c, d = a * 2, b * 2
    return _question(
        rng,
        prompt=f"{a}/{b} = {c}/x. What is x?",
        correct=str(d),
        wrong=[str(b), str(c), str(a + b)],
        alternative=lambda k: str(d + k),
        category="proportion",
        module_id="4",
        kind="missing_term",
        explanation=f"{a}/{b} = {c}/x → x = ({c} × {b}) / {a} = {d}",
        slots={"a": a, "b": b, "c": c},
    )


# ---------------------------------------------------------------------------
# Module 5: functions
# ---------------------------------------------------------------------------

def evaluate_function(rng: random.Random) -> LessonQuestion:
    a, b, x = rng.randint(1, 4), rng.randint(-5, 4), rng.randint(1, 5)
    result = a * x + b
    return _question(
        rng,
        prompt=f"Given f(x) = {a}x {signed_term(b)}, find f({x}):",
        correct=str(result),
        wrong=[str(result + a), str(a + b), str(result - b)],
        alternative=lambda k: str(result + k),
        category="functions",
        module_id="5",
        kind="evaluate_function",
        explanation=f"f({x}) = {a}×{x} {signed_term(b)} = {result}",
        slots={"a": a, "b": b, "x": x},
    )


def slope_coefficient(rng: random.Random) -> LessonQuestion:
    a, b = rng.randint(1, 5), rng.randint(-5, 4)
    return _question(
        rng,
        prompt=f"In f(x) = {a}x {signed_term(b)}, what is the slope?",
        correct=str(a),
        wrong=[str(b), str(a + b), "x"],
        alternative=lambda k: str(a + k),
        category="functions",
        module_id="5",
        kind="slope_coefficient",
        explanation=f'In f(x) = ax + b the slope is "a" = {a}',
        slots={"a": a, "b": b},
    )


def function_root(rng: random.Random) -> LessonQuestion:
    a = rng.choice([1, 2, 3, 4])
    root = rng.randint(1, 5)
    b = -a * root
    return _question(
        rng,
        prompt=f"What is the root (zero) of f(x) = {a}x {signed_term(b)}?",
        correct=str(root),
        wrong=[str(root + 1), str(-root), str(b)],
        alternative=lambda k: str(root + 1 + k),
        category="functions",
        module_id="5",
        kind="function_root",
        explanation=f"{a}x {signed_term(b)} = 0 → x = {abs(b)}/{a} = {root}",
        slots={"a": a, "b": b, "root": root},
    )


TOPIC_GENERATORS: dict[str, tuple[Callable[[random.Random], LessonQuestion], ...]] = {
    "fractions": (fraction_add, fraction_multiply, fraction_simplify, fraction_compare),
    "percentage": (percent_of, what_percent, price_increase),
    "algebra": (evaluate_expression, combine_like_terms, identify_coefficient),
    "equations": (solve_linear, check_solution, age_problem),
    "proportion": (simplify_ratio_question, rule_of_three, missing_term),
    "functions": (evaluate_function, slope_coefficient, function_root),
}

MODULE_TOPICS: dict[str, tuple[str, ...]] = {
    "1": ("fractions", "percentage"),
    "2": ("algebra",),
    "3": ("equations",),
    "4": ("proportion",),
    "5": ("functions",),
}


class LessonChallengeContract(GameContract):
    game_id = "lessonChallenge"

    def build_variant(self, rng: random.Random, module_id: str = "1") -> LessonQuestion:
        try:
            topics = MODULE_TOPICS[module_id]
        except KeyError:
            raise UnknownModuleError(module_id) from None
        topic = rng.choice(topics)
        return rng.choice(TOPIC_GENERATORS[topic])(rng)

    def pick_module(self, rng: random.Random, studied: Sequence[str]) -> Optional[str]:
        """A random studied module, or None when nothing has been studied yet."""
        candidates = [m for m in studied if m in MODULE_TOPICS]
        if not candidates:
            return None
        return rng.choice(candidates)

    def validate(self, question: LessonQuestion) -> list[str]:
        issues = []
        if len(question.options) != OPTION_COUNT:
            issues.append("option_count")
        if len(set(question.options)) != len(question.options):
            issues.append("options_not_distinct")
        if not 0 <= question.correct_index < len(question.options):
            issues.append("correct_index_out_of_range")
        if question.category not in MODULE_TOPICS.get(question.module_id, ()):
            issues.append("category_module_mismatch")
        return issues
