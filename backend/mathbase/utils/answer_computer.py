"""
answer_computer.py: deterministic arithmetic for generated rounds.

Generators draw the numbers; every correct value shown to a learner is
computed here, never re-derived in the presentation layer.
"""
from math import gcd

OPERATORS: tuple[str, ...] = ("+", "-", "×", "÷")


def add(a: int, b: int) -> int:
    return a + b


def subtract(a: int, b: int) -> int:
    return a - b


def multiply(a: int, b: int) -> int:
    return a * b


def divide(a: int, b: int) -> int:
    """Exact integer division. Callers build dividends as divisor × quotient."""
    if b == 0:
        raise ZeroDivisionError("divisor must be non-zero")
    if a % b != 0:
        raise ValueError(f"{a} is not a multiple of {b}")
    return a // b


_APPLY = {
    "+": add,
    "-": subtract,
    "×": multiply,
    "÷": divide,
}


def apply_operator(operation: str, a: int, b: int) -> int:
    try:
        fn = _APPLY[operation]
    except KeyError:
        raise ValueError(f"unknown operator {operation!r}") from None
    return fn(a, b)


def simplify_fraction(numerator: int, denominator: int) -> tuple[int, int]:
    """
    Reduce numerator/denominator by their greatest common divisor.
    Examples:
        (6, 8)  → (3, 4)
        (10, 5) → (2, 1)
        (3, 7)  → (3, 7)
    """
    if denominator == 0:
        raise ZeroDivisionError("denominator must be non-zero")
    g = gcd(numerator, denominator) or 1
    n, d = numerator // g, denominator // g
    if d < 0:
        n, d = -n, -d
    return n, d


def format_fraction(numerator: int, denominator: int) -> str:
    """'n/d', or just 'n' when the denominator is 1."""
    if denominator == 1:
        return str(numerator)
    return f"{numerator}/{denominator}"


def simplify_ratio(a: int, b: int) -> tuple[int, int]:
    g = gcd(a, b) or 1
    return a // g, b // g


def format_number(value: float) -> str:
    """Integers without a decimal point, everything else to at most 2 places."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def signed_term(b: int) -> str:
    """Render the constant of 'ax + b' as '+ 3' or '- 3'."""
    return f"+ {b}" if b >= 0 else f"- {abs(b)}"
