"""
Tests for answer_computer.py: operators, fractions, ratios and formatting.
"""
import pytest
from mathbase.utils.answer_computer import (
    add, subtract, multiply, divide, apply_operator,
    simplify_fraction, format_fraction, simplify_ratio,
    format_number, signed_term,
)


# ── operators ────────────────────────────────────────────────────────────────

class TestOperators:
    def test_basic(self):
        assert add(7, 5) == 12
        assert subtract(7, 5) == 2
        assert multiply(7, 5) == 35
        assert divide(35, 5) == 7

    def test_divide_requires_exact_quotient(self):
        with pytest.raises(ValueError):
            divide(7, 2)

    def test_divide_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            divide(7, 0)

    def test_apply_operator_symbols(self):
        assert apply_operator("+", 3, 4) == 7
        assert apply_operator("-", 9, 4) == 5
        assert apply_operator("×", 3, 4) == 12
        assert apply_operator("÷", 12, 4) == 3

    def test_apply_operator_unknown(self):
        with pytest.raises(ValueError):
            apply_operator("^", 2, 3)


# ── fractions & ratios ───────────────────────────────────────────────────────

class TestFractions:
    def test_simplify(self):
        assert simplify_fraction(6, 8) == (3, 4)
        assert simplify_fraction(10, 5) == (2, 1)
        assert simplify_fraction(3, 7) == (3, 7)

    def test_simplify_negative_denominator(self):
        assert simplify_fraction(3, -6) == (-1, 2)

    def test_simplify_zero_denominator(self):
        with pytest.raises(ZeroDivisionError):
            simplify_fraction(1, 0)

    def test_reduced_pair_cross_multiplies(self):
        for n, d in [(4, 6), (12, 18), (5, 25), (7, 3)]:
            sn, sd = simplify_fraction(n, d)
            assert sn * d == n * sd

    def test_format_whole(self):
        assert format_fraction(2, 1) == "2"
        assert format_fraction(3, 4) == "3/4"

    def test_simplify_ratio(self):
        assert simplify_ratio(4, 6) == (2, 3)
        assert simplify_ratio(7, 7) == (1, 1)


# ── formatting ───────────────────────────────────────────────────────────────

class TestFormatting:
    def test_integers_have_no_decimal_point(self):
        assert format_number(12.0) == "12"
        assert format_number(5) == "5"

    def test_decimals_trimmed(self):
        assert format_number(12.5) == "12.5"
        assert format_number(26.666666) == "26.67"

    def test_float_noise_hidden(self):
        assert format_number(30 / 200 * 100) == "15"

    def test_signed_term(self):
        assert signed_term(3) == "+ 3"
        assert signed_term(0) == "+ 0"
        assert signed_term(-4) == "- 4"
