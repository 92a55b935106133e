"""Tests for SafeInt checked arithmetic."""

import pytest

from cpamm.constants import UINT256_MAX
from cpamm.safe_int import (
    DivisionByZero,
    S,
    SafeInt,
    SafeIntError,
    Uint256Overflow,
    Underflow,
)


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        """SafeInt can be constructed from another SafeInt."""
        assert SafeInt(SafeInt(7)).value == 7

    def test_rejects_non_int(self):
        """SafeInt rejects floats, strings and bools."""
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(3.14)  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(True)

    def test_alias_s(self):
        assert S is SafeInt

    def test_zero(self):
        assert SafeInt.zero().value == 0


class TestSafeIntArithmetic:
    """Tests for checked operators."""

    def test_add_and_mul(self):
        assert (S(2) + 3).value == 5
        assert (3 + S(2)).value == 5
        assert (S(6) * S(7)).value == 42
        assert (6 * S(7)).value == 42

    def test_sub(self):
        assert (S(10) - 4).value == 6
        assert (S(10) - S(10)).value == 0

    def test_sub_underflow(self):
        """Subtraction below zero raises Underflow."""
        with pytest.raises(Underflow):
            S(3) - 4
        with pytest.raises(Underflow):
            3 - S(4)

    def test_floordiv_truncates(self):
        assert (S(7) // 2).value == 3
        assert (S(1) // S(2)).value == 0

    def test_floordiv_by_zero(self):
        with pytest.raises(DivisionByZero):
            S(1) // 0

    def test_errors_share_base(self):
        """All SafeInt errors are ArithmeticErrors."""
        for error in (DivisionByZero, Underflow, Uint256Overflow):
            assert issubclass(error, SafeIntError)
            assert issubclass(error, ArithmeticError)


class TestSafeIntOperations:
    """Tests for min, isqrt and conversions."""

    def test_min(self):
        assert S(5).min(3).value == 3
        assert S(2).min(S(9)).value == 2

    @pytest.mark.parametrize(
        ("value", "root"),
        [(0, 0), (1, 1), (3, 1), (4, 2), (36, 6), (2_000_000, 1414), (10**36, 10**18)],
    )
    def test_isqrt_floor(self, value, root):
        assert S(value).isqrt().value == root

    def test_isqrt_negative(self):
        with pytest.raises(Underflow):
            S(-1).isqrt()

    def test_to_uint256_bounds(self):
        assert S(UINT256_MAX).to_uint256() == UINT256_MAX
        with pytest.raises(Uint256Overflow):
            S(UINT256_MAX + 1).to_uint256()
        with pytest.raises(Uint256Overflow):
            S(-1).to_uint256()

    def test_comparisons_with_int(self):
        assert S(3) == 3
        assert S(3) < 4
        assert S(3) <= S(3)
        assert S(5) > 4
        assert S(5) >= 5

    def test_bool_and_int(self):
        assert not S(0)
        assert S(1)
        assert int(S(9)) == 9
