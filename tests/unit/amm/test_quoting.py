"""Tests for constant-product quoting math."""

import pytest

from cpamm.amm import get_amount_in, get_amount_out, quote
from cpamm.errors import (
    InsufficientInput,
    InsufficientLiquidity,
    InsufficientOutputAmount,
    InvalidFeeBasis,
)


class TestQuote:
    """Tests for the proportional quote."""

    def test_proportional(self):
        assert quote(100, 1000, 2000) == 200

    def test_truncates(self):
        """floor(3 * 10 / 7) = 4."""
        assert quote(3, 7, 10) == 4

    def test_may_round_to_zero(self):
        assert quote(1, 2000, 1000) == 0

    def test_zero_amount(self):
        with pytest.raises(InsufficientInput):
            quote(0, 1000, 2000)

    @pytest.mark.parametrize(("reserve_known", "reserve_other"), [(0, 1000), (1000, 0), (0, 0)])
    def test_zero_reserve(self, reserve_known, reserve_other):
        with pytest.raises(InsufficientLiquidity):
            quote(10, reserve_known, reserve_other)


class TestGetAmountOut:
    """Tests for exact-input swap pricing."""

    def test_no_fee(self):
        """100 in against (1000, 2000): floor(100 * 2000 / 1100) = 181."""
        assert get_amount_out(100, 1000, 2000) == 181

    def test_reverse_direction(self):
        """100 in against (2000, 1000): floor(100 * 1000 / 2100) = 47."""
        assert get_amount_out(100, 2000, 1000) == 47

    def test_fee_reduces_output(self):
        """1000 in against (10_000, 10_000): 909 without fee, 906 at 0.3%."""
        assert get_amount_out(1000, 10_000, 10_000) == 909
        assert get_amount_out(1000, 10_000, 10_000, fee_basis=3) == 906

    def test_dust_input_yields_zero(self):
        assert get_amount_out(1, 2000, 1000) == 0

    def test_never_drains_reserve(self):
        """Even an enormous input leaves at least one unit behind."""
        assert get_amount_out(10**30, 1000, 2000) == 1999

    def test_zero_input(self):
        with pytest.raises(InsufficientInput):
            get_amount_out(0, 1000, 2000)

    def test_zero_reserve(self):
        with pytest.raises(InsufficientLiquidity):
            get_amount_out(100, 0, 2000)
        with pytest.raises(InsufficientLiquidity):
            get_amount_out(100, 1000, 0)

    @pytest.mark.parametrize("fee_basis", [-1, 1000, 1500])
    def test_invalid_fee(self, fee_basis):
        with pytest.raises(InvalidFeeBasis):
            get_amount_out(100, 1000, 2000, fee_basis=fee_basis)


class TestGetAmountIn:
    """Tests for exact-output swap pricing."""

    def test_no_fee(self):
        assert get_amount_in(909, 10_000, 10_000) == 1000

    def test_with_fee(self):
        assert get_amount_in(906, 10_000, 10_000, fee_basis=3) == 1000

    @pytest.mark.parametrize("fee_basis", [0, 3, 30])
    def test_input_covers_output(self, fee_basis):
        """Paying get_amount_in always yields at least the requested output."""
        for amount_out in (1, 50, 500, 1999):
            amount_in = get_amount_in(amount_out, 1000, 2000, fee_basis)
            assert get_amount_out(amount_in, 1000, 2000, fee_basis) >= amount_out

    def test_zero_output(self):
        with pytest.raises(InsufficientOutputAmount):
            get_amount_in(0, 1000, 2000)

    def test_output_must_be_below_reserve(self):
        with pytest.raises(InsufficientLiquidity):
            get_amount_in(2000, 1000, 2000)

    def test_zero_reserve(self):
        with pytest.raises(InsufficientLiquidity):
            get_amount_in(10, 0, 2000)
