"""Tests for swaps through a pool."""

import pytest

from cpamm.errors import (
    IdenticalAddress,
    InsufficientAllowance,
    InsufficientInput,
    InsufficientLiquidity,
    InsufficientOutputAmount,
    InvalidToken,
)
from cpamm.pool.reserves import Reserves
from tests.helpers import ALICE, BOB, CAROL, DAI, fund, make_seeded_pool


class TestSwap:
    """Tests for Pool.swap against reserves (1000, 2000)."""

    def test_a_for_b(self, ledger, seeded_pool, trader):
        amount_out = seeded_pool.swap(trader, seeded_pool.asset_a, seeded_pool.asset_b, 100)

        assert amount_out == 181
        assert seeded_pool.get_reserves() == (1100, 1819)
        assert ledger.balance_of(seeded_pool.asset_a, trader) == 9_900
        assert ledger.balance_of(seeded_pool.asset_b, trader) == 10_181

    def test_b_for_a(self, seeded_pool, trader):
        amount_out = seeded_pool.swap(trader, seeded_pool.asset_b, seeded_pool.asset_a, 100)

        assert amount_out == 47
        assert seeded_pool.get_reserves() == (953, 2100)

    def test_token_case_is_ignored(self, seeded_pool, trader):
        token_in = "0x" + seeded_pool.asset_a[2:].upper()
        assert seeded_pool.swap(trader, token_in, seeded_pool.asset_b, 100) == 181

    def test_quote_matches_swap(self, seeded_pool, trader):
        token_out, quoted = seeded_pool.quote_swap(seeded_pool.asset_b, 250)
        assert token_out == seeded_pool.asset_a
        assert seeded_pool.swap(trader, seeded_pool.asset_b, token_out, 250) == quoted

    def test_reserves_match_balances(self, ledger, seeded_pool, trader):
        seeded_pool.swap(trader, seeded_pool.asset_a, seeded_pool.asset_b, 321)
        seeded_pool.swap(trader, seeded_pool.asset_b, seeded_pool.asset_a, 55)
        assert seeded_pool.get_reserves() == (
            ledger.balance_of(seeded_pool.asset_a, seeded_pool.address),
            ledger.balance_of(seeded_pool.asset_b, seeded_pool.address),
        )

    def test_product_never_decreases(self, seeded_pool, trader):
        pool = seeded_pool
        k = pool.reserves.product
        for token_in, token_out, amount in [
            (pool.asset_a, pool.asset_b, 7),
            (pool.asset_b, pool.asset_a, 333),
            (pool.asset_a, pool.asset_b, 1_500),
            (pool.asset_b, pool.asset_a, 3),
        ]:
            pool.swap(trader, token_in, token_out, amount)
            assert pool.reserves.product >= k
            k = pool.reserves.product


class TestSwapFee:
    """Tests for pools that charge a swap fee."""

    def test_fee_lowers_output(self, ledger):
        pool = make_seeded_pool(10_000, 10_000, provider=ALICE, fee_basis=3, ledger=ledger)
        fund(ledger, BOB, pool.asset_a, 1_000, pool.address)

        assert pool.swap(BOB, pool.asset_a, pool.asset_b, 1_000) == 906

    def test_fee_grows_product(self, ledger):
        pool = make_seeded_pool(10_000, 10_000, provider=ALICE, fee_basis=3, ledger=ledger)
        fund(ledger, BOB, pool.asset_a, 1_000, pool.address)
        k = pool.reserves.product

        pool.swap(BOB, pool.asset_a, pool.asset_b, 1_000)

        assert pool.get_reserves() == (11_000, 9_094)
        assert pool.reserves.product > k


class TestSwapRejections:
    """Tests for rejected swaps leaving all state untouched."""

    def test_identical_tokens(self, seeded_pool, trader):
        with pytest.raises(IdenticalAddress):
            seeded_pool.swap(trader, seeded_pool.asset_a, seeded_pool.asset_a, 100)

    def test_foreign_token(self, seeded_pool, trader):
        with pytest.raises(InvalidToken):
            seeded_pool.swap(trader, DAI, seeded_pool.asset_b, 100)
        with pytest.raises(InvalidToken):
            seeded_pool.swap(trader, seeded_pool.asset_a, DAI, 100)

    def test_foreign_token_checked_before_identity(self, seeded_pool, trader):
        with pytest.raises(InvalidToken):
            seeded_pool.swap(trader, DAI, DAI, 100)

    def test_zero_input(self, seeded_pool, trader):
        with pytest.raises(InsufficientInput):
            seeded_pool.swap(trader, seeded_pool.asset_a, seeded_pool.asset_b, 0)

    def test_dust_output(self, ledger, seeded_pool, trader):
        """1 unit of B against (1000, 2000) buys floor(1000 / 2001) = 0 of A."""
        with pytest.raises(InsufficientOutputAmount):
            seeded_pool.swap(trader, seeded_pool.asset_b, seeded_pool.asset_a, 1)
        assert seeded_pool.get_reserves() == (1000, 2000)
        assert ledger.balance_of(seeded_pool.asset_b, trader) == 10_000

    def test_empty_pool(self, ledger, pool):
        fund(ledger, BOB, pool.asset_a, 100, pool.address)
        with pytest.raises(InsufficientLiquidity):
            pool.swap(BOB, pool.asset_a, pool.asset_b, 100)

    def test_missing_allowance(self, ledger, seeded_pool):
        ledger.mint(seeded_pool.asset_a, CAROL, 100)

        with pytest.raises(InsufficientAllowance):
            seeded_pool.swap(CAROL, seeded_pool.asset_a, seeded_pool.asset_b, 100)

        assert seeded_pool.get_reserves() == (1000, 2000)
        assert ledger.balance_of(seeded_pool.asset_a, CAROL) == 100
        assert ledger.balance_of(seeded_pool.asset_b, seeded_pool.address) == 2000
        assert seeded_pool.events[-1].name == "Deposit"


class TestSwapEngine:
    """Tests for swap direction helpers."""

    def test_directional_reserves(self, seeded_pool):
        engine = seeded_pool._swaps
        reserves = Reserves(1, 2)
        assert engine.directional_reserves(seeded_pool.asset_a, reserves) == (1, 2)
        assert engine.directional_reserves(seeded_pool.asset_b, reserves) == (2, 1)

    def test_validate_pair_normalizes(self, seeded_pool):
        engine = seeded_pool._swaps
        token_in = seeded_pool.asset_b[2:]
        assert engine.validate_pair(token_in, seeded_pool.asset_a) == (
            seeded_pool.asset_b,
            seeded_pool.asset_a,
        )
