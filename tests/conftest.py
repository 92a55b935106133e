"""Pytest configuration and fixtures."""

import pytest

from cpamm.ledger import InMemoryLedger
from cpamm.pool import Pool
from tests.helpers import ALICE, BOB, fund, make_pool, make_seeded_pool


@pytest.fixture
def ledger() -> InMemoryLedger:
    """Fresh in-memory ledger."""
    return InMemoryLedger()


@pytest.fixture
def pool(ledger: InMemoryLedger) -> Pool:
    """Empty fee-free WETH/USDC pool (asset_a is USDC, asset_b is WETH)."""
    return make_pool(ledger)


@pytest.fixture
def seeded_pool(ledger: InMemoryLedger) -> Pool:
    """Fee-free pool with reserves (1000, 2000) provided by ALICE.

    ALICE holds 1414 shares (floor(sqrt(1000 * 2000))).
    """
    return make_seeded_pool(1000, 2000, provider=ALICE, ledger=ledger)


@pytest.fixture
def trader(ledger: InMemoryLedger, seeded_pool: Pool) -> str:
    """BOB, funded with 10_000 of each pool asset and approved for the pool."""
    fund(ledger, BOB, seeded_pool.asset_a, 10_000, seeded_pool.address)
    fund(ledger, BOB, seeded_pool.asset_b, 10_000, seeded_pool.address)
    return BOB
