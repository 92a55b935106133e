"""Test helpers module for shared test utilities.

- constants: Asset and account addresses
- factories: Pool and funding helpers
"""

from tests.helpers.constants import ALICE, BOB, CAROL, DAI, USDC, WBTC, WETH
from tests.helpers.factories import fund, make_pool, make_seeded_pool

__all__ = [
    # Constants
    "WETH",
    "USDC",
    "DAI",
    "WBTC",
    "ALICE",
    "BOB",
    "CAROL",
    # Factories
    "fund",
    "make_pool",
    "make_seeded_pool",
]
