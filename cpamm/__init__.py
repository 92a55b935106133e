"""Constant-product liquidity pool for two fungible assets."""

from cpamm.config import DEFAULT_POOL_CONFIG, PoolConfig
from cpamm.ledger import InMemoryLedger
from cpamm.pool import Pool, PoolRegistry, create_pool

__version__ = "0.1.0"
__all__ = [
    "Pool",
    "PoolRegistry",
    "create_pool",
    "PoolConfig",
    "DEFAULT_POOL_CONFIG",
    "InMemoryLedger",
    "__version__",
]
