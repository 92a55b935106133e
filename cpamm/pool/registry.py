"""Registry of pools keyed by canonical asset pair.

Holds at most one pool per pair. Pools are looked up either by their
address or by the pair in any order.
"""

from __future__ import annotations

import threading

import structlog

from cpamm.config import PoolConfig
from cpamm.errors import PoolAlreadyExists, PoolNotFound
from cpamm.ledger.memory import InMemoryLedger
from cpamm.models.types import normalize_address
from cpamm.pool.pool import Pool, sort_assets

logger = structlog.get_logger()


class PoolRegistry:
    """Pools sharing one ledger, one entry per pool identity."""

    def __init__(
        self,
        ledger: InMemoryLedger | None = None,
        config: PoolConfig | None = None,
    ) -> None:
        """Initialize an empty registry.

        Args:
            ledger: Ledger shared by every pool. A fresh InMemoryLedger if None.
            config: Default configuration for new pools. Read from the
                environment if None.
        """
        self.ledger = ledger if ledger is not None else InMemoryLedger()
        self.default_config = config if config is not None else PoolConfig.from_env()
        self._lock = threading.Lock()
        self._pools: dict[str, Pool] = {}
        # Secondary index: canonical (asset_a, asset_b) -> pool address
        self._by_pair: dict[tuple[str, str], str] = {}

    def __len__(self) -> int:
        return len(self._pools)

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and normalize_address(address) in self._pools

    def create_pool(self, asset_x: str, asset_y: str, fee_basis: int | None = None) -> Pool:
        """Create and register an empty pool for a pair.

        Args:
            asset_x: One asset of the pair (any order)
            asset_y: The other asset
            fee_basis: Swap fee in thousandths. Registry default if None.

        Returns:
            The new pool

        Raises:
            InvalidToken: If either asset is not a valid address
            IdenticalAssetConfiguration: If both assets are the same
            InvalidFeeBasis: If fee_basis is out of range
            PoolAlreadyExists: If the pair already has a pool
        """
        pair = sort_assets(asset_x, asset_y)
        config = self.default_config if fee_basis is None else PoolConfig(fee_basis=fee_basis)

        with self._lock:
            if pair in self._by_pair:
                raise PoolAlreadyExists(
                    f"Pool for ({pair[0]}, {pair[1]}) already exists at {self._by_pair[pair]}"
                )
            pool = Pool(pair[0], pair[1], self.ledger, config=config)
            self._pools[pool.address] = pool
            self._by_pair[pair] = pool.address

        logger.debug("pool_registered", pool=pool.address, pool_count=len(self._pools))
        return pool

    def get(self, address: str) -> Pool:
        """Look up a pool by address.

        Raises:
            PoolNotFound: If no pool has this address
        """
        pool = self._pools.get(normalize_address(address))
        if pool is None:
            raise PoolNotFound(f"No pool at {address}")
        return pool

    def get_for_pair(self, asset_x: str, asset_y: str) -> Pool | None:
        """Pool for a pair in either order, or None."""
        address = self._by_pair.get(sort_assets(asset_x, asset_y))
        return self._pools.get(address) if address is not None else None

    @property
    def pools(self) -> list[Pool]:
        return list(self._pools.values())
