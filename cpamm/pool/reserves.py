"""Reserve bookkeeping reconciled against actual ledger balances."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from cpamm.ledger.base import AssetLedger

logger = structlog.get_logger()


@dataclass(frozen=True)
class Reserves:
    """The pool's recorded holdings of asset A and asset B."""

    reserve_a: int = 0
    reserve_b: int = 0

    @property
    def is_empty(self) -> bool:
        return self.reserve_a == 0 and self.reserve_b == 0

    @property
    def product(self) -> int:
        """Constant-product invariant k = reserve_a * reserve_b."""
        return self.reserve_a * self.reserve_b

    def as_tuple(self) -> tuple[int, int]:
        return self.reserve_a, self.reserve_b


@dataclass(frozen=True)
class PoolState:
    """Committed pool state, published as one value after each operation."""

    reserves: Reserves = Reserves()
    total_shares: int = 0


class ReserveAccountant:
    """Reads the pool's actual holdings of its two assets.

    Reconciliation, not incremental bookkeeping, is authoritative: direct
    transfers into the pool that bypass its operations are absorbed the
    next time reserves are reconciled.
    """

    def __init__(self, ledger: AssetLedger, holder: str, asset_a: str, asset_b: str) -> None:
        self._ledger = ledger
        self._holder = holder
        self._asset_a = asset_a
        self._asset_b = asset_b

    def read(self) -> Reserves:
        """Actual balances of asset A and asset B held by the pool."""
        return Reserves(
            reserve_a=self._ledger.balance_of(self._asset_a, self._holder),
            reserve_b=self._ledger.balance_of(self._asset_b, self._holder),
        )

    def reconcile(self, staged: Reserves) -> Reserves:
        """Return the actual balances, logging any drift from staged bookkeeping.

        Args:
            staged: Reserves as computed by the operation's own accounting

        Returns:
            Reserves read from the ledger
        """
        actual = self.read()
        if actual != staged:
            logger.warning(
                "reserve_drift",
                pool=self._holder,
                staged_a=staged.reserve_a,
                staged_b=staged.reserve_b,
                actual_a=actual.reserve_a,
                actual_b=actual.reserve_b,
            )
        return actual
