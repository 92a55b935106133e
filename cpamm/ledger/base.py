"""Protocols for the ledgers a pool depends on.

The pool never holds balances itself. It moves assets and reads its own
holdings through an AssetLedger, and mints/burns its pool-share token
through a ShareLedger.
"""

from contextlib import AbstractContextManager
from typing import Protocol, runtime_checkable


@runtime_checkable
class AssetLedger(Protocol):
    """Fungible asset balances keyed by (asset, holder)."""

    def transfer_from(self, asset: str, source: str, destination: str, amount: int) -> None:
        """Pull amount of asset from source into destination.

        The destination acts as spender and must hold a sufficient
        allowance from source (unless it issues the asset).

        Raises:
            InsufficientBalance: If source holds less than amount
            InsufficientAllowance: If destination's allowance is too low
        """
        ...

    def transfer(self, asset: str, source: str, destination: str, amount: int) -> None:
        """Push amount of asset held by source to destination.

        Raises:
            InsufficientBalance: If source holds less than amount
        """
        ...

    def balance_of(self, asset: str, holder: str) -> int:
        """Current balance of asset held by holder."""
        ...

    def atomic(self) -> AbstractContextManager[None]:
        """Context in which all ledger mutations commit together or not at all."""
        ...


@runtime_checkable
class ShareLedger(Protocol):
    """Pool-share token: mint/burn plus supply and balance queries."""

    def mint(self, to: str, amount: int) -> None:
        ...

    def burn(self, holder: str, amount: int) -> None:
        ...

    def total_supply(self) -> int:
        ...

    def balance_of(self, holder: str) -> int:
        ...
