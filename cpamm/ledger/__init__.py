"""Asset and pool-share ledgers."""

from cpamm.ledger.base import AssetLedger, ShareLedger
from cpamm.ledger.memory import InMemoryLedger, LedgerShareToken

__all__ = [
    "AssetLedger",
    "ShareLedger",
    "InMemoryLedger",
    "LedgerShareToken",
]
