"""Data models: identities, amounts, events and HTTP bodies."""

from cpamm.models.events import (
    DepositEvent,
    EventLog,
    PoolEvent,
    SwapEvent,
    SyncEvent,
    WithdrawalEvent,
)
from cpamm.models.types import Address, Uint256, is_valid_address, normalize_address

__all__ = [
    "Address",
    "Uint256",
    "normalize_address",
    "is_valid_address",
    "DepositEvent",
    "WithdrawalEvent",
    "SwapEvent",
    "SyncEvent",
    "PoolEvent",
    "EventLog",
]
