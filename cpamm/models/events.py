"""Events emitted by pool operations."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass
from typing import Any, TypeAlias

import structlog

logger = structlog.get_logger()


@dataclass(frozen=True)
class DepositEvent:
    """Liquidity added: actual amounts taken and shares minted."""

    pool: str
    caller: str
    amount_a: int
    amount_b: int
    shares: int

    name = "Deposit"


@dataclass(frozen=True)
class WithdrawalEvent:
    """Liquidity removed: shares burned and amounts paid out."""

    pool: str
    caller: str
    amount_a: int
    amount_b: int
    shares: int

    name = "Withdrawal"


@dataclass(frozen=True)
class SwapEvent:
    """Single-hop exchange between the pool's two assets."""

    pool: str
    caller: str
    token_in: str
    token_out: str
    amount_in: int
    amount_out: int

    name = "Swap"


@dataclass(frozen=True)
class SyncEvent:
    """Reserves forced to match the pool's actual balances."""

    pool: str
    reserve_a: int
    reserve_b: int

    name = "Sync"


PoolEvent: TypeAlias = DepositEvent | WithdrawalEvent | SwapEvent | SyncEvent
EventListener: TypeAlias = Callable[[PoolEvent], None]


class EventLog:
    """Append-only record of a pool's events with synchronous listeners.

    Listeners run in registration order after the event is recorded.
    The operation has already committed when they run, so a failing
    listener is logged and skipped; it never fails the operation.
    """

    def __init__(self) -> None:
        self._events: list[PoolEvent] = []
        self._listeners: list[EventListener] = []

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """Register a listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: PoolEvent) -> None:
        self._events.append(event)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(
                    "event_listener_failed",
                    pool=event.pool,
                    event_name=event.name,
                    listener=getattr(listener, "__qualname__", repr(listener)),
                )

    @property
    def events(self) -> list[PoolEvent]:
        """Events recorded so far, oldest first."""
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)


def event_to_dict(event: PoolEvent) -> dict[str, Any]:
    """Flatten an event into a JSON-friendly dict, amounts as decimal strings."""
    data: dict[str, Any] = {"event": event.name}
    for key, value in asdict(event).items():
        data[key] = str(value) if isinstance(value, int) else value
    return data
