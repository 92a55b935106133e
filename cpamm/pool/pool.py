"""Two-asset constant-product liquidity pool.

A Pool owns its recorded reserves and composes the pricing and
accounting pieces:

- LiquidityManager: deposits (mint shares) and withdrawals (burn shares)
- SwapEngine: single-hop exchanges
- ReserveAccountant: reserves reconciled against actual ledger balances

Every mutating operation runs under the pool's ReentrancyGuard and the
ledger's atomic block, so it either completes fully or leaves ledger and
pool state untouched. Reserves and share supply are published together
as one PoolState after the operation commits; readers never see a
partial or rolled-back update.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from eth_abi import encode  # type: ignore[attr-defined]
from eth_utils import keccak

from cpamm.config import DEFAULT_POOL_CONFIG, PoolConfig
from cpamm.errors import IdenticalAssetConfiguration, InvalidToken, LedgerError, PoolError
from cpamm.ledger.base import AssetLedger, ShareLedger
from cpamm.ledger.memory import InMemoryLedger, LedgerShareToken
from cpamm.models.events import (
    DepositEvent,
    EventListener,
    EventLog,
    PoolEvent,
    SwapEvent,
    SyncEvent,
    WithdrawalEvent,
)
from cpamm.models.types import address_value, is_valid_address, normalize_address
from cpamm.pool.guard import ReentrancyGuard
from cpamm.pool.liquidity import LiquidityManager
from cpamm.pool.reserves import PoolState, ReserveAccountant, Reserves
from cpamm.pool.swap import SwapEngine

logger = structlog.get_logger()


def sort_assets(asset_x: str, asset_y: str) -> tuple[str, str]:
    """Order two asset identities canonically (lower address value first).

    Raises:
        InvalidToken: If either identity is not a valid address
        IdenticalAssetConfiguration: If both name the same asset
    """
    for asset in (asset_x, asset_y):
        if not is_valid_address(normalize_address(asset)):
            raise InvalidToken(f"Invalid asset address: {asset}")

    asset_x, asset_y = normalize_address(asset_x), normalize_address(asset_y)
    if asset_x == asset_y:
        raise IdenticalAssetConfiguration(f"Pool assets must differ: {asset_x}")
    if address_value(asset_x) > address_value(asset_y):
        asset_x, asset_y = asset_y, asset_x
    return asset_x, asset_y


def compute_pool_address(asset_x: str, asset_y: str) -> str:
    """Deterministic pool identity for a pair, independent of argument order.

    pool = last 20 bytes of keccak256(abi.encode(asset_a, asset_b))
    """
    asset_a, asset_b = sort_assets(asset_x, asset_y)
    encoded = encode(
        ["address", "address"],
        [bytes.fromhex(asset_a[2:]), bytes.fromhex(asset_b[2:])],
    )
    return "0x" + keccak(encoded)[-20:].hex()


class Pool:
    """Liquidity pool for one canonical pair of assets.

    Attributes:
        asset_a: Asset with the lower address value
        asset_b: Asset with the higher address value
        address: Pool identity; also the asset id of its pool-share token
        config: Pool configuration (swap fee)
    """

    def __init__(
        self,
        asset_x: str,
        asset_y: str,
        ledger: AssetLedger,
        *,
        shares: ShareLedger | None = None,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
    ) -> None:
        """Create an empty pool.

        Args:
            asset_x: One of the two assets (any order)
            asset_y: The other asset
            ledger: Ledger holding both assets and the pool's balances
            shares: Pool-share ledger. Defaults to a share token stored in
                ``ledger`` under the pool's address (requires InMemoryLedger).
            config: Pool configuration

        Raises:
            InvalidToken: If either asset is not a valid address
            IdenticalAssetConfiguration: If both assets are the same
        """
        self.asset_a, self.asset_b = sort_assets(asset_x, asset_y)
        self.address = compute_pool_address(self.asset_a, self.asset_b)
        self.config = config

        if shares is None:
            if not isinstance(ledger, InMemoryLedger):
                raise TypeError("A share ledger is required unless ledger is an InMemoryLedger")
            shares = LedgerShareToken(ledger, self.address)

        self._ledger = ledger
        self._shares = shares
        self._guard = ReentrancyGuard()
        self._events = EventLog()
        self._state = PoolState()

        self._accountant = ReserveAccountant(ledger, self.address, self.asset_a, self.asset_b)
        self._liquidity = LiquidityManager(
            pool=self.address,
            asset_a=self.asset_a,
            asset_b=self.asset_b,
            ledger=ledger,
            shares=shares,
            accountant=self._accountant,
        )
        self._swaps = SwapEngine(
            pool=self.address,
            asset_a=self.asset_a,
            asset_b=self.asset_b,
            fee_basis=config.fee_basis,
            ledger=ledger,
            accountant=self._accountant,
        )

        logger.info(
            "pool_created",
            pool=self.address,
            asset_a=self.asset_a,
            asset_b=self.asset_b,
            fee_basis=config.fee_basis,
        )

    def __repr__(self) -> str:
        reserve_a, reserve_b = self.get_reserves()
        return (
            f"Pool(address={self.address}, asset_a={self.asset_a}, asset_b={self.asset_b}, "
            f"reserves=({reserve_a}, {reserve_b}), fee_basis={self.fee_basis})"
        )

    # --- Queries ---

    @property
    def fee_basis(self) -> int:
        return self.config.fee_basis

    @property
    def state(self) -> PoolState:
        """Last committed reserves and share supply, read together."""
        return self._state

    @property
    def total_shares(self) -> int:
        """Outstanding pool-share units as of the last committed operation."""
        return self._state.total_shares

    @property
    def reserves(self) -> Reserves:
        return self._state.reserves

    @property
    def events(self) -> list[PoolEvent]:
        return self._events.events

    def get_reserves(self) -> tuple[int, int]:
        """Recorded reserves (reserve_a, reserve_b). Never blocks."""
        return self._state.reserves.as_tuple()

    def share_balance(self, holder: str) -> int:
        return self._shares.balance_of(normalize_address(holder))

    def subscribe(self, listener: EventListener):
        """Register a listener for pool events. Returns an unsubscribe callable."""
        return self._events.subscribe(listener)

    def quote_swap(self, token_in: str, amount_in: int) -> tuple[str, int]:
        """Price a swap of amount_in of token_in against current reserves.

        Returns:
            Tuple of (token_out, amount_out)
        """
        token_in = normalize_address(token_in)
        token_out = self.asset_b if token_in == self.asset_a else self.asset_a
        return token_out, self._swaps.quote(token_in, token_out, amount_in, self._state.reserves)

    # --- Mutating operations ---

    @contextmanager
    def _atomic(self, name: str, **context: object) -> Iterator[None]:
        """Run the ledger side of an operation atomically, logging rejections."""
        try:
            with self._ledger.atomic():
                yield
        except (PoolError, LedgerError) as err:
            logger.debug(
                f"{name}_rejected",
                pool=self.address,
                error=err.kind,
                detail=str(err),
                **context,
            )
            raise

    def add_liquidity(self, caller: str, amount_a_in: int, amount_b_in: int) -> tuple[int, int, int]:
        """Deposit both assets and receive pool shares.

        The pool takes the largest amounts at its current ratio that do not
        exceed the offer; an empty pool takes the offer as-is.

        Args:
            caller: Depositor
            amount_a_in: Maximum amount of asset_a offered
            amount_b_in: Maximum amount of asset_b offered

        Returns:
            Tuple of (amount_a, amount_b, shares)
        """
        caller = normalize_address(caller)
        with self._guard.enter("add_liquidity"):
            with self._atomic("add_liquidity", caller=caller):
                result = self._liquidity.add_liquidity(
                    caller, amount_a_in, amount_b_in, self._state.reserves
                )
            self._state = PoolState(result.reserves, self._shares.total_supply())
            logger.info(
                "deposit",
                pool=self.address,
                caller=caller,
                amount_a=result.amount_a,
                amount_b=result.amount_b,
                shares=result.shares,
            )
            self._events.emit(
                DepositEvent(
                    pool=self.address,
                    caller=caller,
                    amount_a=result.amount_a,
                    amount_b=result.amount_b,
                    shares=result.shares,
                )
            )
        return result.amount_a, result.amount_b, result.shares

    def remove_liquidity(self, caller: str, shares: int) -> tuple[int, int]:
        """Burn pool shares and receive the proportional amounts of both assets.

        Returns:
            Tuple of (amount_a, amount_b)
        """
        caller = normalize_address(caller)
        with self._guard.enter("remove_liquidity"):
            with self._atomic("remove_liquidity", caller=caller, shares=shares):
                result = self._liquidity.remove_liquidity(caller, shares)
            self._state = PoolState(result.reserves, self._shares.total_supply())
            logger.info(
                "withdrawal",
                pool=self.address,
                caller=caller,
                amount_a=result.amount_a,
                amount_b=result.amount_b,
                shares=result.shares,
            )
            self._events.emit(
                WithdrawalEvent(
                    pool=self.address,
                    caller=caller,
                    amount_a=result.amount_a,
                    amount_b=result.amount_b,
                    shares=result.shares,
                )
            )
        return result.amount_a, result.amount_b

    def swap(self, caller: str, token_in: str, token_out: str, amount_in: int) -> int:
        """Sell exactly amount_in of token_in for token_out.

        Returns:
            Amount of token_out paid to caller
        """
        caller = normalize_address(caller)
        with self._guard.enter("swap"):
            with self._atomic("swap", caller=caller, token_in=token_in, amount_in=amount_in):
                result = self._swaps.swap(caller, token_in, token_out, amount_in, self._state.reserves)
            self._state = PoolState(result.reserves, self._state.total_shares)
            logger.info(
                "swap",
                pool=self.address,
                caller=caller,
                token_in=result.token_in,
                token_out=result.token_out,
                amount_in=result.amount_in,
                amount_out=result.amount_out,
            )
            self._events.emit(
                SwapEvent(
                    pool=self.address,
                    caller=caller,
                    token_in=result.token_in,
                    token_out=result.token_out,
                    amount_in=result.amount_in,
                    amount_out=result.amount_out,
                )
            )
        return result.amount_out

    def sync(self) -> tuple[int, int]:
        """Force recorded reserves to the pool's actual balances.

        Absorbs assets sent to the pool directly, outside its operations.

        Returns:
            The reconciled (reserve_a, reserve_b)
        """
        with self._guard.enter("sync"):
            with self._atomic("sync"):
                reserves = self._accountant.reconcile(self._state.reserves)
            self._state = PoolState(reserves, self._state.total_shares)
            logger.info(
                "sync",
                pool=self.address,
                reserve_a=reserves.reserve_a,
                reserve_b=reserves.reserve_b,
            )
            self._events.emit(
                SyncEvent(pool=self.address, reserve_a=reserves.reserve_a, reserve_b=reserves.reserve_b)
            )
        return reserves.as_tuple()


def create_pool(
    asset_x: str,
    asset_y: str,
    ledger: InMemoryLedger,
    config: PoolConfig = DEFAULT_POOL_CONFIG,
) -> Pool:
    """Create an empty pool whose shares live in ``ledger``."""
    return Pool(asset_x, asset_y, ledger, config=config)


__all__ = [
    "Pool",
    "create_pool",
    "sort_assets",
    "compute_pool_address",
]
