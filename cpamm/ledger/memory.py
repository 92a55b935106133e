"""In-memory asset ledger and pool-share token.

Reference implementation of the ledger protocols, used by the HTTP
service and the tests. Balances, allowances and supplies live in plain
dicts guarded by a re-entrant lock.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from cpamm.constants import UNLIMITED_ALLOWANCE
from cpamm.errors import InsufficientAllowance, InsufficientBalance, UnauthorizedIssuer
from cpamm.models.types import normalize_address

logger = structlog.get_logger()


class InMemoryLedger:
    """Asset balances for any number of assets and holders.

    Mutations are serialized by a re-entrant lock. Inside ``atomic()``
    all mutations are rolled back if the block raises, so a multi-step
    operation never leaves a partial transfer behind.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._balances: dict[tuple[str, str], int] = {}
        self._allowances: dict[tuple[str, str, str], int] = {}
        self._supplies: dict[str, int] = {}
        # asset -> holder allowed to pull it without an allowance
        self._issuers: dict[str, str] = {}
        self._depth = 0

    # --- Transactions ---

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Commit every mutation in the block, or none of them.

        Nested blocks join the outermost one.
        """
        with self._lock:
            outermost = self._depth == 0
            if outermost:
                snapshot = (
                    dict(self._balances),
                    dict(self._allowances),
                    dict(self._supplies),
                )
            self._depth += 1
            try:
                yield
            except BaseException:
                if outermost:
                    self._balances, self._allowances, self._supplies = snapshot
                    logger.debug("ledger_rolled_back")
                raise
            finally:
                self._depth -= 1

    # --- Queries ---

    def balance_of(self, asset: str, holder: str) -> int:
        key = (normalize_address(asset), normalize_address(holder))
        return self._balances.get(key, 0)

    def total_supply(self, asset: str) -> int:
        return self._supplies.get(normalize_address(asset), 0)

    def allowance(self, asset: str, owner: str, spender: str) -> int:
        key = (normalize_address(asset), normalize_address(owner), normalize_address(spender))
        return self._allowances.get(key, 0)

    # --- Issuance ---

    def register_issuer(self, asset: str, issuer: str) -> None:
        """Make issuer the only minter of asset, able to pull it without an allowance.

        Raises:
            UnauthorizedIssuer: If the asset already circulates or has
                another issuer
        """
        asset, issuer = normalize_address(asset), normalize_address(issuer)
        with self._lock:
            if self._issuers.get(asset, issuer) != issuer or self._supplies.get(asset, 0) > 0:
                raise UnauthorizedIssuer(f"Asset {asset} is already issued; cannot assign {issuer}")
            self._issuers[asset] = issuer

    def mint(self, asset: str, to: str, amount: int, *, issuer: str | None = None) -> None:
        """Create amount of asset and credit it to ``to``.

        Raises:
            UnauthorizedIssuer: If the asset has a registered issuer other
                than ``issuer``
        """
        _require_amount(amount)
        asset, to = normalize_address(asset), normalize_address(to)
        with self._lock:
            self._check_issuer(asset, issuer)
            self._balances[(asset, to)] = self._balances.get((asset, to), 0) + amount
            self._supplies[asset] = self._supplies.get(asset, 0) + amount

    def burn(self, asset: str, holder: str, amount: int, *, issuer: str | None = None) -> None:
        """Destroy amount of asset held by holder.

        Raises:
            InsufficientBalance: If holder holds less than amount
            UnauthorizedIssuer: If the asset has a registered issuer other
                than ``issuer``
        """
        _require_amount(amount)
        asset, holder = normalize_address(asset), normalize_address(holder)
        with self._lock:
            self._check_issuer(asset, issuer)
            self._debit(asset, holder, amount)
            self._supplies[asset] = self._supplies.get(asset, 0) - amount

    def issuer_of(self, asset: str) -> str | None:
        """Registered issuer of asset, or None for freely minted assets."""
        return self._issuers.get(normalize_address(asset))

    def _check_issuer(self, asset: str, issuer: str | None) -> None:
        registered = self._issuers.get(asset)
        if registered is not None and (issuer is None or normalize_address(issuer) != registered):
            raise UnauthorizedIssuer(f"Only {registered} may mint or burn asset {asset}")

    # --- Transfers ---

    def approve(self, asset: str, owner: str, spender: str, amount: int) -> None:
        """Set spender's allowance over owner's asset (replaces any previous value)."""
        _require_amount(amount)
        key = (normalize_address(asset), normalize_address(owner), normalize_address(spender))
        with self._lock:
            self._allowances[key] = amount

    def transfer(self, asset: str, source: str, destination: str, amount: int) -> None:
        _require_amount(amount)
        asset = normalize_address(asset)
        source, destination = normalize_address(source), normalize_address(destination)
        with self._lock:
            self._debit(asset, source, amount)
            self._credit(asset, destination, amount)

    def transfer_from(self, asset: str, source: str, destination: str, amount: int) -> None:
        _require_amount(amount)
        asset = normalize_address(asset)
        source, destination = normalize_address(source), normalize_address(destination)
        with self._lock:
            if self._issuers.get(asset) != destination:
                key = (asset, source, destination)
                allowed = self._allowances.get(key, 0)
                if allowed < amount:
                    raise InsufficientAllowance(
                        f"Allowance {allowed} of {destination} over {source} "
                        f"is below {amount} for asset {asset}"
                    )
                if allowed != UNLIMITED_ALLOWANCE:
                    self._allowances[key] = allowed - amount
            self._debit(asset, source, amount)
            self._credit(asset, destination, amount)

    def _debit(self, asset: str, holder: str, amount: int) -> None:
        balance = self._balances.get((asset, holder), 0)
        if balance < amount:
            raise InsufficientBalance(
                f"Balance {balance} of {holder} is below {amount} for asset {asset}"
            )
        self._balances[(asset, holder)] = balance - amount

    def _credit(self, asset: str, holder: str, amount: int) -> None:
        self._balances[(asset, holder)] = self._balances.get((asset, holder), 0) + amount


class LedgerShareToken:
    """Pool-share token stored in an InMemoryLedger under the pool's address.

    The pool is registered as issuer, so it can escrow its own shares
    from a holder without a prior approval.
    """

    def __init__(self, ledger: InMemoryLedger, token: str) -> None:
        self._ledger = ledger
        self.token = normalize_address(token)
        ledger.register_issuer(self.token, self.token)

    def mint(self, to: str, amount: int) -> None:
        self._ledger.mint(self.token, to, amount, issuer=self.token)

    def burn(self, holder: str, amount: int) -> None:
        self._ledger.burn(self.token, holder, amount, issuer=self.token)

    def total_supply(self) -> int:
        return self._ledger.total_supply(self.token)

    def balance_of(self, holder: str) -> int:
        return self._ledger.balance_of(self.token, holder)


def _require_amount(amount: int) -> None:
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise TypeError(f"Amount must be int, got {type(amount).__name__}")
    if amount < 0:
        raise ValueError(f"Amount cannot be negative: {amount}")
