"""Single-hop exchange between a pool's two assets."""

from __future__ import annotations

from dataclasses import dataclass

from cpamm.amm.quoting import get_amount_out
from cpamm.errors import (
    IdenticalAddress,
    InsufficientInput,
    InsufficientOutputAmount,
    InvalidToken,
)
from cpamm.ledger.base import AssetLedger
from cpamm.models.types import normalize_address
from cpamm.pool.reserves import ReserveAccountant, Reserves


@dataclass(frozen=True)
class SwapResult:
    """Outcome of a swap through the pool."""

    token_in: str
    token_out: str
    amount_in: int
    amount_out: int
    reserves: Reserves


class SwapEngine:
    """Prices and settles swaps against the pool's reserves.

    Must run inside the pool's guard and the ledger's atomic block.
    """

    def __init__(
        self,
        *,
        pool: str,
        asset_a: str,
        asset_b: str,
        fee_basis: int,
        ledger: AssetLedger,
        accountant: ReserveAccountant,
    ) -> None:
        self._pool = pool
        self._asset_a = asset_a
        self._asset_b = asset_b
        self._fee_basis = fee_basis
        self._ledger = ledger
        self._accountant = accountant

    def validate_pair(self, token_in: str, token_out: str) -> tuple[str, str]:
        """Normalize and check a swap direction against the pool's pair.

        Raises:
            InvalidToken: If either token is not one of the pool's assets
            IdenticalAddress: If both sides name the same asset
        """
        token_in = normalize_address(token_in)
        token_out = normalize_address(token_out)
        pair = (self._asset_a, self._asset_b)
        for token in (token_in, token_out):
            if token not in pair:
                raise InvalidToken(f"Token {token} not in pool {self._pool}")
        if token_in == token_out:
            raise IdenticalAddress(f"Cannot swap {token_in} for itself")
        return token_in, token_out

    def directional_reserves(self, token_in: str, reserves: Reserves) -> tuple[int, int]:
        """Reserves ordered as (reserve_in, reserve_out)."""
        if token_in == self._asset_a:
            return reserves.reserve_a, reserves.reserve_b
        return reserves.reserve_b, reserves.reserve_a

    def quote(self, token_in: str, token_out: str, amount_in: int, reserves: Reserves) -> int:
        """Output amount for amount_in at the given reserves, without settling.

        Raises:
            InvalidToken, IdenticalAddress: On a bad swap direction
            InsufficientInput: If amount_in is zero
            InsufficientLiquidity: If either reserve is zero
        """
        token_in, token_out = self.validate_pair(token_in, token_out)
        if amount_in <= 0:
            raise InsufficientInput(f"Swap input must be positive: {amount_in}")
        reserve_in, reserve_out = self.directional_reserves(token_in, reserves)
        return get_amount_out(amount_in, reserve_in, reserve_out, self._fee_basis)

    def swap(
        self, caller: str, token_in: str, token_out: str, amount_in: int, reserves: Reserves
    ) -> SwapResult:
        """Exchange amount_in of token_in from caller for token_out.

        Args:
            caller: Trader, source of token_in and recipient of token_out
            token_in: Asset sold to the pool
            token_out: Asset bought from the pool
            amount_in: Exact amount of token_in sold
            reserves: Current recorded reserves

        Raises:
            InsufficientOutputAmount: If the output rounds to zero
        """
        token_in, token_out = self.validate_pair(token_in, token_out)
        amount_out = self.quote(token_in, token_out, amount_in, reserves)
        if amount_out == 0:
            raise InsufficientOutputAmount(
                f"Swap of {amount_in} {token_in} yields zero {token_out}"
            )

        if token_in == self._asset_a:
            staged = Reserves(reserves.reserve_a + amount_in, reserves.reserve_b - amount_out)
        else:
            staged = Reserves(reserves.reserve_a - amount_out, reserves.reserve_b + amount_in)

        self._ledger.transfer_from(token_in, caller, self._pool, amount_in)
        self._ledger.transfer(token_out, self._pool, caller, amount_out)

        return SwapResult(
            token_in=token_in,
            token_out=token_out,
            amount_in=amount_in,
            amount_out=amount_out,
            reserves=self._accountant.reconcile(staged),
        )
