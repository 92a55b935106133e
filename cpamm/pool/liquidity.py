"""Deposits and withdrawals of liquidity (pool-share mint and burn).

Deposit share mint:
    first deposit:  shares = floor(sqrt(amount_a * amount_b))
    later deposits: shares = min(amount_a * supply // reserve_a,
                                 amount_b * supply // reserve_b)

Withdrawal payout:
    amount_x = shares * balance_x // supply

Every computation truncates, so providers can never take out more than
their proportional claim.
"""

from __future__ import annotations

from dataclasses import dataclass

from cpamm.amm.quoting import quote
from cpamm.errors import (
    InsufficientInput,
    InsufficientLiquidity,
    InsufficientLiquidityBurned,
    InsufficientLiquidityMinted,
)
from cpamm.ledger.base import AssetLedger, ShareLedger
from cpamm.pool.reserves import ReserveAccountant, Reserves
from cpamm.safe_int import S


@dataclass(frozen=True)
class DepositResult:
    """Outcome of a deposit: amounts actually taken and shares minted."""

    amount_a: int
    amount_b: int
    shares: int
    reserves: Reserves


@dataclass(frozen=True)
class WithdrawalResult:
    """Outcome of a withdrawal: shares burned and amounts paid out."""

    amount_a: int
    amount_b: int
    shares: int
    reserves: Reserves


def optimal_deposit(amount_a_in: int, amount_b_in: int, reserves: Reserves) -> tuple[int, int]:
    """Largest deposit at the current reserve ratio within the offered amounts.

    An empty pool accepts both amounts as-is; that deposit sets the price.
    Otherwise the binding side is whichever offered amount is the smaller
    one at the current ratio, and the other side is quoted from it.

    Returns:
        (amount_a, amount_b) to pull from the depositor
    """
    if reserves.is_empty:
        return amount_a_in, amount_b_in

    required_b = quote(amount_a_in, reserves.reserve_a, reserves.reserve_b)
    if required_b <= amount_b_in:
        return amount_a_in, required_b

    required_a = quote(amount_b_in, reserves.reserve_b, reserves.reserve_a)
    return required_a, amount_b_in


def shares_to_mint(amount_a: int, amount_b: int, reserves: Reserves, total_shares: int) -> int:
    """Pool shares owed for a deposit, before the deposit is applied.

    Raises:
        InsufficientLiquidityMinted: If the result rounds to zero
    """
    if total_shares == 0:
        shares = (S(amount_a) * S(amount_b)).isqrt()
    else:
        if reserves.reserve_a == 0 or reserves.reserve_b == 0:
            raise InsufficientLiquidity(
                f"Outstanding shares {total_shares} with empty reserves {reserves.as_tuple()}"
            )
        shares_a = S(amount_a) * S(total_shares) // S(reserves.reserve_a)
        shares_b = S(amount_b) * S(total_shares) // S(reserves.reserve_b)
        shares = shares_a.min(shares_b)

    if shares == 0:
        raise InsufficientLiquidityMinted(
            f"Deposit ({amount_a}, {amount_b}) mints zero shares "
            f"against reserves {reserves.as_tuple()} and supply {total_shares}"
        )
    return shares.value


def withdrawal_amounts(shares: int, balance_a: int, balance_b: int, total_shares: int) -> tuple[int, int]:
    """Assets owed for burning shares, proportional to actual balances.

    Raises:
        InsufficientLiquidityBurned: If either payout rounds to zero
    """
    amount_a = (S(shares) * S(balance_a) // S(total_shares)).value
    amount_b = (S(shares) * S(balance_b) // S(total_shares)).value
    if amount_a == 0 or amount_b == 0:
        raise InsufficientLiquidityBurned(
            f"Burning {shares} of {total_shares} shares pays ({amount_a}, {amount_b})"
        )
    return amount_a, amount_b


class LiquidityManager:
    """Moves assets and shares for deposits and withdrawals.

    Must run inside the pool's guard and the ledger's atomic block; it
    never publishes reserves itself.
    """

    def __init__(
        self,
        *,
        pool: str,
        asset_a: str,
        asset_b: str,
        ledger: AssetLedger,
        shares: ShareLedger,
        accountant: ReserveAccountant,
    ) -> None:
        self._pool = pool
        self._asset_a = asset_a
        self._asset_b = asset_b
        self._ledger = ledger
        self._shares = shares
        self._accountant = accountant

    def add_liquidity(
        self, caller: str, amount_a_in: int, amount_b_in: int, reserves: Reserves
    ) -> DepositResult:
        """Deposit up to (amount_a_in, amount_b_in) and mint shares to caller.

        Args:
            caller: Depositor, source of both assets and recipient of shares
            amount_a_in: Maximum amount of asset A offered
            amount_b_in: Maximum amount of asset B offered
            reserves: Current recorded reserves (snapshot before transfers)

        Raises:
            InsufficientInput: If either offered amount is zero
            InsufficientLiquidityMinted: If the deposit mints zero shares
        """
        if amount_a_in <= 0 or amount_b_in <= 0:
            raise InsufficientInput(
                f"Deposit amounts must be positive: ({amount_a_in}, {amount_b_in})"
            )

        amount_a, amount_b = optimal_deposit(amount_a_in, amount_b_in, reserves)
        total_shares = self._shares.total_supply()
        shares = shares_to_mint(amount_a, amount_b, reserves, total_shares)

        self._ledger.transfer_from(self._asset_a, caller, self._pool, amount_a)
        self._ledger.transfer_from(self._asset_b, caller, self._pool, amount_b)
        self._shares.mint(caller, shares)

        staged = Reserves(reserves.reserve_a + amount_a, reserves.reserve_b + amount_b)
        return DepositResult(
            amount_a=amount_a,
            amount_b=amount_b,
            shares=shares,
            reserves=self._accountant.reconcile(staged),
        )

    def remove_liquidity(self, caller: str, shares: int) -> WithdrawalResult:
        """Burn shares held by caller and pay out the proportional assets.

        Payouts are computed against the pool's actual balances, not the
        recorded reserves. Shares are escrowed into the pool before they
        are burned.

        Raises:
            InsufficientInput: If shares is zero
            InsufficientLiquidity: If no shares are outstanding
            InsufficientLiquidityBurned: If either payout rounds to zero
            InsufficientBalance: If caller holds fewer than shares
        """
        if shares <= 0:
            raise InsufficientInput(f"Shares to burn must be positive: {shares}")

        total_shares = self._shares.total_supply()
        if total_shares == 0:
            raise InsufficientLiquidity("No pool shares outstanding")

        actual = self._accountant.read()
        amount_a, amount_b = withdrawal_amounts(
            shares, actual.reserve_a, actual.reserve_b, total_shares
        )

        self._ledger.transfer_from(self._pool, caller, self._pool, shares)
        self._shares.burn(self._pool, shares)
        self._ledger.transfer(self._asset_a, self._pool, caller, amount_a)
        self._ledger.transfer(self._asset_b, self._pool, caller, amount_b)

        staged = Reserves(actual.reserve_a - amount_a, actual.reserve_b - amount_b)
        return WithdrawalResult(
            amount_a=amount_a,
            amount_b=amount_b,
            shares=shares,
            reserves=self._accountant.reconcile(staged),
        )
