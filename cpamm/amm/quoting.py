"""Constant-product quoting math.

Pure functions over integer reserves, no state:

    quote:          amount_other = amount_known * reserve_other / reserve_known
    get_amount_out: out = (in * (1000 - fee) * R_out) / (R_in * 1000 + in * (1000 - fee))
    get_amount_in:  in  = (R_in * out * 1000) / ((R_out - out) * (1000 - fee)) + 1

All divisions truncate, so every rounding step favours the pool over the
trader or depositor by at most one unit.
"""

from __future__ import annotations

from cpamm.config import validate_fee_basis
from cpamm.constants import DEFAULT_FEE_BASIS, FEE_DENOMINATOR
from cpamm.errors import InsufficientInput, InsufficientLiquidity, InsufficientOutputAmount
from cpamm.safe_int import S


def quote(amount_known: int, reserve_known: int, reserve_other: int) -> int:
    """Proportional counterpart of amount_known at the current reserve ratio.

    Args:
        amount_known: Amount of the asset whose reserve is reserve_known
        reserve_known: Reserve of the known asset
        reserve_other: Reserve of the counterpart asset

    Returns:
        floor(amount_known * reserve_other / reserve_known)

    Raises:
        InsufficientInput: If amount_known is zero
        InsufficientLiquidity: If either reserve is zero
    """
    if amount_known <= 0:
        raise InsufficientInput(f"Quote amount must be positive: {amount_known}")
    if reserve_known <= 0 or reserve_other <= 0:
        raise InsufficientLiquidity(
            f"Quote needs non-zero reserves: ({reserve_known}, {reserve_other})"
        )

    return (S(amount_known) * S(reserve_other) // S(reserve_known)).value


def get_amount_out(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_basis: int = DEFAULT_FEE_BASIS,
) -> int:
    """Calculate swap output using the constant product formula.

    The fee is taken from the input side before pricing.

    Args:
        amount_in: Input token amount
        reserve_in: Reserve of input token in pool
        reserve_out: Reserve of output token in pool
        fee_basis: Fee in thousandths, in [0, 1000)

    Returns:
        Output token amount (may be zero for dust inputs)

    Raises:
        InsufficientInput: If amount_in is zero
        InsufficientLiquidity: If either reserve is zero
        InvalidFeeBasis: If fee_basis is out of range
    """
    if amount_in <= 0:
        raise InsufficientInput(f"Swap input must be positive: {amount_in}")
    if reserve_in <= 0 or reserve_out <= 0:
        raise InsufficientLiquidity(f"Swap needs non-zero reserves: ({reserve_in}, {reserve_out})")
    validate_fee_basis(fee_basis)

    amount_in_with_fee = S(amount_in) * (FEE_DENOMINATOR - fee_basis)
    numerator = amount_in_with_fee * S(reserve_out)
    denominator = S(reserve_in) * FEE_DENOMINATOR + amount_in_with_fee

    return (numerator // denominator).value


def get_amount_in(
    amount_out: int,
    reserve_in: int,
    reserve_out: int,
    fee_basis: int = DEFAULT_FEE_BASIS,
) -> int:
    """Calculate the smallest input that yields at least amount_out.

    Args:
        amount_out: Desired output token amount
        reserve_in: Reserve of input token in pool
        reserve_out: Reserve of output token in pool
        fee_basis: Fee in thousandths, in [0, 1000)

    Returns:
        Required input token amount

    Raises:
        InsufficientOutputAmount: If amount_out is zero
        InsufficientLiquidity: If either reserve is zero or amount_out
            would drain the output reserve
        InvalidFeeBasis: If fee_basis is out of range
    """
    if amount_out <= 0:
        raise InsufficientOutputAmount(f"Desired output must be positive: {amount_out}")
    if reserve_in <= 0 or reserve_out <= 0:
        raise InsufficientLiquidity(f"Swap needs non-zero reserves: ({reserve_in}, {reserve_out})")
    if amount_out >= reserve_out:
        raise InsufficientLiquidity(
            f"Desired output {amount_out} must be below reserve {reserve_out}"
        )
    validate_fee_basis(fee_basis)

    numerator = S(reserve_in) * S(amount_out) * FEE_DENOMINATOR
    denominator = (S(reserve_out) - S(amount_out)) * (FEE_DENOMINATOR - fee_basis)

    return ((numerator // denominator) + 1).value


__all__ = ["quote", "get_amount_out", "get_amount_in"]
