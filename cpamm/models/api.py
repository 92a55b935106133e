"""Pydantic models for the pool service request/response bodies.

Amounts travel as uint256 decimal strings, addresses as 0x-prefixed hex.
"""

from pydantic import BaseModel, Field

from cpamm.models.types import Address, Uint256


class CreatePoolRequest(BaseModel):
    """Create a pool for two distinct assets, in any order."""

    asset_x: Address = Field(alias="assetX")
    asset_y: Address = Field(alias="assetY")
    fee_basis: int | None = Field(
        default=None,
        alias="feeBasis",
        description="Swap fee in thousandths; service default when omitted.",
    )

    model_config = {"populate_by_name": True}


class PoolResponse(BaseModel):
    """Pool identity and current state."""

    address: Address
    asset_a: Address = Field(alias="assetA")
    asset_b: Address = Field(alias="assetB")
    reserve_a: Uint256 = Field(alias="reserveA")
    reserve_b: Uint256 = Field(alias="reserveB")
    total_shares: Uint256 = Field(alias="totalShares")
    fee_basis: int = Field(alias="feeBasis")

    model_config = {"populate_by_name": True}


class ReservesResponse(BaseModel):
    reserve_a: Uint256 = Field(alias="reserveA")
    reserve_b: Uint256 = Field(alias="reserveB")

    model_config = {"populate_by_name": True}


class DepositRequest(BaseModel):
    """Offer up to amountAIn / amountBIn; the pool takes them at its ratio."""

    caller: Address
    amount_a_in: Uint256 = Field(alias="amountAIn")
    amount_b_in: Uint256 = Field(alias="amountBIn")

    model_config = {"populate_by_name": True}


class DepositResponse(BaseModel):
    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")
    shares: Uint256

    model_config = {"populate_by_name": True}


class WithdrawRequest(BaseModel):
    caller: Address
    shares: Uint256

    model_config = {"populate_by_name": True}


class WithdrawResponse(BaseModel):
    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")

    model_config = {"populate_by_name": True}


class SwapRequest(BaseModel):
    caller: Address
    token_in: Address = Field(alias="tokenIn")
    token_out: Address = Field(alias="tokenOut")
    amount_in: Uint256 = Field(alias="amountIn")

    model_config = {"populate_by_name": True}


class SwapResponse(BaseModel):
    amount_out: Uint256 = Field(alias="amountOut")

    model_config = {"populate_by_name": True}


class QuoteResponse(BaseModel):
    token_in: Address = Field(alias="tokenIn")
    token_out: Address = Field(alias="tokenOut")
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out: Uint256 = Field(alias="amountOut")

    model_config = {"populate_by_name": True}


class MintRequest(BaseModel):
    """Credit an account on the reference ledger."""

    asset: Address
    amount: Uint256


class ApproveRequest(BaseModel):
    asset: Address
    spender: Address
    amount: Uint256


class BalanceResponse(BaseModel):
    asset: Address
    holder: Address
    balance: Uint256


class ErrorResponse(BaseModel):
    """Rejected operation: error kind plus human-readable detail."""

    error: str
    detail: str
