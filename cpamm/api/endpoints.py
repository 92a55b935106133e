"""API endpoints for the pool service."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from cpamm.models.api import (
    ApproveRequest,
    BalanceResponse,
    CreatePoolRequest,
    DepositRequest,
    DepositResponse,
    ErrorResponse,
    MintRequest,
    PoolResponse,
    QuoteResponse,
    ReservesResponse,
    SwapRequest,
    SwapResponse,
    WithdrawRequest,
    WithdrawResponse,
)
from cpamm.errors import InvalidToken
from cpamm.models.types import normalize_address, validate_uint256
from cpamm.pool.pool import Pool
from cpamm.pool.registry import PoolRegistry

logger = structlog.get_logger()

# Rejected operations share one JSON error body
router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    }
)

_default_registry: PoolRegistry | None = None


def get_registry() -> PoolRegistry:
    """Dependency provider for the pool registry.

    Override this in tests to inject a fresh registry:
        app.dependency_overrides[get_registry] = lambda: registry

    Returns:
        The process-wide registry, created on first use.
    """
    global _default_registry
    if _default_registry is None:
        _default_registry = PoolRegistry()
    return _default_registry


def _account(address: str) -> str:
    """Normalize a path address, rejecting malformed ones with 422."""
    try:
        return normalize_address(address, validate=True)
    except ValueError as err:
        raise HTTPException(status_code=422, detail=str(err)) from err


def _amount(value: str) -> int:
    """Parse a query-string uint256, rejecting malformed ones with 422."""
    try:
        return int(validate_uint256(value))
    except ValueError as err:
        raise HTTPException(status_code=422, detail=str(err)) from err


def _pool_response(pool: Pool) -> PoolResponse:
    state = pool.state
    return PoolResponse(
        address=pool.address,
        asset_a=pool.asset_a,
        asset_b=pool.asset_b,
        reserve_a=state.reserves.reserve_a,
        reserve_b=state.reserves.reserve_b,
        total_shares=state.total_shares,
        fee_basis=pool.fee_basis,
    )


@router.post("/pools", status_code=201)
def create_pool(
    request: CreatePoolRequest,
    registry: PoolRegistry = Depends(get_registry),
) -> PoolResponse:
    """Create an empty pool for a pair of assets."""
    pool = registry.create_pool(request.asset_x, request.asset_y, fee_basis=request.fee_basis)
    return _pool_response(pool)


@router.get("/pools")
def list_pools(registry: PoolRegistry = Depends(get_registry)) -> list[PoolResponse]:
    return [_pool_response(pool) for pool in registry.pools]


@router.get("/pools/{address}")
def get_pool(address: str, registry: PoolRegistry = Depends(get_registry)) -> PoolResponse:
    return _pool_response(registry.get(address))


@router.get("/pools/{address}/reserves")
def get_reserves(address: str, registry: PoolRegistry = Depends(get_registry)) -> ReservesResponse:
    reserve_a, reserve_b = registry.get(address).get_reserves()
    return ReservesResponse(reserve_a=reserve_a, reserve_b=reserve_b)


@router.get("/pools/{address}/quote")
def quote(
    address: str,
    token_in: str = Query(alias="tokenIn"),
    amount_in: str = Query(alias="amountIn"),
    registry: PoolRegistry = Depends(get_registry),
) -> QuoteResponse:
    """Price a swap against current reserves without executing it."""
    pool = registry.get(address)
    amount = _amount(amount_in)
    token_out, amount_out = pool.quote_swap(token_in, amount)
    return QuoteResponse(
        token_in=normalize_address(token_in),
        token_out=token_out,
        amount_in=amount,
        amount_out=amount_out,
    )


@router.post("/pools/{address}/deposit")
def deposit(
    address: str,
    request: DepositRequest,
    registry: PoolRegistry = Depends(get_registry),
) -> DepositResponse:
    pool = registry.get(address)
    amount_a, amount_b, shares = pool.add_liquidity(
        request.caller, int(request.amount_a_in), int(request.amount_b_in)
    )
    return DepositResponse(amount_a=amount_a, amount_b=amount_b, shares=shares)


@router.post("/pools/{address}/withdraw")
def withdraw(
    address: str,
    request: WithdrawRequest,
    registry: PoolRegistry = Depends(get_registry),
) -> WithdrawResponse:
    pool = registry.get(address)
    amount_a, amount_b = pool.remove_liquidity(request.caller, int(request.shares))
    return WithdrawResponse(amount_a=amount_a, amount_b=amount_b)


@router.post("/pools/{address}/swap")
def swap(
    address: str,
    request: SwapRequest,
    registry: PoolRegistry = Depends(get_registry),
) -> SwapResponse:
    pool = registry.get(address)
    amount_out = pool.swap(request.caller, request.token_in, request.token_out, int(request.amount_in))
    return SwapResponse(amount_out=amount_out)


@router.post("/pools/{address}/sync")
def sync(address: str, registry: PoolRegistry = Depends(get_registry)) -> ReservesResponse:
    reserve_a, reserve_b = registry.get(address).sync()
    return ReservesResponse(reserve_a=reserve_a, reserve_b=reserve_b)


@router.post("/accounts/{holder}/mint")
def mint(
    holder: str,
    request: MintRequest,
    registry: PoolRegistry = Depends(get_registry),
) -> BalanceResponse:
    """Credit an account on the reference ledger (funding for demos and tests).

    Pool shares are not fundable; they are minted only by deposits.
    """
    holder = _account(holder)
    if request.asset in registry:
        raise InvalidToken(f"Pool shares of {request.asset} are minted only by deposits")
    registry.ledger.mint(request.asset, holder, int(request.amount))
    logger.info("ledger_mint", holder=holder, asset=request.asset, amount=request.amount)
    return BalanceResponse(
        asset=request.asset,
        holder=holder,
        balance=registry.ledger.balance_of(request.asset, holder),
    )


@router.post("/accounts/{holder}/approve", status_code=204)
def approve(
    holder: str,
    request: ApproveRequest,
    registry: PoolRegistry = Depends(get_registry),
) -> None:
    holder = _account(holder)
    registry.ledger.approve(request.asset, holder, request.spender, int(request.amount))


@router.get("/accounts/{holder}/balances/{asset}")
def balance(
    holder: str,
    asset: str,
    registry: PoolRegistry = Depends(get_registry),
) -> BalanceResponse:
    holder, asset = _account(holder), _account(asset)
    return BalanceResponse(
        asset=asset,
        holder=holder,
        balance=registry.ledger.balance_of(asset, holder),
    )
