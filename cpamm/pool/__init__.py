"""Liquidity pool: reserves, deposits, withdrawals and swaps."""

from cpamm.pool.guard import ReentrancyGuard
from cpamm.pool.liquidity import DepositResult, LiquidityManager, WithdrawalResult
from cpamm.pool.pool import Pool, compute_pool_address, create_pool, sort_assets
from cpamm.pool.registry import PoolRegistry
from cpamm.pool.reserves import PoolState, ReserveAccountant, Reserves
from cpamm.pool.swap import SwapEngine, SwapResult

__all__ = [
    "Pool",
    "create_pool",
    "sort_assets",
    "compute_pool_address",
    "PoolRegistry",
    "Reserves",
    "PoolState",
    "ReserveAccountant",
    "LiquidityManager",
    "DepositResult",
    "WithdrawalResult",
    "SwapEngine",
    "SwapResult",
    "ReentrancyGuard",
]
