"""Constant-product pricing (the quoting engine)."""

from cpamm.amm.quoting import get_amount_in, get_amount_out, quote

__all__ = [
    "quote",
    "get_amount_out",
    "get_amount_in",
]
