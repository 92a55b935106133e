"""Pool-wide constants.

Centralizes the fee scale and amount bounds used by the pricing math.
"""

# Maximum uint256 value; amounts on the wire are bounded by it
UINT256_MAX = 2**256 - 1

# Swap fee is expressed in thousandths of the input amount
FEE_DENOMINATOR = 1000

# Reference configuration charges no fee
DEFAULT_FEE_BASIS = 0

# Allowance value treated as unlimited by the in-memory ledger
UNLIMITED_ALLOWANCE = UINT256_MAX
