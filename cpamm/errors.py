"""Pool error classes.

Every error rejects the whole operation; none is transient. Each class
carries a ``kind`` string that the HTTP layer reports to clients.
"""


class PoolError(Exception):
    """Base error for pool operations."""

    kind = "PoolError"


class InsufficientInput(PoolError):
    """A required amount argument is zero."""

    kind = "InsufficientInput"


class InsufficientLiquidity(PoolError):
    """The operation needs non-zero reserves but at least one is zero."""

    kind = "InsufficientLiquidity"


class InsufficientOutputAmount(PoolError):
    """Computed swap output rounds to zero."""

    kind = "InsufficientOutputAmount"


class InsufficientLiquidityMinted(PoolError):
    """Computed share amount for a deposit rounds to zero."""

    kind = "InsufficientLiquidityMinted"


class InsufficientLiquidityBurned(PoolError):
    """A withdrawal would return zero of at least one asset."""

    kind = "InsufficientLiquidityBurned"


class InvalidToken(PoolError):
    """Asset is not part of the pool's pair, or is not a valid address."""

    kind = "InvalidToken"


class IdenticalAddress(PoolError):
    """Swap names the same asset on both sides."""

    kind = "IdenticalAddress"


class IdenticalAssetConfiguration(PoolError):
    """Pool creation requested with the same asset twice."""

    kind = "IdenticalAssetConfiguration"


class InvalidFeeBasis(PoolError):
    """Fee must be in range [0, 1000) thousandths."""

    kind = "InvalidFeeBasis"


class PoolAlreadyExists(PoolError):
    """A pool for this asset pair is already registered."""

    kind = "PoolAlreadyExists"


class PoolNotFound(PoolError):
    """No pool registered under this identity."""

    kind = "PoolNotFound"


class LedgerError(Exception):
    """Base error for asset ledger operations."""

    kind = "LedgerError"


class InsufficientBalance(LedgerError):
    """Holder balance is lower than the transfer amount."""

    kind = "InsufficientBalance"


class InsufficientAllowance(LedgerError):
    """Spender allowance is lower than the transfer amount."""

    kind = "InsufficientAllowance"


class UnauthorizedIssuer(LedgerError):
    """Mint or burn of an issued asset not made by its issuer."""

    kind = "UnauthorizedIssuer"


class ReentrancyError(RuntimeError):
    """A mutating pool operation was re-entered while one is in flight."""

    kind = "Reentrancy"
