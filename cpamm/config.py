"""Configuration for pools and the pool service."""

import os
from dataclasses import dataclass

from cpamm.constants import DEFAULT_FEE_BASIS, FEE_DENOMINATOR
from cpamm.errors import InvalidFeeBasis


def validate_fee_basis(fee_basis: int) -> int:
    """Return fee_basis if it is an int in [0, FEE_DENOMINATOR).

    Raises:
        InvalidFeeBasis: If the fee is out of range or not an integer
    """
    if not isinstance(fee_basis, int) or isinstance(fee_basis, bool):
        raise InvalidFeeBasis(f"fee_basis must be an int, got {type(fee_basis).__name__}")
    if not 0 <= fee_basis < FEE_DENOMINATOR:
        raise InvalidFeeBasis(f"fee_basis must be in [0, {FEE_DENOMINATOR}): {fee_basis}")
    return fee_basis


@dataclass(frozen=True)
class PoolConfig:
    """Per-pool configuration.

    Attributes:
        fee_basis: Swap fee in thousandths of the input amount (3 = 0.3%).
            The reference configuration charges no fee.
    """

    fee_basis: int = DEFAULT_FEE_BASIS

    def __post_init__(self) -> None:
        validate_fee_basis(self.fee_basis)

    @classmethod
    def from_env(cls) -> "PoolConfig":
        """Build a config from CPAMM_FEE_BASIS, falling back to the default."""
        raw = os.environ.get("CPAMM_FEE_BASIS")
        if raw is None or raw.strip() == "":
            return cls()
        try:
            fee_basis = int(raw)
        except ValueError as err:
            raise InvalidFeeBasis(f"CPAMM_FEE_BASIS must be an integer: {raw!r}") from err
        return cls(fee_basis=fee_basis)


# Default configuration instance
DEFAULT_POOL_CONFIG = PoolConfig()


@dataclass(frozen=True)
class ServiceSettings:
    """HTTP service settings, read from the environment."""

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ServiceSettings":
        return cls(
            host=os.environ.get("CPAMM_HOST", "0.0.0.0"),
            port=int(os.environ.get("CPAMM_PORT", "8000")),
            debug=os.environ.get("CPAMM_DEBUG", "false").lower() in ("true", "1", "yes"),
            log_level=os.environ.get("CPAMM_LOG_LEVEL", "INFO").upper(),
        )
