"""Tests for pool and service configuration."""

import pytest

from cpamm.config import DEFAULT_POOL_CONFIG, PoolConfig, ServiceSettings, validate_fee_basis
from cpamm.errors import InvalidFeeBasis


class TestPoolConfig:
    """Tests for PoolConfig."""

    def test_default_is_fee_free(self):
        assert DEFAULT_POOL_CONFIG.fee_basis == 0

    @pytest.mark.parametrize("fee_basis", [-1, 1000, 2**64])
    def test_out_of_range(self, fee_basis):
        with pytest.raises(InvalidFeeBasis):
            PoolConfig(fee_basis=fee_basis)

    @pytest.mark.parametrize("fee_basis", [0.3, "3", True])
    def test_non_integer(self, fee_basis):
        with pytest.raises(InvalidFeeBasis):
            validate_fee_basis(fee_basis)

    def test_from_env_default(self, monkeypatch):
        monkeypatch.delenv("CPAMM_FEE_BASIS", raising=False)
        assert PoolConfig.from_env() == PoolConfig()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CPAMM_FEE_BASIS", "3")
        assert PoolConfig.from_env().fee_basis == 3

    def test_from_env_invalid(self, monkeypatch):
        monkeypatch.setenv("CPAMM_FEE_BASIS", "0.3")
        with pytest.raises(InvalidFeeBasis):
            PoolConfig.from_env()


class TestServiceSettings:
    """Tests for ServiceSettings."""

    def test_defaults(self, monkeypatch):
        for name in ("CPAMM_HOST", "CPAMM_PORT", "CPAMM_DEBUG", "CPAMM_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        assert ServiceSettings.from_env() == ServiceSettings()

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("CPAMM_HOST", "127.0.0.1")
        monkeypatch.setenv("CPAMM_PORT", "9000")
        monkeypatch.setenv("CPAMM_DEBUG", "yes")
        monkeypatch.setenv("CPAMM_LOG_LEVEL", "debug")
        settings = ServiceSettings.from_env()
        assert settings == ServiceSettings(host="127.0.0.1", port=9000, debug=True, log_level="DEBUG")
