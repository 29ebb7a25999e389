"""
Tests for environment-backed settings.
"""
import pytest

from deelrate.config.settings import DepositConfig, get_env_float, get_env_int
from deelrate.exceptions import ConfigurationError


class TestEnvHelpers:

    def test_int_default_when_unset(self, monkeypatch):
        monkeypatch.delenv("DEELRATE_TEST_INT", raising=False)

        assert get_env_int("DEELRATE_TEST_INT", 7) == 7

    def test_int_not_a_number(self, monkeypatch):
        monkeypatch.setenv("DEELRATE_TEST_INT", "seven")

        with pytest.raises(ConfigurationError) as exc_info:
            get_env_int("DEELRATE_TEST_INT", 7)

        assert exc_info.value.config_key == "DEELRATE_TEST_INT"

    def test_float_bounds(self, monkeypatch):
        monkeypatch.setenv("DEELRATE_TEST_FLOAT", "500")

        with pytest.raises(ConfigurationError, match="maximum"):
            get_env_float("DEELRATE_TEST_FLOAT", 1.0, min_value=0.1, max_value=120.0)


class TestDepositConfig:

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for symbol in DepositConfig.CRYPTO_SYMBOLS:
            monkeypatch.delenv(f"DEPOSIT_WALLET_{symbol}", raising=False)
        for symbol in DepositConfig.FIAT_SYMBOLS:
            for suffix in ("NUMBER", "NAME", "BANK"):
                monkeypatch.delenv(f"DEPOSIT_ACCOUNT_{symbol}_{suffix}", raising=False)

    def test_reads_wallets_and_accounts(self, monkeypatch):
        monkeypatch.setenv("DEPOSIT_WALLET_BTC", "wallet")
        monkeypatch.setenv("DEPOSIT_ACCOUNT_NGN_NUMBER", "0123456789")
        monkeypatch.setenv("DEPOSIT_ACCOUNT_NGN_NAME", "DeelRate Ltd")
        monkeypatch.setenv("DEPOSIT_ACCOUNT_NGN_BANK", "Zenith Bank")

        assert DepositConfig.wallets() == {"BTC": "wallet"}
        assert DepositConfig.accounts() == {"NGN": ("0123456789", "DeelRate Ltd", "Zenith Bank")}

    def test_incomplete_account_fails_validation(self, monkeypatch):
        monkeypatch.setenv("DEPOSIT_ACCOUNT_EUR_NUMBER", "0123456789")

        with pytest.raises(ConfigurationError) as exc_info:
            DepositConfig.validate()

        assert exc_info.value.config_key == "DEPOSIT_ACCOUNT_EUR"

    def test_nothing_configured_is_valid(self):
        DepositConfig.validate()

        assert DepositConfig.wallets() == {}
