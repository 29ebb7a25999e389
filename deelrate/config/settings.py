"""
DeelRate settings.

Environment variables first (a .env file is loaded if present), with
validation helpers that raise ConfigurationError on bad values.
"""
import os
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv

from deelrate.domain.value_objects.amounts import CryptoType, FiatType
from deelrate.exceptions import ConfigurationError

load_dotenv()


def get_env_int(key: str, default: int, min_value: Optional[int] = None, max_value: Optional[int] = None) -> int:
    """Read an integer environment variable (validated)."""
    value = os.getenv(key)
    if value is None:
        return default

    try:
        int_value = int(value)
    except ValueError:
        raise ConfigurationError(key, f"not an integer: {value}")
    if min_value is not None and int_value < min_value:
        raise ConfigurationError(key, f"value is below the minimum ({min_value}): {int_value}")
    if max_value is not None and int_value > max_value:
        raise ConfigurationError(key, f"value is above the maximum ({max_value}): {int_value}")
    return int_value


def get_env_float(key: str, default: float, min_value: Optional[float] = None, max_value: Optional[float] = None) -> float:
    """Read a float environment variable (validated)."""
    value = os.getenv(key)
    if value is None:
        return default

    try:
        float_value = float(value)
    except ValueError:
        raise ConfigurationError(key, f"not a number: {value}")
    if min_value is not None and float_value < min_value:
        raise ConfigurationError(key, f"value is below the minimum ({min_value}): {float_value}")
    if max_value is not None and float_value > max_value:
        raise ConfigurationError(key, f"value is above the maximum ({max_value}): {float_value}")
    return float_value


def get_env_str(key: str, default: str) -> str:
    """Read a string environment variable."""
    return os.getenv(key, default)


class RateConfig:
    """CoinAPI rate provider settings"""
    COINAPI_BASE_URL = get_env_str("COINAPI_BASE_URL", "https://rest.coinapi.io")
    COINAPI_API_KEY = os.getenv("COINAPI_API_KEY")
    COINAPI_ACCEPT = get_env_str("COINAPI_ACCEPT", "text/plain")
    COINAPI_TIMEOUT_SECONDS = get_env_float("COINAPI_TIMEOUT_SECONDS", 10.0, min_value=0.1, max_value=120.0)

    @classmethod
    def validate(cls):
        """Validate rate provider settings"""
        if not cls.COINAPI_API_KEY:
            raise ConfigurationError("COINAPI_API_KEY", "set COINAPI_API_KEY in the .env file")
        if not cls.COINAPI_BASE_URL.startswith(("http://", "https://")):
            raise ConfigurationError("COINAPI_BASE_URL", f"not an http(s) URL: {cls.COINAPI_BASE_URL}")


class DepositConfig:
    """
    System deposit addresses.

    One wallet per crypto type (DEPOSIT_WALLET_<CRYPTO>) and one bank
    account per fiat type (DEPOSIT_ACCOUNT_<FIAT>_NUMBER / _NAME / _BANK).
    Unset currencies are simply not configured.
    """
    CRYPTO_SYMBOLS = tuple(c.value for c in CryptoType)
    FIAT_SYMBOLS = tuple(f.value for f in FiatType)

    @classmethod
    def wallets(cls) -> Dict[str, str]:
        """Configured wallets keyed by crypto symbol."""
        wallets = {}
        for symbol in cls.CRYPTO_SYMBOLS:
            wallet = os.getenv(f"DEPOSIT_WALLET_{symbol}")
            if wallet:
                wallets[symbol] = wallet
        return wallets

    @classmethod
    def accounts(cls) -> Dict[str, Tuple[str, str, str]]:
        """Configured (number, name, bank) triples keyed by fiat symbol."""
        accounts = {}
        for symbol in cls.FIAT_SYMBOLS:
            prefix = f"DEPOSIT_ACCOUNT_{symbol}"
            number = os.getenv(f"{prefix}_NUMBER")
            if not number:
                continue
            accounts[symbol] = (
                number,
                get_env_str(f"{prefix}_NAME", ""),
                get_env_str(f"{prefix}_BANK", ""),
            )
        return accounts

    @classmethod
    def validate(cls):
        """Every configured account must be complete"""
        for symbol, (_, name, bank) in cls.accounts().items():
            if not name or not bank:
                raise ConfigurationError(
                    f"DEPOSIT_ACCOUNT_{symbol}",
                    "account number is set but account name or bank name is missing",
                )


def validate_all_configs():
    """Validate every settings group"""
    RateConfig.validate()
    DepositConfig.validate()
