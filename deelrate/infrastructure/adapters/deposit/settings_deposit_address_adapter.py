"""
SettingsDepositAddressAdapter - DepositAddressPort backed by configuration.

Holds one wallet per crypto type and one bank account per fiat type.
Values are validated with the domain factories when the adapter is
built, so a malformed setting fails at startup instead of per order.
"""
import logging
from typing import Dict, Mapping, Optional, Tuple

from deelrate.application.ports.outbound.deposit_address_port import DepositAddressPort
from deelrate.config.settings import DepositConfig
from deelrate.domain.result import Error, Result
from deelrate.domain.value_objects.amounts import CryptoType, FiatType
from deelrate.domain.value_objects.destination_address import (
    AddressType,
    CryptoAddress,
    DestinationAddress,
    FiatAccount,
)
from deelrate.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class SettingsDepositAddressAdapter(DepositAddressPort):
    """
    Deposit addresses from static settings.
    """

    def __init__(
        self,
        wallets: Optional[Mapping[str, str]] = None,
        accounts: Optional[Mapping[str, Tuple[str, str, str]]] = None,
    ):
        """
        Initialize with address settings.

        Args:
            wallets: Wallet per crypto symbol
            accounts: (number, name, bank) per fiat symbol

        Raises:
            ConfigurationError: If a symbol is unknown or an address is invalid
        """
        self._wallets: Dict[CryptoType, CryptoAddress] = {}
        self._accounts: Dict[FiatType, FiatAccount] = {}

        for symbol, wallet in (wallets or {}).items():
            crypto_type = CryptoType.parse(symbol)
            if crypto_type is None:
                raise ConfigurationError(f"DEPOSIT_WALLET_{symbol}", "unknown crypto type")
            result = CryptoAddress.create(wallet)
            if result.is_failure:
                raise ConfigurationError(f"DEPOSIT_WALLET_{symbol}", result.error.description)
            self._wallets[crypto_type] = result.value

        for symbol, (number, name, bank) in (accounts or {}).items():
            fiat_type = FiatType.parse(symbol)
            if fiat_type is None:
                raise ConfigurationError(f"DEPOSIT_ACCOUNT_{symbol}", "unknown fiat type")
            result = FiatAccount.create(number, name, bank)
            if result.is_failure:
                raise ConfigurationError(f"DEPOSIT_ACCOUNT_{symbol}", result.error.description)
            self._accounts[fiat_type] = result.value

    @classmethod
    def from_config(cls) -> "SettingsDepositAddressAdapter":
        """Build from DEPOSIT_* environment variables."""
        adapter = cls(DepositConfig.wallets(), DepositConfig.accounts())
        logger.info(
            f"Deposit addresses loaded: {len(adapter._wallets)} wallets, "
            f"{len(adapter._accounts)} accounts"
        )
        return adapter

    def get_deposit_address(
        self,
        address_type: AddressType,
        crypto_type: Optional[CryptoType] = None,
        fiat_type: Optional[FiatType] = None,
    ) -> Result[DestinationAddress]:
        if address_type == AddressType.CRYPTO_DEPOSIT_ADDRESS:
            address = self._wallets.get(crypto_type)
            currency = crypto_type.value if crypto_type else None
        else:
            address = self._accounts.get(fiat_type)
            currency = fiat_type.value if fiat_type else None

        if address is None:
            return Result.failure(
                Error.not_found(
                    "DepositAddress.NotConfigured",
                    f"No deposit address is configured for {currency}.",
                )
            )
        return Result.success(address)
