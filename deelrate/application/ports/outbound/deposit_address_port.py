"""
DepositAddressPort - Interface for platform-controlled deposit addresses.

The system deposit address is where a user pays in: a fiat account for
buy orders, a crypto wallet for sell orders.
"""
from abc import ABC, abstractmethod
from typing import Optional

from deelrate.domain.result import Result
from deelrate.domain.value_objects.amounts import CryptoType, FiatType
from deelrate.domain.value_objects.destination_address import AddressType, DestinationAddress


class DepositAddressPort(ABC):
    """
    Port interface for resolving system deposit addresses.
    """

    @abstractmethod
    def get_deposit_address(
        self,
        address_type: AddressType,
        crypto_type: Optional[CryptoType] = None,
        fiat_type: Optional[FiatType] = None,
    ) -> Result[DestinationAddress]:
        """
        Resolve the deposit address for a currency.

        Args:
            address_type: Crypto wallet or fiat account
            crypto_type: Currency for a crypto wallet
            fiat_type: Currency for a fiat account

        Returns:
            Result with the address, NotFound when not configured
        """
        pass
