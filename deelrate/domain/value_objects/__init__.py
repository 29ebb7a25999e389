"""Domain value objects."""
from deelrate.domain.value_objects.amounts import CryptoAmount, CryptoType, FiatAmount, FiatType
from deelrate.domain.value_objects.destination_address import (
    AddressType,
    CryptoAddress,
    DestinationAddress,
    FiatAccount,
)
from deelrate.domain.value_objects.exchange_rate import CurrencyPair, ExchangeRate

__all__ = [
    "CryptoAmount",
    "CryptoType",
    "FiatAmount",
    "FiatType",
    "AddressType",
    "CryptoAddress",
    "DestinationAddress",
    "FiatAccount",
    "CurrencyPair",
    "ExchangeRate",
]
