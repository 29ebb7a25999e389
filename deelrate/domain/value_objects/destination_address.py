"""
Destination Address Value Objects

A destination is either a crypto wallet or a fiat bank account. The
variant is part of identity: a CryptoAddress never equals a FiatAccount.
Use the create() factories; they trim and validate every field.
"""
from __future__ import annotations
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from deelrate.domain.result import Error, Result

WALLET_MIN_LENGTH = 26
WALLET_MAX_LENGTH = 62
ACCOUNT_NUMBER_LENGTH = 10
ACCOUNT_NUMBER_PATTERN = re.compile(rf"^[0-9]{{{ACCOUNT_NUMBER_LENGTH}}}$")


class AddressType(Enum):
    """Destination variant."""
    CRYPTO_DEPOSIT_ADDRESS = "crypto_deposit_address"
    FIAT_ACCOUNT_NUMBER = "fiat_account_number"


class DestinationAddress(ABC):
    """Base of the two destination variants."""

    @property
    @abstractmethod
    def address_type(self) -> AddressType:
        """Which variant this address is."""
        pass

    @property
    def is_crypto(self) -> bool:
        return self.address_type == AddressType.CRYPTO_DEPOSIT_ADDRESS

    @property
    def is_fiat(self) -> bool:
        return self.address_type == AddressType.FIAT_ACCOUNT_NUMBER


@dataclass(frozen=True)
class CryptoAddress(DestinationAddress):
    """
    Crypto wallet address.

    Attributes:
        wallet: Trimmed wallet address, 26 to 62 characters
    """
    wallet: str

    @property
    def address_type(self) -> AddressType:
        return AddressType.CRYPTO_DEPOSIT_ADDRESS

    @classmethod
    def create(cls, wallet: Optional[str]) -> Result[CryptoAddress]:
        """Trim and validate a wallet address."""
        wallet = (wallet or "").strip()
        if not wallet:
            return Result.failure(
                Error.validation(
                    "DestinationAddress.Empty", "Destination address can't be empty."
                )
            )
        if not WALLET_MIN_LENGTH <= len(wallet) <= WALLET_MAX_LENGTH:
            return Result.failure(
                Error.validation(
                    "DestinationAddress.InvalidWalletLength",
                    f"Wallet address must be between {WALLET_MIN_LENGTH} and "
                    f"{WALLET_MAX_LENGTH} characters.",
                )
            )
        return Result.success(cls(wallet))

    def __str__(self) -> str:
        return self.wallet


@dataclass(frozen=True)
class FiatAccount(DestinationAddress):
    """
    Fiat bank account.

    Attributes:
        account_number: Exactly ten digits
        account_name: Account holder name
        bank_name: Bank name
    """
    account_number: str
    account_name: str
    bank_name: str

    @property
    def address_type(self) -> AddressType:
        return AddressType.FIAT_ACCOUNT_NUMBER

    @classmethod
    def create(
        cls,
        account_number: Optional[str],
        account_name: Optional[str],
        bank_name: Optional[str],
    ) -> Result[FiatAccount]:
        """Trim and validate bank account details."""
        account_number = (account_number or "").strip()
        account_name = (account_name or "").strip()
        bank_name = (bank_name or "").strip()

        if not account_number:
            return Result.failure(
                Error.validation(
                    "DestinationAddress.Empty", "Destination address can't be empty."
                )
            )
        if not ACCOUNT_NUMBER_PATTERN.match(account_number):
            return Result.failure(
                Error.validation(
                    "DestinationAddress.InvalidAccountNumber",
                    f"Account number must be exactly {ACCOUNT_NUMBER_LENGTH} digits.",
                )
            )
        if not account_name:
            return Result.failure(
                Error.validation(
                    "DestinationAddress.MissingAccountName", "Account name can't be empty."
                )
            )
        if not bank_name:
            return Result.failure(
                Error.validation(
                    "DestinationAddress.MissingBankName", "Bank name can't be empty."
                )
            )
        return Result.success(cls(account_number, account_name, bank_name))

    def __str__(self) -> str:
        return f"{self.account_number} ({self.account_name}, {self.bank_name})"
