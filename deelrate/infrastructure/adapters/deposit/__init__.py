from deelrate.infrastructure.adapters.deposit.settings_deposit_address_adapter import (
    SettingsDepositAddressAdapter,
)

__all__ = ["SettingsDepositAddressAdapter"]
