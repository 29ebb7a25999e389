"""
DeelRate configuration module.
"""
from deelrate.config.settings import (
    RateConfig,
    DepositConfig,
    validate_all_configs,
)

__all__ = ["RateConfig", "DepositConfig", "validate_all_configs"]
