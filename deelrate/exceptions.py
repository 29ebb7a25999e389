"""
DeelRate infrastructure exceptions.

Domain rule violations never raise; they travel as Result errors.
These exceptions cover faults outside the domain: the rate provider
transport and configuration loading.
"""
from typing import Optional


class DeelRateError(Exception):
    """Base exception for infrastructure faults."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        """
        Args:
            message: Error message
            error_code: Optional machine-readable code
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class RateProviderError(DeelRateError):
    """Raised when the rate provider cannot be reached or answers badly."""

    def __init__(
        self,
        provider: str,
        pair: str,
        reason: str,
        status_code: Optional[int] = None,
    ):
        """
        Args:
            provider: Provider name (e.g. 'CoinAPI')
            pair: Requested pair as BASE/QUOTE
            reason: Failure reason
            status_code: HTTP status code, if any
        """
        if status_code:
            message = f"Rate provider failure ({provider}, {pair}): HTTP {status_code} - {reason}"
        else:
            message = f"Rate provider failure ({provider}, {pair}): {reason}"
        super().__init__(message, error_code="RATE_PROVIDER_ERROR")
        self.provider = provider
        self.pair = pair
        self.reason = reason
        self.status_code = status_code


class ConfigurationError(DeelRateError):
    """Raised when a configuration value is missing or invalid."""

    def __init__(self, config_key: str, reason: str):
        """
        Args:
            config_key: Configuration key
            reason: What is wrong with it
        """
        message = f"Configuration error ({config_key}): {reason}"
        super().__init__(message, error_code="CONFIGURATION_ERROR")
        self.config_key = config_key
        self.reason = reason
