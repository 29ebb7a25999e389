"""
Domain Exceptions

Expected rule violations are returned as Result errors. The exceptions
here signal programming mistakes only.
"""


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class ResultAccessError(DomainError):
    """Raised when the value of a failed Result is read."""
    pass
