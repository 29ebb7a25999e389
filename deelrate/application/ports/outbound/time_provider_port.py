"""
TimeProviderPort - Clock abstraction.

Replaces direct datetime.now() calls so cache expiry and order
timestamps can be driven from tests.

Implementations:
- SystemTimeAdapter: wall clock (UTC)
- FixedTimeAdapter: fixed, settable time (tests)
"""
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class TimeProviderPort(ABC):
    """
    Clock port interface.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Current time (timezone-aware, UTC)."""
        pass


class SystemTimeAdapter(TimeProviderPort):
    """
    System clock adapter.
    """

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedTimeAdapter(TimeProviderPort):
    """
    Fixed clock adapter for tests.
    """

    def __init__(self, fixed_time: datetime):
        self._fixed_time = fixed_time

    def set_time(self, new_time: datetime) -> None:
        """Move the clock to new_time."""
        self._fixed_time = new_time

    def advance(self, delta: timedelta) -> None:
        """Move the clock forward by delta."""
        self._fixed_time = self._fixed_time + delta

    def now(self) -> datetime:
        return self._fixed_time
