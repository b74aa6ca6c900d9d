"""Abstract time operations, so delays can be faked in tests."""

from abc import ABC, abstractmethod


class Time(ABC):
    """Abstract interface for time operations."""

    @abstractmethod
    def sleep(self, seconds: float) -> None:
        """Block for the given number of seconds."""
        ...
