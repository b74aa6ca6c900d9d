"""Fake time operations for testing."""

from sync_branches.gateway.time.abc import Time


class FakeTime(Time):
    """Records sleep requests without blocking."""

    def __init__(self) -> None:
        self._sleep_calls: list[float] = []

    @property
    def sleep_calls(self) -> list[float]:
        """Durations passed to sleep(), in call order."""
        return list(self._sleep_calls)

    def sleep(self, seconds: float) -> None:
        self._sleep_calls.append(seconds)
