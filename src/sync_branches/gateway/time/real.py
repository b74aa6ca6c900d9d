"""Production time operations."""

import time

from sync_branches.gateway.time.abc import Time


class RealTime(Time):
    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)
