"""
Shared fixtures for the icon performance monitor tests
"""

import pytest

from iconify_perf.config.settings import ConfigManager
from iconify_perf.monitoring.performance_monitor import PerformanceMonitor


class FakeClock:
    """Manually advanced clock returning epoch milliseconds"""

    def __init__(self, start: float = 1_700_000_000_000.0):
        self.now = start

    def advance(self, ms: float) -> None:
        self.now += ms

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def config():
    return ConfigManager()


@pytest.fixture
def monitor(config, clock):
    """Fresh monitor, disabled as after construction"""
    return PerformanceMonitor(config=config, clock=clock)


@pytest.fixture
def enabled_monitor(monitor):
    monitor.enable()
    return monitor
