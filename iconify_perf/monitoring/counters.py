"""
Счётчики событий загрузки по источникам
"""

from dataclasses import dataclass

from .types import CACHE_HIT_TYPES, LoadEventType

_FIELD_BY_TYPE = {
    LoadEventType.MEMORY_HIT: "memory_hits",
    LoadEventType.BUNDLED_HIT: "bundled_hits",
    LoadEventType.DISK_HIT: "disk_hits",
    LoadEventType.NETWORK_FETCH: "network_fetches",
    LoadEventType.ERROR: "errors",
}


@dataclass
class CounterState:
    """Счётчики по источникам с момента последнего сброса"""
    memory_hits: int = 0
    bundled_hits: int = 0
    disk_hits: int = 0
    network_fetches: int = 0
    errors: int = 0

    def increment(self, event_type: LoadEventType) -> None:
        name = _FIELD_BY_TYPE[event_type]
        setattr(self, name, getattr(self, name) + 1)

    def get(self, event_type: LoadEventType) -> int:
        return getattr(self, _FIELD_BY_TYPE[event_type])

    @property
    def total(self) -> int:
        return self.memory_hits + self.bundled_hits + self.disk_hits + self.network_fetches + self.errors

    @property
    def cache_hits(self) -> int:
        return sum(self.get(t) for t in CACHE_HIT_TYPES)

    def reset(self) -> None:
        self.memory_hits = 0
        self.bundled_hits = 0
        self.disk_hits = 0
        self.network_fetches = 0
        self.errors = 0
