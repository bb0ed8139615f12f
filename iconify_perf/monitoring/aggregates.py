"""
Агрегаты по иконкам: количество загрузок и длительности
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, Iterator, Optional, Tuple


@dataclass
class IconAggregate:
    """
    Статистика одной иконки

    ``count`` и ``total_duration`` накапливаются за всё время, поэтому среднее
    точное; ограничен только ``recent_durations``.
    """
    count: int = 0
    total_duration: float = 0.0
    min_duration: float = float("inf")
    max_duration: float = 0.0
    recent_durations: Deque[float] = field(default_factory=deque)

    def add(self, duration_ms: float, max_samples: int) -> None:
        self.count += 1
        self.total_duration += duration_ms
        self.min_duration = min(self.min_duration, duration_ms)
        self.max_duration = max(self.max_duration, duration_ms)
        self.recent_durations.append(duration_ms)
        while len(self.recent_durations) > max_samples:
            self.recent_durations.popleft()

    @property
    def avg_duration(self) -> float:
        return self.total_duration / self.count if self.count > 0 else 0.0


class PerIconAggregate:
    """Имя иконки -> IconAggregate в порядке первого появления"""

    def __init__(self, max_samples: Callable[[], int]):
        self._max_samples = max_samples
        self._icons: Dict[str, IconAggregate] = {}

    def record(self, icon_name: str, duration_ms: float) -> IconAggregate:
        aggregate = self._icons.get(icon_name)
        if aggregate is None:
            aggregate = IconAggregate()
            self._icons[icon_name] = aggregate
        aggregate.add(duration_ms, self._max_samples())
        return aggregate

    def get(self, icon_name: str) -> Optional[IconAggregate]:
        return self._icons.get(icon_name)

    def items(self) -> Iterator[Tuple[str, IconAggregate]]:
        return iter(self._icons.items())

    def clear(self) -> None:
        self._icons.clear()
