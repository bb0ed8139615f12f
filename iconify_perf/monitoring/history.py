"""
Ограниченная история событий загрузки (FIFO)
"""

from collections import deque
from typing import Callable, Deque, Iterator, List

from .types import LoadEvent


class HistoryBuffer:
    """
    Кольцевой буфер последних событий

    Граница читается через ``max_size`` при каждой вставке, поэтому
    уменьшенный лимит действует со следующего добавления.
    """

    def __init__(self, max_size: Callable[[], int]):
        self._max_size = max_size
        self._events: Deque[LoadEvent] = deque()

    def append(self, event: LoadEvent) -> None:
        """Добавить ``event`` и вытеснить самые старые события сверх лимита"""
        self._events.append(event)
        limit = self._max_size()
        while len(self._events) > limit:
            self._events.popleft()

    def snapshot(self) -> List[LoadEvent]:
        return list(self._events)

    def tail(self, n: int) -> List[LoadEvent]:
        """Последние ``n`` событий, от старых к новым"""
        if n <= 0:
            return []
        size = len(self._events)
        if n >= size:
            return list(self._events)
        return [self._events[i] for i in range(size - n, size)]

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[LoadEvent]:
        return iter(self._events)
