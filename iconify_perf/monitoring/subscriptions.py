"""
Подписки на события загрузки иконок
"""

import queue
import threading
from typing import Callable, List, Optional

from loguru import logger

from .types import LoadEvent, LoadEventListener


class _Subscription:
    __slots__ = ("listener",)

    def __init__(self, listener: LoadEventListener):
        self.listener = listener


class SubscriptionHub:
    """
    Упорядоченный список слушателей

    События доставляются синхронно, в порядке подписки. Исключение одного
    слушателя пропускается, остальные всё равно получают событие.
    """

    def __init__(self):
        self._subscriptions: List[_Subscription] = []
        self._lock = threading.RLock()

    def subscribe(self, listener: LoadEventListener) -> Callable[[], None]:
        """
        Подписаться на события

        Returns:
            Callable[[], None]: снимает эту подписку, повторный вызов безопасен
        """
        subscription = _Subscription(listener)
        with self._lock:
            self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            with self._lock:
                for i, existing in enumerate(self._subscriptions):
                    if existing is subscription:
                        del self._subscriptions[i]
                        break

        return unsubscribe

    def publish(self, event: LoadEvent) -> None:
        """Доставить ``event`` всем слушателям"""
        with self._lock:
            subscriptions = list(self._subscriptions)

        for subscription in subscriptions:
            try:
                subscription.listener(event)
            except Exception as e:
                logger.debug(f"Load event listener {subscription.listener!r} failed: {e}")

    @property
    def listener_count(self) -> int:
        return len(self._subscriptions)


class QueueListener:
    """
    Слушатель, складывающий события в очередь

    Позволяет разбирать события в своём потоке, а не внутри
    ``record_event``. При переполненной очереди событие отбрасывается и учитывается в ``dropped``.
    """

    def __init__(self, maxsize: int = 512):
        self.queue: "queue.Queue[LoadEvent]" = queue.Queue(maxsize=maxsize)
        self.dropped = 0
        self._lock = threading.Lock()

    def __call__(self, event: LoadEvent) -> None:
        try:
            self.queue.put_nowait(event)
        except queue.Full:
            with self._lock:
                self.dropped += 1
            logger.debug(f"Load event queue full, dropping event for {event.icon_name}")

    def get(self, timeout: Optional[float] = None) -> Optional[LoadEvent]:
        """Следующее событие или None, если за ``timeout`` секунд ничего не пришло"""
        try:
            if timeout is None:
                return self.queue.get_nowait()
            return self.queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def drain(self) -> List[LoadEvent]:
        events: List[LoadEvent] = []
        while True:
            try:
                events.append(self.queue.get_nowait())
            except queue.Empty:
                return events
