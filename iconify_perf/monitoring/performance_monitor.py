"""
Монитор производительности загрузки иконок
Записывает каждую загрузку иконки (попадание в кэш, загрузка из сети, ошибка),
ведёт счётчики, ограниченную историю и агрегаты по иконкам, строит отчёты
"""

import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, Union

from loguru import logger

from ..config.settings import ConfigManager, get_config_manager
from ..utils.validation import (
    validate_duration,
    validate_error_message,
    validate_event_type,
    validate_icon_name,
)
from .aggregates import PerIconAggregate
from .counters import CounterState
from .history import HistoryBuffer
from .report_formatter import format_report
from .statistics import (
    compute_cache_stats,
    compute_icon_stats,
    compute_load_times_by_type,
    compute_summary,
    rank_most_used_icons,
    rank_slowest_icons,
)
from .subscriptions import SubscriptionHub
from .types import (
    CacheStatistics,
    IconStats,
    LoadEvent,
    LoadEventListener,
    LoadEventType,
    PerformanceReport,
    PerformanceSummary,
)

RECENT_EVENTS_IN_REPORT = 100


def _now_ms() -> float:
    return time.time() * 1000.0


class PerformanceMonitor:
    """
    Монитор производительности

    Всё изменяемое состояние принадлежит экземпляру и защищено одной
    реентерабельной блокировкой: запись события (счётчики, агрегаты, история,
    рассылка слушателям), ``reset`` и все чтения выполняются последовательно.
    Слушатели вызываются под блокировкой и могут читать статистику.
    """

    def __init__(self, config: Optional[ConfigManager] = None,
                 clock: Optional[Callable[[], float]] = None):
        """
        Args:
            config: Хранилище настроек, по умолчанию глобальное
            clock: Текущее время в миллисекундах эпохи
        """
        self._config = config or get_config_manager()
        self._clock = clock or _now_ms
        self._lock = threading.RLock()

        self._counters = CounterState()
        self._history = HistoryBuffer(self._config.get_max_history_size)
        self._icons = PerIconAggregate(self._config.get_max_icon_samples)
        self._subscriptions = SubscriptionHub()

        self._start_time = self._clock()
        self._last_timestamp = self._start_time

    # ===== состояние =====

    def enable(self) -> None:
        with self._lock:
            self._start_time = self._clock()
            self._config.set_enabled(True)
        logger.info("Icon performance monitoring enabled")

    def disable(self) -> None:
        with self._lock:
            self._config.set_enabled(False)
        logger.info("Icon performance monitoring disabled")

    def is_enabled(self) -> bool:
        return self._config.is_enabled()

    def reset(self) -> None:
        """Очистить счётчики, историю и агрегаты; флаг и подписчики сохраняются"""
        with self._lock:
            self._counters.reset()
            self._history.clear()
            self._icons.clear()
            self._start_time = self._clock()
        logger.info("Icon performance data reset")

    # ===== запись =====

    def record_event(self, icon_name: str, event_type: Union[LoadEventType, str],
                     duration_ms: float, error_message: Optional[str] = None) -> None:
        """
        Записать событие загрузки иконки

        При выключенном мониторинге ничего не делает. Некорректные данные
        отбрасываются или нормализуются с предупреждением; при
        ``strict_validation`` выбрасывается ``InvalidLoadEventError``.
        """
        if not self._config.is_enabled():
            return

        with self._lock:
            # enable/disable take the same lock
            if not self._config.is_enabled():
                return

            strict = self._config.is_strict()
            name = validate_icon_name(icon_name, strict)
            load_type = validate_event_type(event_type, strict)
            if name is None or load_type is None:
                return
            duration = validate_duration(duration_ms, strict)
            message = validate_error_message(load_type, error_message)

            timestamp = max(self._clock(), self._last_timestamp)
            self._last_timestamp = timestamp

            event = LoadEvent(
                icon_name=name,
                type=load_type,
                duration_ms=duration,
                timestamp=timestamp,
                error_message=message,
            )

            self._counters.increment(load_type)
            self._icons.record(name, duration)
            self._history.append(event)
            self._subscriptions.publish(event)

    def subscribe(self, listener: LoadEventListener) -> Callable[[], None]:
        """Подписаться на события. Возвращает функцию отписки"""
        return self._subscriptions.subscribe(listener)

    @property
    def listener_count(self) -> int:
        return self._subscriptions.listener_count

    # ===== чтение =====

    def _uptime(self) -> float:
        return max(0.0, self._clock() - self._start_time)

    def get_cache_stats(self) -> CacheStatistics:
        with self._lock:
            return compute_cache_stats(self._counters)

    def get_summary(self) -> PerformanceSummary:
        with self._lock:
            return compute_summary(self._history, self._uptime())

    def get_report(self) -> PerformanceReport:
        """Получить полный отчёт о производительности"""
        with self._lock:
            return PerformanceReport(
                summary=compute_summary(self._history, self._uptime()),
                cache_stats=compute_cache_stats(self._counters),
                load_times_by_type=compute_load_times_by_type(self._history),
                slowest_icons=rank_slowest_icons(self._icons),
                most_used_icons=rank_most_used_icons(self._icons),
                recent_events=self._history.tail(RECENT_EVENTS_IN_REPORT),
                generated_at=self._clock(),
            )

    def get_events(self) -> List[LoadEvent]:
        """Копия истории событий, от старых к новым"""
        with self._lock:
            return self._history.snapshot()

    def get_icon_stats(self, icon_name: str) -> Optional[IconStats]:
        with self._lock:
            return compute_icon_stats(icon_name, self._icons.get(icon_name))

    def format_report(self) -> str:
        return format_report(self.get_report())

    def print_report(self) -> None:
        print(self.format_report())


class LoadTimer:
    """Замер для ``track_icon_load``; ``source`` задаётся, когда известен источник"""

    def __init__(self, icon_name: str, source: Union[LoadEventType, str]):
        self.icon_name = icon_name
        self.source = source
        self.duration_ms = 0.0


@contextmanager
def track_icon_load(icon_name: str,
                    source: Union[LoadEventType, str] = LoadEventType.NETWORK_FETCH,
                    monitor: Optional[PerformanceMonitor] = None) -> Iterator[LoadTimer]:
    """
    Замерить время загрузки иконки

    По завершении блока записывает ``timer.source`` с прошедшим временем,
    при исключении записывает событие ``error`` с текстом исключения и
    пробрасывает его дальше. Неизвестный источник проверяется в
    ``record_event``, сам блок выполняется всегда.

    Example:
        with track_icon_load("mdi:home") as timer:
            svg = memory_cache.get("mdi:home")
            if svg is not None:
                timer.source = LoadEventType.MEMORY_HIT
    """
    target = monitor or get_performance_monitor()
    timer = LoadTimer(icon_name, source)
    start = time.perf_counter()
    try:
        yield timer
    except Exception as e:
        timer.duration_ms = (time.perf_counter() - start) * 1000.0
        target.record_event(icon_name, LoadEventType.ERROR, timer.duration_ms, str(e))
        raise
    timer.duration_ms = (time.perf_counter() - start) * 1000.0
    target.record_event(icon_name, timer.source, timer.duration_ms)


# Глобальный экземпляр монитора производительности
_performance_monitor: Optional[PerformanceMonitor] = None
_performance_monitor_lock = threading.Lock()


def get_performance_monitor() -> PerformanceMonitor:
    """Получить глобальный экземпляр монитора производительности"""
    global _performance_monitor
    with _performance_monitor_lock:
        if _performance_monitor is None:
            _performance_monitor = PerformanceMonitor()
        return _performance_monitor


def enable_performance_monitoring() -> None:
    get_performance_monitor().enable()


def disable_performance_monitoring() -> None:
    get_performance_monitor().disable()


def get_performance_report() -> PerformanceReport:
    return get_performance_monitor().get_report()


def print_performance_report() -> None:
    """Вывести отчёт о производительности в stdout"""
    get_performance_monitor().print_report()
