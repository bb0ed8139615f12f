"""
Расчёт статистики по счётчикам, истории и агрегатам иконок

Чистые функции: входные данные не изменяются.
"""

import math
from typing import Iterable, List, Optional, Sequence

from .aggregates import IconAggregate, PerIconAggregate
from .counters import CounterState
from .types import (
    CacheStatistics,
    IconStats,
    IconTiming,
    IconUsage,
    LoadEvent,
    LoadEventType,
    LoadTimesByType,
    PerformanceSummary,
)

DEFAULT_RANKING_LIMIT = 10


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """
    Перцентиль методом ближайшего ранга по возрастающей последовательности

    ``sorted_values[ceil(p/100 * n) - 1]`` с ограничением индекса диапазоном;
    0.0 для пустой последовательности.
    """
    n = len(sorted_values)
    if n == 0:
        return 0.0
    index = math.ceil(p * n / 100) - 1
    return sorted_values[min(max(index, 0), n - 1)]


def mean(values: Sequence[float]) -> float:
    # left-to-right sum, same order the values were recorded in
    total = 0.0
    for value in values:
        total += value
    return total / len(values) if values else 0.0


def compute_cache_stats(counters: CounterState) -> CacheStatistics:
    total = counters.total
    hits = counters.cache_hits
    return CacheStatistics(
        memory_hits=counters.memory_hits,
        bundled_hits=counters.bundled_hits,
        disk_hits=counters.disk_hits,
        network_fetches=counters.network_fetches,
        errors=counters.errors,
        total_requests=total,
        hit_rate=hits / total if total > 0 else 0.0,
    )


def compute_summary(events: Iterable[LoadEvent], uptime: float) -> PerformanceSummary:
    """
    Сводка по событиям истории

    Ошибки не входят в статистику времени и считаются отдельно.
    """
    durations: List[float] = []
    total_errors = 0
    for event in events:
        if event.type is LoadEventType.ERROR:
            total_errors += 1
        else:
            durations.append(event.duration_ms)

    if not durations:
        return PerformanceSummary(total_errors=total_errors, uptime=uptime)

    durations.sort()
    return PerformanceSummary(
        avg_load_time=mean(durations),
        min_load_time=durations[0],
        max_load_time=durations[-1],
        p50_load_time=percentile(durations, 50),
        p90_load_time=percentile(durations, 90),
        p99_load_time=percentile(durations, 99),
        total_loads=len(durations),
        total_errors=total_errors,
        uptime=uptime,
    )


def compute_load_times_by_type(events: Iterable[LoadEvent]) -> LoadTimesByType:
    by_type = {
        LoadEventType.MEMORY_HIT: [],
        LoadEventType.BUNDLED_HIT: [],
        LoadEventType.DISK_HIT: [],
        LoadEventType.NETWORK_FETCH: [],
    }
    for event in events:
        bucket = by_type.get(event.type)
        if bucket is not None:
            bucket.append(event.duration_ms)

    return LoadTimesByType(
        memory=mean(by_type[LoadEventType.MEMORY_HIT]),
        bundled=mean(by_type[LoadEventType.BUNDLED_HIT]),
        disk=mean(by_type[LoadEventType.DISK_HIT]),
        network=mean(by_type[LoadEventType.NETWORK_FETCH]),
    )


def rank_slowest_icons(aggregates: PerIconAggregate,
                       limit: int = DEFAULT_RANKING_LIMIT) -> List[IconTiming]:
    """Иконки по среднему времени загрузки, медленные первыми; при равенстве порядок первого появления"""
    timings = [
        IconTiming(icon_name=name, avg_duration=agg.avg_duration, count=agg.count)
        for name, agg in aggregates.items()
    ]
    timings.sort(key=lambda t: t.avg_duration, reverse=True)
    return timings[:limit]


def rank_most_used_icons(aggregates: PerIconAggregate,
                         limit: int = DEFAULT_RANKING_LIMIT) -> List[IconUsage]:
    """Иконки по числу загрузок, частые первыми; при равенстве порядок первого появления"""
    usage = [IconUsage(icon_name=name, count=agg.count) for name, agg in aggregates.items()]
    usage.sort(key=lambda u: u.count, reverse=True)
    return usage[:limit]


def compute_icon_stats(icon_name: str, aggregate: Optional[IconAggregate]) -> Optional[IconStats]:
    if aggregate is None or aggregate.count == 0:
        return None
    recent = list(aggregate.recent_durations)
    ordered = sorted(recent)
    return IconStats(
        icon_name=icon_name,
        count=aggregate.count,
        avg_duration=aggregate.avg_duration,
        min_duration=aggregate.min_duration,
        max_duration=aggregate.max_duration,
        p50_duration=percentile(ordered, 50),
        p90_duration=percentile(ordered, 90),
        recent_durations=recent,
    )
