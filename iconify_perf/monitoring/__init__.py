"""
Мониторинг производительности загрузки иконок
"""

from .types import (
    CacheStatistics,
    IconStats,
    IconTiming,
    IconUsage,
    LoadEvent,
    LoadEventListener,
    LoadEventType,
    LoadTimesByType,
    PerformanceReport,
    PerformanceSummary,
)
from .subscriptions import QueueListener, SubscriptionHub
from .report_formatter import format_report
from .performance_monitor import (
    LoadTimer,
    PerformanceMonitor,
    disable_performance_monitoring,
    enable_performance_monitoring,
    get_performance_monitor,
    get_performance_report,
    print_performance_report,
    track_icon_load,
)

__all__ = [
    "CacheStatistics",
    "IconStats",
    "IconTiming",
    "IconUsage",
    "LoadEvent",
    "LoadEventListener",
    "LoadEventType",
    "LoadTimesByType",
    "LoadTimer",
    "PerformanceMonitor",
    "PerformanceReport",
    "PerformanceSummary",
    "QueueListener",
    "SubscriptionHub",
    "disable_performance_monitoring",
    "enable_performance_monitoring",
    "format_report",
    "get_performance_monitor",
    "get_performance_report",
    "print_performance_report",
    "track_icon_load",
]
