"""
iconify-perf: телеметрия и статистика загрузки иконок

Example:
    from iconify_perf import enable_performance_monitoring, get_performance_monitor

    enable_performance_monitoring()
    monitor = get_performance_monitor()
    monitor.record_event("mdi:home", "memory_hit", 0.4)
    print(f"Cache hit rate: {monitor.get_cache_stats().hit_rate * 100:.1f}%")
"""

from .config import (
    ConfigManager,
    PerformanceConfig,
    configure,
    get_config_manager,
    init_config,
    load_config,
    reset_configuration,
)
from .errors import ConfigurationError, IconifyPerfError, InvalidLoadEventError
from .monitoring import (
    CacheStatistics,
    IconStats,
    IconTiming,
    IconUsage,
    LoadEvent,
    LoadEventType,
    LoadTimer,
    LoadTimesByType,
    PerformanceMonitor,
    PerformanceReport,
    PerformanceSummary,
    QueueListener,
    disable_performance_monitoring,
    enable_performance_monitoring,
    get_performance_monitor,
    get_performance_report,
    print_performance_report,
    track_icon_load,
)

__version__ = "0.1.0"
