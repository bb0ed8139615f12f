"""
Модели данных мониторинга загрузки иконок
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LoadEventType(str, Enum):
    """Источник, из которого была получена иконка"""
    MEMORY_HIT = "memory_hit"
    BUNDLED_HIT = "bundled_hit"
    DISK_HIT = "disk_hit"
    NETWORK_FETCH = "network_fetch"
    ERROR = "error"


CACHE_HIT_TYPES = (LoadEventType.MEMORY_HIT, LoadEventType.BUNDLED_HIT, LoadEventType.DISK_HIT)


class LoadEvent(BaseModel):
    """Одно событие загрузки иконки"""
    model_config = ConfigDict(frozen=True)

    icon_name: str = Field(..., description='Icon name, e.g. "mdi:home"')
    type: LoadEventType = Field(..., description="Where the icon came from")
    duration_ms: float = Field(..., description="Load time in milliseconds")
    timestamp: float = Field(..., description="Epoch milliseconds")
    error_message: Optional[str] = Field(default=None, description="Set only for error events")


class CacheStatistics(BaseModel):
    """Статистика кэша"""
    memory_hits: int = Field(default=0, description="Memory cache hits")
    bundled_hits: int = Field(default=0, description="Bundled icon hits")
    disk_hits: int = Field(default=0, description="Disk cache hits")
    network_fetches: int = Field(default=0, description="Network fetches")
    errors: int = Field(default=0, description="Failed loads")
    total_requests: int = Field(default=0, description="All recorded loads")
    hit_rate: float = Field(default=0.0, description="Cache hit rate (0-1)", ge=0.0, le=1.0)


class PerformanceSummary(BaseModel):
    """Сводка времени загрузки"""
    avg_load_time: float = 0.0
    min_load_time: float = 0.0
    max_load_time: float = 0.0
    p50_load_time: float = 0.0
    p90_load_time: float = 0.0
    p99_load_time: float = 0.0
    total_loads: int = 0
    total_errors: int = 0
    uptime: float = Field(default=0.0, description="Milliseconds since monitoring started")


class LoadTimesByType(BaseModel):
    """Среднее время загрузки по источникам, 0 если событий источника нет"""
    memory: float = 0.0
    bundled: float = 0.0
    disk: float = 0.0
    network: float = 0.0


class IconTiming(BaseModel):
    icon_name: str
    avg_duration: float
    count: int


class IconUsage(BaseModel):
    icon_name: str
    count: int


class IconStats(BaseModel):
    """Детальная статистика по одной иконке"""
    icon_name: str = Field(..., description="Icon name")
    count: int = Field(..., description="Lifetime load count")
    avg_duration: float = Field(..., description="Lifetime average duration")
    min_duration: float = Field(..., description="Lifetime minimum duration")
    max_duration: float = Field(..., description="Lifetime maximum duration")
    p50_duration: float = Field(..., description="Median over retained recent samples")
    p90_duration: float = Field(..., description="P90 over retained recent samples")
    recent_durations: List[float] = Field(default_factory=list, description="Retained recent samples")


class PerformanceReport(BaseModel):
    """Полный отчёт о производительности"""
    summary: PerformanceSummary
    cache_stats: CacheStatistics
    load_times_by_type: LoadTimesByType
    slowest_icons: List[IconTiming] = Field(default_factory=list)
    most_used_icons: List[IconUsage] = Field(default_factory=list)
    recent_events: List[LoadEvent] = Field(default_factory=list)
    generated_at: float = Field(..., description="Epoch milliseconds")

    def to_dict(self) -> Dict[str, Any]:
        """Представление, готовое для JSON"""
        return self.model_dump(mode="json")


LoadEventListener = Callable[[LoadEvent], None]
