"""
Текстовое представление отчёта о производительности
"""

from typing import List, Optional

from .types import PerformanceReport

REPORT_TITLE = "iconify Performance Report"
MIN_BOX_WIDTH = 53  # inner width, between the vertical borders
SLOWEST_ICONS_SHOWN = 5


def _ms(value: float) -> str:
    return f"{value:.2f}ms"


def format_report(report: PerformanceReport) -> str:
    """
    Отформатировать отчёт рамкой и списком самых медленных иконок

    Ширина рамки не меньше ``MIN_BOX_WIDTH`` и растёт под самую длинную
    строку, текст не обрезается.
    """
    summary = report.summary
    cache = report.cache_stats
    by_type = report.load_times_by_type

    # None marks a separator between sections
    rows: List[Optional[str]] = [
        REPORT_TITLE,
        None,
        f"Total Loads: {summary.total_loads:<10} │ Errors: {summary.total_errors}",
        f"Cache Hit Rate: {cache.hit_rate * 100:.1f}%",
        None,
        "Load Times",
        f"  Average: {_ms(summary.avg_load_time)}",
        f"  Min: {_ms(summary.min_load_time)} │ Max: {_ms(summary.max_load_time)}",
        f"  P50: {_ms(summary.p50_load_time)} │ P90: {_ms(summary.p90_load_time)}"
        f" │ P99: {_ms(summary.p99_load_time)}",
        None,
        "By Source",
        f"  Memory: {_ms(by_type.memory)} ({cache.memory_hits} hits)",
        f"  Bundled: {_ms(by_type.bundled)} ({cache.bundled_hits} hits)",
        f"  Disk: {_ms(by_type.disk)} ({cache.disk_hits} hits)",
        f"  Network: {_ms(by_type.network)} ({cache.network_fetches} fetches)",
    ]

    width = max([MIN_BOX_WIDTH] + [len(row) + 2 for row in rows if row is not None])
    lines: List[str] = ["┌" + "─" * width + "┐"]
    for row in rows:
        if row is None:
            lines.append("├" + "─" * width + "┤")
        else:
            lines.append("│" + f" {row}".ljust(width) + "│")
    lines.append("└" + "─" * width + "┘")

    if report.slowest_icons:
        lines.append("")
        lines.append("Slowest Icons:")
        for i, icon in enumerate(report.slowest_icons[:SLOWEST_ICONS_SHOWN], start=1):
            lines.append(f"   {i}. {icon.icon_name} ({icon.avg_duration:.2f}ms avg, {icon.count}x)")

    return "\n".join(lines)
