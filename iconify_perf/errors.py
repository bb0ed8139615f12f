"""
Исключения iconify-perf
"""


class IconifyPerfError(Exception):
    """Базовое исключение мониторинга загрузки иконок"""


class ConfigurationError(IconifyPerfError):
    """Некорректное значение настроек мониторинга"""


class InvalidLoadEventError(IconifyPerfError, ValueError):
    """Событие загрузки отклонено строгой валидацией"""

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")
