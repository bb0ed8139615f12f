"""
Утилиты валидации событий загрузки иконок
"""

import math
from typing import Any, Optional, Union

from loguru import logger

from ..errors import InvalidLoadEventError
from ..monitoring.types import LoadEventType


def validate_icon_name(icon_name: Any, strict: bool = False) -> Optional[str]:
    """
    Валидация имени иконки

    Args:
        icon_name: Идентификатор иконки, обычно ``"<prefix>:<name>"``
        strict: Выбрасывать исключение вместо возврата None

    Returns:
        Optional[str]: имя или None, если событие нужно отбросить
    """
    if isinstance(icon_name, str) and icon_name.strip():
        return icon_name

    if strict:
        raise InvalidLoadEventError("icon_name", icon_name, "must be a non-empty string")
    logger.warning(f"Dropping load event with invalid icon name: {icon_name!r}")
    return None


def validate_event_type(event_type: Union[LoadEventType, str, Any],
                        strict: bool = False) -> Optional[LoadEventType]:
    """
    Приведение типа события к LoadEventType

    Принимает элемент перечисления или его строковое значение.
    """
    if isinstance(event_type, LoadEventType):
        return event_type
    try:
        return LoadEventType(event_type)
    except ValueError:
        if strict:
            raise InvalidLoadEventError("type", event_type, "unknown load event type")
        logger.warning(f"Dropping load event with unknown type: {event_type!r}")
        return None


def validate_duration(duration_ms: Any, strict: bool = False) -> float:
    """
    Валидация и нормализация длительности загрузки

    Args:
        duration_ms: Время загрузки в миллисекундах
        strict: Выбрасывать исключение вместо обнуления

    Returns:
        float: конечная неотрицательная длительность
    """
    try:
        if isinstance(duration_ms, bool):
            raise TypeError("bool is not a duration")
        value = float(duration_ms)
    except (TypeError, ValueError) as e:
        if strict:
            raise InvalidLoadEventError("duration_ms", duration_ms, "not a number") from e
        logger.warning(f"Invalid duration {duration_ms!r}: {e}, using 0.0")
        return 0.0

    if math.isfinite(value) and value >= 0.0:
        return value

    if strict:
        raise InvalidLoadEventError("duration_ms", duration_ms, "must be finite and non-negative")
    logger.warning(f"Duration out of range: {duration_ms!r}, clamping to 0.0")
    return 0.0


def validate_error_message(event_type: LoadEventType, error_message: Any) -> Optional[str]:
    """Сообщение сохраняется только для событий ошибки"""
    if event_type is not LoadEventType.ERROR or error_message is None:
        return None
    return str(error_message)
