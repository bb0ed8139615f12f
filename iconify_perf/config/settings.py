"""
Конфигурация мониторинга производительности иконок
Настройки, которые читают все компоненты мониторинга
"""

import os
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import ConfigurationError

DEFAULT_CONFIG_PATH = "config/performance_config.yaml"

_ENV_OVERRIDES = {
    "ICONIFY_PERF_ENABLED": "enabled",
    "ICONIFY_PERF_MAX_HISTORY_SIZE": "max_history_size",
    "ICONIFY_PERF_MAX_ICON_SAMPLES": "max_icon_samples",
    "ICONIFY_PERF_STRICT_VALIDATION": "strict_validation",
}


class PerformanceConfig(BaseModel):
    """Настройки мониторинга производительности"""
    model_config = ConfigDict(frozen=True, extra="forbid")

    enabled: bool = Field(default=False, description="Record load events")
    max_history_size: int = Field(default=1000, gt=0, description="Max events kept in history")
    max_icon_samples: int = Field(default=100, gt=0, description="Recent durations kept per icon")
    strict_validation: bool = Field(default=False, description="Raise on malformed events instead of dropping")


ConfigListener = Callable[[PerformanceConfig], None]


def _notify(listeners: List[ConfigListener], config: PerformanceConfig) -> None:
    for listener in listeners:
        try:
            listener(config)
        except Exception as e:
            logger.debug(f"Config listener {listener!r} failed: {e}")


class ConfigManager:
    """
    Хранилище настроек мониторинга

    При каждом изменении настройки заменяются целиком, поэтому читатели
    всегда видят согласованный снимок ``PerformanceConfig``. Исключение
    слушателя изменений логируется и не прерывает остальных.
    """

    def __init__(self, config: Optional[PerformanceConfig] = None):
        self._config = config or PerformanceConfig()
        self._listeners: List[ConfigListener] = []
        self._lock = threading.RLock()

    def get_config(self) -> PerformanceConfig:
        return self._config

    def set_config(self, **changes: Any) -> PerformanceConfig:
        """Объединить ``changes`` с текущими настройками и проверить результат"""
        with self._lock:
            merged = {**self._config.model_dump(), **changes}
            try:
                new_config = PerformanceConfig(**merged)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid performance config: {e}") from e
            self._config = new_config
            listeners = list(self._listeners)

        _notify(listeners, new_config)
        return new_config

    def reset_config(self) -> PerformanceConfig:
        with self._lock:
            new_config = PerformanceConfig()
            self._config = new_config
            listeners = list(self._listeners)

        _notify(listeners, new_config)
        return new_config

    def on_config_change(self, listener: ConfigListener) -> Callable[[], None]:
        """Подписаться на изменения настроек. Возвращает функцию отписки"""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def is_enabled(self) -> bool:
        return self._config.enabled

    def set_enabled(self, enabled: bool) -> None:
        self.set_config(enabled=bool(enabled))

    def get_max_history_size(self) -> int:
        return self._config.max_history_size

    def get_max_icon_samples(self) -> int:
        return self._config.max_icon_samples

    def is_strict(self) -> bool:
        return self._config.strict_validation


def _read_yaml_section(path: Union[str, Path]) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(f"Config file {path} not found, using default performance settings")
        return {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Cannot parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a mapping at top level")
    section = data.get("performance", {}) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"{path}: 'performance' must be a mapping")
    return section


def _read_env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for env_name, field_name in _ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw is None or raw == "":
            continue
        # pydantic coerces "true"/"1"/"500" into the field type
        overrides[field_name] = raw
    return overrides


def load_config(path: Optional[Union[str, Path]] = None) -> PerformanceConfig:
    """
    Загрузка настроек из YAML и переменных окружения

    Args:
        path: YAML-файл с секцией ``performance:``, по умолчанию
            ``config/performance_config.yaml``; отсутствие файла не ошибка

    Returns:
        PerformanceConfig: проверенные настройки, переменные окружения приоритетнее
    """
    values = _read_yaml_section(path or DEFAULT_CONFIG_PATH)
    values.update(_read_env_overrides())
    try:
        config = PerformanceConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid performance config: {e}") from e
    logger.info(f"Performance config loaded: enabled={config.enabled}, "
                f"max_history_size={config.max_history_size}")
    return config


# Глобальный экземпляр менеджера настроек
_config_manager: Optional[ConfigManager] = None
_config_manager_lock = threading.Lock()


def get_config_manager() -> ConfigManager:
    """
    Получить глобальный менеджер настроек

    При первом обращении настройки читаются из ``config/performance_config.yaml``
    и переменных окружения ``ICONIFY_PERF_*``. Некорректные настройки
    логируются, менеджер создаётся со значениями по умолчанию.
    """
    global _config_manager
    with _config_manager_lock:
        if _config_manager is None:
            try:
                initial = load_config()
            except ConfigurationError as e:
                logger.warning(f"{e}; using default performance settings")
                initial = PerformanceConfig()
            _config_manager = ConfigManager(initial)
        return _config_manager


def init_config(path: Optional[Union[str, Path]] = None) -> PerformanceConfig:
    """
    Загрузить настройки из файла и окружения в глобальный менеджер

    Args:
        path: YAML-файл с секцией ``performance:``

    Returns:
        PerformanceConfig: установленные настройки
    """
    config = load_config(path)
    return get_config_manager().set_config(**config.model_dump())


def configure(**changes: Any) -> PerformanceConfig:
    """Изменить глобальные настройки мониторинга"""
    return get_config_manager().set_config(**changes)


def reset_configuration() -> PerformanceConfig:
    """Сбросить глобальные настройки мониторинга к значениям по умолчанию"""
    return get_config_manager().reset_config()
