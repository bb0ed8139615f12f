from .settings import (
    ConfigManager,
    PerformanceConfig,
    configure,
    get_config_manager,
    init_config,
    load_config,
    reset_configuration,
)

__all__ = [
    "ConfigManager",
    "PerformanceConfig",
    "configure",
    "get_config_manager",
    "init_config",
    "load_config",
    "reset_configuration",
]
