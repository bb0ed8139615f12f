"""
Tests for performance settings
"""

import pytest

from iconify_perf.config import settings
from iconify_perf.config.settings import ConfigManager, PerformanceConfig, init_config, load_config
from iconify_perf.errors import ConfigurationError
from iconify_perf.monitoring import performance_monitor as pm


class TestConfigManager:

    def test_defaults(self):
        config = ConfigManager()
        assert config.is_enabled() is False
        assert config.get_max_history_size() == 1000
        assert config.get_max_icon_samples() == 100
        assert config.is_strict() is False

    def test_set_config_merges(self):
        config = ConfigManager()
        config.set_config(max_history_size=50)
        config.set_config(enabled=True)

        current = config.get_config()
        assert current.max_history_size == 50
        assert current.enabled is True

    @pytest.mark.parametrize("changes", [
        {"max_history_size": 0},
        {"max_history_size": -5},
        {"max_icon_samples": 0},
        {"unknown_option": True},
    ])
    def test_invalid_values_rejected(self, changes):
        config = ConfigManager()
        with pytest.raises(ConfigurationError):
            config.set_config(**changes)
        assert config.get_config() == PerformanceConfig()

    def test_reset(self):
        config = ConfigManager()
        config.set_config(enabled=True, max_history_size=3)
        config.reset_config()
        assert config.get_config() == PerformanceConfig()

    def test_change_listeners(self):
        config = ConfigManager()
        seen = []
        unsubscribe = config.on_config_change(seen.append)

        config.set_enabled(True)
        unsubscribe()
        config.set_enabled(False)

        assert len(seen) == 1
        assert seen[0].enabled is True

    def test_failing_listener_does_not_break_update(self):
        config = ConfigManager()
        seen = []

        def broken(new_config):
            raise RuntimeError("listener bug")

        config.on_config_change(broken)
        config.on_config_change(seen.append)

        assert config.set_config(max_history_size=5).max_history_size == 5
        assert config.reset_config() == PerformanceConfig()
        assert [c.max_history_size for c in seen] == [5, 1000]


class TestLoadConfig:

    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch):
        for name in ("ICONIFY_PERF_ENABLED", "ICONIFY_PERF_MAX_HISTORY_SIZE",
                     "ICONIFY_PERF_MAX_ICON_SAMPLES", "ICONIFY_PERF_STRICT_VALIDATION"):
            monkeypatch.delenv(name, raising=False)

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_config(tmp_path / "absent.yaml") == PerformanceConfig()

    def test_reads_performance_section(self, tmp_path):
        path = tmp_path / "performance_config.yaml"
        path.write_text("performance:\n  enabled: true\n  max_history_size: 250\n", encoding="utf-8")

        config = load_config(path)
        assert config.enabled is True
        assert config.max_history_size == 250

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "performance_config.yaml"
        path.write_text("performance:\n  max_history_size: 250\n", encoding="utf-8")
        monkeypatch.setenv("ICONIFY_PERF_MAX_HISTORY_SIZE", "40")
        monkeypatch.setenv("ICONIFY_PERF_STRICT_VALIDATION", "true")

        config = load_config(path)
        assert config.max_history_size == 40
        assert config.strict_validation is True

    def test_invalid_file_value(self, tmp_path):
        path = tmp_path / "performance_config.yaml"
        path.write_text("performance:\n  max_history_size: 0\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "performance_config.yaml"
        path.write_text("performance: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_loaded_config_drives_manager(self, tmp_path):
        path = tmp_path / "performance_config.yaml"
        path.write_text("performance:\n  max_history_size: 7\n", encoding="utf-8")

        manager = ConfigManager(load_config(path))
        assert manager.get_max_history_size() == 7


class TestGlobalConfig:

    @pytest.fixture(autouse=True)
    def _fresh_globals(self, monkeypatch, tmp_path):
        for name in ("ICONIFY_PERF_ENABLED", "ICONIFY_PERF_MAX_HISTORY_SIZE",
                     "ICONIFY_PERF_MAX_ICON_SAMPLES", "ICONIFY_PERF_STRICT_VALIDATION"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr(settings, "_config_manager", None)
        monkeypatch.setattr(pm, "_performance_monitor", None)
        monkeypatch.chdir(tmp_path)

    def test_env_enables_global_monitor(self, monkeypatch):
        monkeypatch.setenv("ICONIFY_PERF_ENABLED", "true")

        assert pm.get_performance_monitor().is_enabled() is True

    def test_default_file_read_on_first_use(self, tmp_path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "performance_config.yaml").write_text(
            "performance:\n  max_history_size: 12\n", encoding="utf-8")

        assert settings.get_config_manager().get_max_history_size() == 12

    def test_invalid_settings_fall_back_to_defaults(self, monkeypatch):
        monkeypatch.setenv("ICONIFY_PERF_MAX_HISTORY_SIZE", "0")

        assert settings.get_config_manager().get_config() == PerformanceConfig()

    def test_init_config_updates_running_monitor(self, tmp_path):
        monitor = pm.get_performance_monitor()
        assert monitor.is_enabled() is False

        path = tmp_path / "custom.yaml"
        path.write_text("performance:\n  enabled: true\n  max_history_size: 3\n", encoding="utf-8")
        installed = init_config(path)

        assert installed.max_history_size == 3
        assert monitor.is_enabled() is True
        for i in range(5):
            monitor.record_event(f"icon{i}", "memory_hit", 1)
        assert [e.icon_name for e in monitor.get_events()] == ["icon2", "icon3", "icon4"]
