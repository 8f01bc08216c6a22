"""Tests for configuration loading."""

from __future__ import annotations

import pytest

from hookchain.core.config import (
    find_config_file,
    load_engine_config,
    load_env_config,
    load_observability_config,
)
from hookchain.errors import ConfigLoadError
from hookchain.types.config import EngineConfig


def _write_toml(root, body: str):
    path = root / ".hookchain" / "config.toml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body)
    return path


@pytest.fixture(autouse=True)
def _chdir(tmp_path, monkeypatch):
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


class TestEngineConfig:
    def test_defaults(self):
        assert load_engine_config() == EngineConfig()

    def test_toml_section(self, project):
        _write_toml(project, """
[engine]
default_timeout = 12
retry_backoff = 0.5
kill_on_timeout = false
shell = "/bin/bash"
""")
        config = load_engine_config(str(project))
        assert config.default_timeout == 12
        assert config.retry_backoff == 0.5
        assert config.kill_on_timeout is False
        assert config.shell == "/bin/bash"
        assert config.settings_dir == ".claude"

    def test_unknown_keys_ignored(self, project):
        _write_toml(project, "[engine]\nfrobnicate = 1\n")
        assert load_engine_config(str(project)) == EngineConfig()

    def test_env_overrides_toml(self, project, monkeypatch):
        _write_toml(project, "[engine]\ndefault_timeout = 12\n")
        monkeypatch.setenv("HOOKCHAIN_DEFAULT_TIMEOUT", "3.5")
        monkeypatch.setenv("HOOKCHAIN_KILL_ON_TIMEOUT", "no")
        monkeypatch.setenv("HOOKCHAIN_LOG_LEVEL", "debug")
        config = load_engine_config(str(project))
        assert config.default_timeout == 3.5
        assert config.kill_on_timeout is False
        assert config.log_level == "DEBUG"

    def test_invalid_env_value(self, monkeypatch):
        monkeypatch.setenv("HOOKCHAIN_RETRY_BACKOFF", "soon")
        with pytest.raises(ConfigLoadError, match="HOOKCHAIN_RETRY_BACKOFF"):
            load_env_config()

    def test_invalid_bool(self, monkeypatch):
        monkeypatch.setenv("HOOKCHAIN_KILL_ON_TIMEOUT", "maybe")
        with pytest.raises(ConfigLoadError):
            load_engine_config()

    def test_empty_env_value_ignored(self, monkeypatch):
        monkeypatch.setenv("HOOKCHAIN_SHELL", "")
        assert load_env_config() == {}

    @pytest.mark.parametrize("body", [
        "[engine]\ndefault_timeout = 0\n",
        "[engine]\nretry_backoff = -1\n",
    ])
    def test_range_checks(self, project, body):
        _write_toml(project, body)
        with pytest.raises(ConfigLoadError):
            load_engine_config(str(project))

    def test_broken_toml_is_ignored(self, project, caplog):
        _write_toml(project, "[engine\n")
        with caplog.at_level("WARNING", logger="hookchain.core.config"):
            config = load_engine_config(str(project))
        assert config == EngineConfig()
        assert "Ignoring unreadable config" in caplog.text

    @pytest.mark.parametrize("body, message", [
        ('[engine]\ndefault_timeout = "5"\n', "default_timeout must be a number"),
        ("[engine]\nretry_backoff = true\n", "retry_backoff must be a number"),
        ('[engine]\nkill_on_timeout = "no"\n', "kill_on_timeout must be a boolean"),
        ("[engine]\nshell = 1\n", "shell must be a string"),
        ('[engine]\nlog_level = "chatty"\n', "Unknown log level"),
    ])
    def test_wrong_toml_types(self, project, body, message):
        _write_toml(project, body)
        with pytest.raises(ConfigLoadError, match=message):
            load_engine_config(str(project))

    def test_toml_log_level_normalised(self, project):
        _write_toml(project, '[engine]\nlog_level = "info"\n')
        assert load_engine_config(str(project)).log_level == "INFO"


class TestFindConfigFile:
    def test_project_first(self, project, _chdir):
        cwd_file = _write_toml(_chdir, "")
        project_file = _write_toml(project, "")
        assert find_config_file(str(project)) == project_file
        assert find_config_file() == cwd_file

    def test_home_fallback(self, tmp_path):
        home_file = _write_toml(tmp_path / "home", "")
        assert find_config_file() == home_file

    def test_none(self):
        assert find_config_file() is None


class TestObservabilityConfig:
    def test_section(self, project):
        _write_toml(project, """
[observability]
enabled = true
exporter = "otlp"
otlp_endpoint = "http://collector:4317"
extra = "ignored"
""")
        config = load_observability_config(str(project))
        assert config.enabled is True
        assert config.exporter == "otlp"
        assert config.otlp_endpoint == "http://collector:4317"
        assert config.service_name == "hookchain"

    def test_missing_section(self):
        assert load_observability_config().enabled is False

    def test_env_overrides(self, project, monkeypatch):
        _write_toml(project, '[observability]\nenabled = false\nexporter = "console"\n')
        monkeypatch.setenv("HOOKCHAIN_OTEL_ENABLED", "true")
        monkeypatch.setenv("HOOKCHAIN_OTEL_EXPORTER", "otlp")
        monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://otel:4317")
        config = load_observability_config(str(project))
        assert (config.enabled, config.exporter, config.otlp_endpoint) == (
            True, "otlp", "http://otel:4317",
        )

    @pytest.mark.parametrize("body", [
        '[observability]\nenabled = "yes"\n',
        '[observability]\nexporter = "zipkin"\n',
    ])
    def test_invalid_section(self, project, body):
        _write_toml(project, body)
        with pytest.raises(ConfigLoadError):
            load_observability_config(str(project))
