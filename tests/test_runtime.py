from __future__ import annotations

import pytest

from prose_engine.runtime import EngineConfig, LogSettings, config, telemetry


def test_config_defaults() -> None:
    config = EngineConfig()

    assert config.history_limit == 100
    assert config.batch_window == pytest.approx(0.5)
    assert config.debug_invariants is False


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROSE_ENGINE_HISTORY_LIMIT", "5")
    monkeypatch.setenv("PROSE_ENGINE_BATCH_WINDOW_MS", "not-a-number")
    monkeypatch.setenv("PROSE_ENGINE_DEBUG", "yes")

    config = EngineConfig.from_env()

    assert config.history_limit == 5
    assert config.batch_window_ms == 500
    assert config.debug_invariants is True


def test_config_from_env_ignores_non_positive_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROSE_ENGINE_HISTORY_LIMIT", "0")
    monkeypatch.delenv("PROSE_ENGINE_DEBUG", raising=False)

    config = EngineConfig.from_env()

    assert config.history_limit == 100
    assert config.debug_invariants is False


def test_config_rejects_invalid_values() -> None:
    with pytest.raises(ValueError):
        EngineConfig(history_limit=0)
    with pytest.raises(ValueError):
        EngineConfig(batch_window_ms=-1)


def test_env_helpers_use_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROSE_ENGINE_NO_COLOR", "off")
    monkeypatch.setenv("PROSE_ENGINE_LOG_JSON", "TRUE")
    monkeypatch.delenv("PROSE_ENGINE_UNSET_FLAG_FOR_TEST", raising=False)

    assert config.env("NO_COLOR") == "off"
    assert config.env_flag("NO_COLOR", True) is False
    assert config.env_flag("LOG_JSON", False) is True
    assert config.env_flag("UNSET_FLAG_FOR_TEST", True) is True


def test_log_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROSE_ENGINE_LOG_LEVEL", "debug")
    monkeypatch.setenv("PROSE_ENGINE_DISABLE_CONSOLE", "1")
    monkeypatch.setenv("PROSE_ENGINE_LOG_BUFFERED", "yes")
    monkeypatch.setenv("PROSE_ENGINE_LOG_BUFFER_SIZE", "64")
    monkeypatch.setenv("PROSE_ENGINE_LOG_FILE", "engine.log")
    monkeypatch.delenv("PROSE_ENGINE_LOG_JSON", raising=False)

    settings = LogSettings.from_env()

    assert settings == LogSettings(
        level="DEBUG",
        console=False,
        colored=True,
        json_format=False,
        log_file="engine.log",
        buffered=True,
        buffer_size=64,
    )


def test_log_settings_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("LOG_LEVEL", "DISABLE_CONSOLE", "LOG_BUFFERED", "LOG_FILE", "LOG_JSON", "NO_COLOR"):
        monkeypatch.delenv(f"PROSE_ENGINE_{name}", raising=False)

    assert LogSettings.from_env() == LogSettings()


@pytest.mark.parametrize(
    ("name", "level", "console", "log_file"),
    [
        ("development", "DEBUG", True, None),
        ("Production", "INFO", False, "prose_engine.log"),
        ("performance", "DEBUG", False, "prose_engine-performance.log"),
    ],
)
def test_log_presets(
    monkeypatch: pytest.MonkeyPatch,
    name: str,
    level: str,
    console: bool,
    log_file: str | None,
) -> None:
    monkeypatch.delenv("PROSE_ENGINE_LOG_FILE", raising=False)

    settings = LogSettings.preset(name)

    assert (settings.level, settings.console, settings.log_file) == (level, console, log_file)


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(ValueError):
        LogSettings.preset("verbose")
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_configure_rejects_conflicting_arguments() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")
    with pytest.raises(ValueError):
        telemetry.configure(settings=LogSettings(), preset="development")
