"""Tests for MapperSettings environment loading."""

from objmapper.config import MapperSettings
from objmapper.core.types import DEFAULT_CONFIG


def test_defaults(monkeypatch):
    for name in ("DEFAULT_CONFIG_NAME", "MAX_DEPTH", "STRICT_TYPES", "FREEZE_CONFIGURATION"):
        monkeypatch.delenv(f"OBJMAPPER_{name}", raising=False)

    settings = MapperSettings()

    assert settings.default_config_name == DEFAULT_CONFIG
    assert settings.max_depth is None
    assert settings.strict_types is True
    assert settings.freeze_configuration is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("OBJMAPPER_DEFAULT_CONFIG_NAME", "Api")
    monkeypatch.setenv("OBJMAPPER_MAX_DEPTH", "8")
    monkeypatch.setenv("OBJMAPPER_STRICT_TYPES", "false")
    monkeypatch.setenv("OBJMAPPER_FREEZE_CONFIGURATION", "true")

    settings = MapperSettings()

    assert settings.default_config_name == "Api"
    assert settings.max_depth == 8
    assert settings.strict_types is False
    assert settings.freeze_configuration is True


def test_explicit_values_win_over_environment(monkeypatch):
    monkeypatch.setenv("OBJMAPPER_MAX_DEPTH", "8")

    assert MapperSettings(max_depth=None).max_depth is None
