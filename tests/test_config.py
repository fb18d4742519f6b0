"""Tests for settings loading."""

import pytest

from complexity_insight.config import AnalysisSettings, load_settings
from complexity_insight.exceptions import ConfigurationError, InvalidConfigError


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run from an empty directory with no COMPLEXITY_* variables."""
    monkeypatch.chdir(tmp_path)
    for name in ("LOGICALOR", "SWITCHCASE", "FORIN", "TRYCATCH", "NEWMI"):
        monkeypatch.delenv(f"COMPLEXITY_{name}", raising=False)
    return tmp_path


class TestAnalysisSettings:
    """Tests for the settings dataclass."""

    def test_defaults(self):
        settings = AnalysisSettings()
        assert settings.logicalor is True
        assert settings.switchcase is True
        assert settings.forin is False
        assert settings.trycatch is False
        assert settings.newmi is False

    def test_non_boolean_rejected(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            AnalysisSettings(newmi="yes")
        assert exc_info.value.key == "newmi"

    def test_from_mapping_rejects_unknown(self):
        with pytest.raises(InvalidConfigError):
            AnalysisSettings.from_mapping({"cyclomatic": True})

    def test_frozen(self):
        with pytest.raises(AttributeError):
            AnalysisSettings().newmi = True  # type: ignore[misc]


class TestLoadSettings:
    """Tests for merged configuration sources."""

    def test_defaults_without_sources(self):
        assert load_settings() == AnalysisSettings()

    def test_project_config(self, isolated_config):
        (isolated_config / "complexity-insight.toml").write_text("[settings]\nnewmi = true\n")
        assert load_settings().newmi is True

    def test_explicit_file_overrides_project(self, isolated_config):
        (isolated_config / "complexity-insight.toml").write_text("forin = true\nnewmi = true\n")
        explicit = isolated_config / "custom.toml"
        explicit.write_text("newmi = false\n")
        settings = load_settings(config_file=explicit)
        assert settings.forin is True
        assert settings.newmi is False

    def test_missing_explicit_file(self, isolated_config):
        with pytest.raises(ConfigurationError):
            load_settings(config_file=isolated_config / "missing.toml")

    def test_invalid_toml(self, isolated_config):
        broken = isolated_config / "broken.toml"
        broken.write_text("newmi = = true\n")
        with pytest.raises(ConfigurationError):
            load_settings(config_file=broken)

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("COMPLEXITY_TRYCATCH", "yes")
        monkeypatch.setenv("COMPLEXITY_LOGICALOR", "0")
        settings = load_settings()
        assert settings.trycatch is True
        assert settings.logicalor is False

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("COMPLEXITY_NEWMI", "maybe")
        with pytest.raises(InvalidConfigError):
            load_settings()

    def test_overrides_win_and_none_is_ignored(self, monkeypatch):
        monkeypatch.setenv("COMPLEXITY_NEWMI", "true")
        assert load_settings(newmi=False).newmi is False
        assert load_settings(newmi=None).newmi is True

    def test_unknown_key_in_file(self, isolated_config):
        (isolated_config / "complexity-insight.toml").write_text("bogus = true\n")
        with pytest.raises(InvalidConfigError):
            load_settings()
