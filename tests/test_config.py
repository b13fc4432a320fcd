"""Tests for settings resolution."""

import json

import pytest

from easify.config import (
    ConfigError,
    UnpackSettings,
    apply_env_overrides,
    configure,
    get_settings,
    load_settings,
    parse_settings,
)


class TestLoadSettings:
    def test_defaults_without_config_file(self, tmp_path):
        settings = load_settings(tmp_path, environ={})

        assert settings == UnpackSettings()
        assert settings.path is None

    def test_toml_section(self, tmp_path):
        (tmp_path / "easify.toml").write_text(
            "[easify]\npattern_cache_size = 8\nreject_duplicate_names = true\nlog_level = \"DEBUG\"\n",
            encoding="utf-8",
        )

        settings = load_settings(tmp_path, environ={})

        assert settings.pattern_cache_size == 8
        assert settings.reject_duplicate_names is True
        assert settings.log_level == "debug"
        assert settings.path.name == "easify.toml"

    def test_json_rc_top_level(self, tmp_path):
        (tmp_path / ".easifyrc").write_text(json.dumps({"pattern_cache_size": 3}), encoding="utf-8")

        settings = load_settings(tmp_path, environ={})

        assert settings.pattern_cache_size == 3
        assert settings.reject_duplicate_names is False

    def test_toml_preferred_over_rc(self, tmp_path):
        (tmp_path / "easify.toml").write_text("pattern_cache_size = 1\n", encoding="utf-8")
        (tmp_path / ".easifyrc").write_text(json.dumps({"pattern_cache_size": 2}), encoding="utf-8")

        assert load_settings(tmp_path, environ={}).pattern_cache_size == 1

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_settings(tmp_path, tmp_path / "nope.toml", environ={})

    def test_invalid_json(self, tmp_path):
        (tmp_path / ".easifyrc").write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            load_settings(tmp_path, environ={})

        assert exc_info.value.code == "E_CONFIG"

    def test_invalid_toml(self, tmp_path):
        (tmp_path / "easify.toml").write_text("[easify\n", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            load_settings(tmp_path, environ={})

        assert "Invalid TOML" in str(exc_info.value)

    def test_env_overrides_file(self, tmp_path):
        (tmp_path / "easify.toml").write_text("pattern_cache_size = 8\n", encoding="utf-8")

        settings = load_settings(tmp_path, environ={"EASIFY_PATTERN_CACHE_SIZE": "2"})

        assert settings.pattern_cache_size == 2


class TestValidation:
    @pytest.mark.parametrize(
        "data",
        [
            {"pattern_cache_size": -1},
            {"pattern_cache_size": "many"},
            {"pattern_cache_size": True},
            {"reject_duplicate_names": "maybe"},
            {"log_level": "loud"},
        ],
    )
    def test_rejects_bad_values(self, data):
        with pytest.raises(ConfigError):
            parse_settings(data)

    def test_bool_strings(self):
        assert parse_settings({"reject_duplicate_names": "yes"}).reject_duplicate_names is True
        assert parse_settings({"reject_duplicate_names": "off"}).reject_duplicate_names is False

    def test_env_override_values(self):
        settings = apply_env_overrides(
            UnpackSettings(),
            {"EASIFY_REJECT_DUPLICATE_NAMES": "1", "EASIFY_LOG_LEVEL": "info"},
        )

        assert settings.reject_duplicate_names is True
        assert settings.log_level == "info"


class TestProcessSettings:
    def test_configure_and_reset(self):
        configure(UnpackSettings(pattern_cache_size=5))
        assert get_settings().pattern_cache_size == 5

        configure(None)
        assert get_settings() == UnpackSettings()

    def test_env_applies_to_lazy_defaults(self, monkeypatch):
        monkeypatch.setenv("EASIFY_PATTERN_CACHE_SIZE", "7")
        configure(None)

        assert get_settings().pattern_cache_size == 7
