"""
Unit tests for core configuration - Imperative style.

Tests configuration loading, validation, and defaults.
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from fontlocate.core.config import FontLocateConfig, GoogleFontsConfig, load_config_from_yaml
from fontlocate.core.exceptions import (
    ConfigFileNotFoundError,
    ConfigLoadError,
    ConfigurationError,
    EmptyConfigFileError,
    InvalidYamlError,
)
from fontlocate.core.models import MatchConfidence


class TestGoogleFontsConfig:
    """Test GoogleFontsConfig validation."""

    def test_defaults(self):
        """Test Google Fonts configuration defaults."""
        config = GoogleFontsConfig()

        assert config.api_key is None
        assert config.api_url == "https://www.googleapis.com/webfonts/v1/webfonts"
        assert config.timeout_seconds == 30.0
        assert config.chunk_size == 64 * 1024

    def test_from_env(self, monkeypatch):
        """Test loading the API key from the environment."""
        monkeypatch.setenv("GOOGLE_FONTS_API_KEY", "env-key")
        monkeypatch.setenv("GOOGLE_FONTS_TIMEOUT_SECONDS", "5")

        config = GoogleFontsConfig()

        assert config.api_key == "env-key"
        assert config.timeout_seconds == 5.0

    def test_api_url_validation(self):
        """Test that the endpoint must be an HTTP URL."""
        with pytest.raises(ValidationError):
            GoogleFontsConfig(api_url="ftp://fonts.example.com")

        config = GoogleFontsConfig(api_url="https://fonts.example.com/list?")
        assert config.api_url == "https://fonts.example.com/list"

    def test_invalid_timeout(self):
        """Test that the timeout must be positive."""
        with pytest.raises(ValidationError):
            GoogleFontsConfig(timeout_seconds=0)

    def test_api_key_is_masked(self):
        """Test that the API key never shows up in safe exports or repr."""
        config = GoogleFontsConfig(api_key="secret-key")

        assert config.to_safe_dict()["api_key"] == "***MASKED***"
        assert "secret-key" not in repr(config)
        assert GoogleFontsConfig().to_safe_dict()["api_key"] is None


class TestFontLocateConfig:
    """Test FontLocateConfig validation."""

    def test_defaults(self):
        """Test main configuration defaults."""
        config = FontLocateConfig()

        assert config.app_key == "fontlocate"
        assert config.fonts_cache_dir is None
        assert config.fontlist_path is None
        assert config.font_dirs == []
        assert config.min_confidence is MatchConfidence.LOW_CONFIDENCE
        assert config.enable_system_fonts is True
        assert config.enable_google_fonts is True
        assert config.resolve_timeout_seconds is None
        assert config.log_level == "INFO"
        assert isinstance(config.google, GoogleFontsConfig)

    def test_from_env(self, monkeypatch):
        """Test loading settings from FONTLOCATE_ variables."""
        monkeypatch.setenv("FONTLOCATE_APP_KEY", "myapp")
        monkeypatch.setenv("FONTLOCATE_ENABLE_GOOGLE_FONTS", "false")
        monkeypatch.setenv("FONTLOCATE_RESOLVE_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("FONTLOCATE_FONT_DIRS", '["/opt/fonts", "/srv/fonts"]')
        monkeypatch.setenv("GOOGLE_FONTS_API_KEY", "env-key")

        config = FontLocateConfig()

        assert config.app_key == "myapp"
        assert config.enable_google_fonts is False
        assert config.resolve_timeout_seconds == 2.5
        assert config.font_dirs == [Path("/opt/fonts"), Path("/srv/fonts")]
        assert config.google.api_key == "env-key"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("low", MatchConfidence.LOW_CONFIDENCE),
            ("HIGH", MatchConfidence.HIGH_CONFIDENCE),
            ("perfect_confidence", MatchConfidence.PERFECT_CONFIDENCE),
            ("2", MatchConfidence.HIGH_CONFIDENCE),
            (3, MatchConfidence.PERFECT_CONFIDENCE),
        ],
    )
    def test_min_confidence_values(self, value, expected):
        """Test confidence names and numbers."""
        assert FontLocateConfig(min_confidence=value).min_confidence is expected

    def test_min_confidence_from_env(self, monkeypatch):
        """Test a confidence name in the environment."""
        monkeypatch.setenv("FONTLOCATE_MIN_CONFIDENCE", "high")
        assert FontLocateConfig().min_confidence is MatchConfidence.HIGH_CONFIDENCE

    def test_invalid_min_confidence(self):
        """Test unknown confidence levels."""
        with pytest.raises(ValidationError):
            FontLocateConfig(min_confidence="certain")
        with pytest.raises(ValidationError):
            FontLocateConfig(min_confidence=7)

    def test_log_level(self):
        """Test log level normalization and validation."""
        assert FontLocateConfig(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValidationError):
            FontLocateConfig(log_level="verbose")

    def test_invalid_timeout(self):
        """Test that the resolution timeout must be positive."""
        with pytest.raises(ValidationError):
            FontLocateConfig(resolve_timeout_seconds=0)

    def test_load_from_env_file(self, temp_dir):
        """Test loading settings from a .env file."""
        env_file = temp_dir / ".env"
        env_file.write_text("FONTLOCATE_APP_KEY=from-file\nFONTLOCATE_MIN_CONFIDENCE=perfect\n")

        config = FontLocateConfig.load_from_env(env_file)

        assert config.app_key == "from-file"
        assert config.min_confidence is MatchConfidence.PERFECT_CONFIDENCE

    def test_load_from_missing_env_file(self, temp_dir):
        """Test that a missing .env file gives defaults."""
        config = FontLocateConfig.load_from_env(temp_dir / "missing.env")
        assert config.app_key == "fontlocate"


class TestConfigLoading:
    """Test loading configuration from YAML files."""

    def test_load_config_from_yaml(self, temp_dir):
        """Test loading the main configuration from YAML."""
        config_data = {
            "app_key": "yaml-app",
            "min_confidence": "perfect",
            "font_dirs": [str(temp_dir)],
            "enable_system_fonts": False,
            "google": {"api_key": "yaml-key", "timeout_seconds": 5},
        }
        config_path = temp_dir / "fontlocate.yaml"
        with config_path.open("w") as f:
            yaml.dump(config_data, f)

        config = FontLocateConfig.from_yaml(config_path)

        assert isinstance(config, FontLocateConfig)
        assert config.app_key == "yaml-app"
        assert config.min_confidence is MatchConfidence.PERFECT_CONFIDENCE
        assert config.font_dirs == [temp_dir]
        assert config.enable_system_fonts is False
        assert config.google.api_key == "yaml-key"
        assert config.google.timeout_seconds == 5.0

    def test_load_config_from_yaml_file_not_found(self):
        """Test loading from a non-existent file."""
        with pytest.raises(ConfigFileNotFoundError):
            load_config_from_yaml("nonexistent.yaml", FontLocateConfig)

    def test_load_config_from_yaml_invalid_yaml(self, temp_dir):
        """Test loading malformed YAML."""
        config_path = temp_dir / "invalid.yaml"
        config_path.write_text("app_key: [unclosed")

        with pytest.raises(InvalidYamlError):
            load_config_from_yaml(config_path, FontLocateConfig)

    def test_load_config_from_yaml_empty_file(self, temp_dir):
        """Test loading an empty file."""
        config_path = temp_dir / "empty.yaml"
        config_path.write_text("")

        with pytest.raises(EmptyConfigFileError):
            load_config_from_yaml(config_path, FontLocateConfig)

    def test_load_config_from_yaml_validation_error(self, temp_dir):
        """Test that invalid values become configuration errors."""
        config_path = temp_dir / "invalid_values.yaml"
        config_path.write_text("min_confidence: certain\n")

        with pytest.raises(ConfigLoadError) as exc_info:
            load_config_from_yaml(config_path, FontLocateConfig)
        assert isinstance(exc_info.value, ConfigurationError)

    def test_from_env_and_yaml_without_yaml(self, monkeypatch, temp_dir):
        """Test that a missing YAML file falls back to the environment."""
        monkeypatch.setenv("FONTLOCATE_APP_KEY", "env-app")

        config = FontLocateConfig.from_env_and_yaml(temp_dir / "missing.yaml")

        assert config.app_key == "env-app"

    def test_from_env_and_yaml_with_yaml(self, temp_dir):
        """Test that an existing YAML file is used."""
        config_path = temp_dir / "fontlocate.yaml"
        config_path.write_text("app_key: yaml-app\n")

        assert FontLocateConfig.from_env_and_yaml(config_path).app_key == "yaml-app"
