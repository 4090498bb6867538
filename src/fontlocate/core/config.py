"""Configuration management for the font location system."""

from pathlib import Path

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import (
    ConfigFileNotFoundError,
    ConfigLoadError,
    ConfigurationError,
    EmptyConfigFileError,
    InvalidYamlError,
)
from .models import MatchConfidence


class GoogleFontsConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_FONTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    """Google Fonts directory service configuration."""

    api_key: str | None = Field(None, description="Google Fonts developer API key", repr=False)
    api_url: str = Field(
        "https://www.googleapis.com/webfonts/v1/webfonts", description="Directory endpoint"
    )
    timeout_seconds: float = Field(30.0, gt=0.0, description="HTTP request timeout")
    chunk_size: int = Field(64 * 1024, ge=1024, description="Download chunk size in bytes")
    user_agent: str = Field("fontlocate/1.0.0", description="HTTP User-Agent header")

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v):
        """Validate endpoint URL format."""
        if not v.startswith(("https://", "http://")):
            raise ValueError("API URL must start with https:// or http://")
        return v.rstrip("?")

    def to_safe_dict(self) -> dict:
        """Export configuration with the API key masked."""
        config_dict = self.model_dump()
        if config_dict.get("api_key"):
            config_dict["api_key"] = "***MASKED***"
        return config_dict


class FontLocateConfig(BaseSettings):
    """Main configuration for font resolution."""

    model_config = SettingsConfigDict(
        env_prefix="FONTLOCATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_key: str = Field(
        "fontlocate",
        description="Application key used to locate per-user config and cache folders",
    )
    fonts_cache_dir: Path | None = Field(None, description="Directory for downloaded fonts")
    fontlist_path: Path | None = Field(None, description="Explicit fc-list style font list file")
    font_dirs: list[Path] = Field(
        default_factory=list, description="Extra directories to scan for system fonts"
    )

    min_confidence: MatchConfidence = Field(
        MatchConfidence.LOW_CONFIDENCE, description="Lowest accepted match confidence"
    )
    enable_system_fonts: bool = Field(True, description="Search locally installed fonts")
    enable_google_fonts: bool = Field(True, description="Search the Google Fonts directory")
    resolve_timeout_seconds: float | None = Field(
        None, gt=0.0, description="Deadline for a single resolution"
    )
    log_level: str = Field("INFO", description="Log level")

    google: GoogleFontsConfig = Field(default_factory=GoogleFontsConfig)

    @field_validator("min_confidence", mode="before")
    @classmethod
    def parse_min_confidence(cls, v):
        """Accept confidence names such as 'high' or 'HIGH_CONFIDENCE'."""
        if isinstance(v, str):
            if v.strip().isdigit():
                return int(v)
            name = v.strip().upper()
            if not name.endswith("_CONFIDENCE"):
                name = f"{name}_CONFIDENCE"
            try:
                return MatchConfidence[name]
            except KeyError as e:
                raise ValueError(f"Unknown confidence level: {v}") from e
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def load_from_env(cls, env_file: str | Path | None = ".env") -> "FontLocateConfig":
        """Load configuration from environment variables and .env file."""
        if env_file:
            env_file = Path(env_file)
            if env_file.exists():
                return cls(_env_file=env_file)
        return cls()

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "FontLocateConfig":
        """Load configuration from YAML file."""
        return load_config_from_yaml(config_path, cls)

    @classmethod
    def from_env_and_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str = ".env"
    ) -> "FontLocateConfig":
        """Load configuration from environment variables and optionally override with YAML."""
        if yaml_path and Path(yaml_path).exists():
            return cls.from_yaml(yaml_path)
        return cls(_env_file=env_file if Path(env_file).exists() else None)


def load_config_from_yaml(config_path: str | Path, config_class: type) -> BaseSettings:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(str(config_path))

    try:
        with config_path.open() as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidYamlError(str(config_path), str(e)) from e

    if config_data is None:
        raise EmptyConfigFileError(str(config_path))

    try:
        if issubclass(config_class, BaseSettings):
            # YAML-based configs do not read .env
            class YamlConfig(config_class):
                model_config = SettingsConfigDict(
                    env_file=None,
                    case_sensitive=False,
                    extra="ignore",
                )

            return YamlConfig(**config_data)
        return config_class(**config_data)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigLoadError(str(e)) from e
