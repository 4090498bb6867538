"""Custom exceptions for the font location system."""

from typing import Any


class FontLocateError(Exception):
    """Base exception for all font location errors."""

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.details = details


class ConfigurationError(FontLocateError):
    """Exception raised for configuration errors."""


class ProviderError(FontLocateError):
    """Exception raised by a font provider that could not produce a font."""


class FontSourceError(FontLocateError):
    """Exception raised when reading font data from a resolved font fails."""


class MatchError(ProviderError):
    """Exception raised while matching a request against font candidates."""


# Matching
class InvalidPatternError(MatchError):
    """Exception raised when a font name pattern is not a valid regular expression."""

    def __init__(self, pattern: str, error: str):
        super().__init__(f"Invalid font name pattern '{pattern}': {error}")
        self.pattern = pattern


class NoMatchError(MatchError):
    """Exception raised when no candidate variant clears the confidence threshold."""

    def __init__(self, pattern: str, confidence: int | None = None, family: str | None = None):
        if family:
            message = f"No suitable variant of {family} for '{pattern}' (confidence={confidence})"
        else:
            message = f"No font matches '{pattern}'"
        super().__init__(message)
        self.pattern = pattern
        self.confidence = confidence
        self.family = family


# Providers
class FontListError(ProviderError):
    """Exception raised when a system font list cannot be read."""

    def __init__(self, path: str, error: str):
        super().__init__(f"Cannot read font list {path}: {error}")


class DirectoryLoadError(ProviderError):
    """Exception raised when the remote font directory cannot be loaded."""


class DownloadError(ProviderError):
    """Exception raised when downloading a font file fails."""

    def __init__(self, url: str, error: str):
        super().__init__(f"Download of {url} failed: {error}")
        self.url = url


class MissingApiKeyError(ConfigurationError):
    """Exception raised when no Google Fonts API key is configured."""

    def __init__(self):
        super().__init__(
            "Google Fonts API key must be set in configuration or as GOOGLE_FONTS_API_KEY "
            "in the environment; see https://developers.google.com/fonts/docs/developer_api"
        )


class MissingAppKeyError(ConfigurationError):
    """Exception raised when an application key is needed but not set."""

    def __init__(self, purpose: str):
        super().__init__(f"Application key is not set (needed for {purpose})")


# Resolution
class FontNotFoundError(FontLocateError):
    """Exception raised when every provider failed to produce a font."""

    def __init__(self, key: str):
        super().__init__(f"Font not found: {key}")
        self.key = key


class ResolutionCancelledError(FontLocateError):
    """Exception raised when a resolution was cancelled."""

    def __init__(self, message: str = "Font resolution cancelled"):
        super().__init__(message)


class DeadlineExceededError(ResolutionCancelledError):
    """Exception raised when a resolution ran past its deadline."""

    def __init__(self, message: str = "Font resolution deadline exceeded"):
        super().__init__(message)


class FallbackUnavailableError(FontLocateError):
    """Exception raised when the packaged fallback font cannot be loaded."""


# Font sources
class NoFontSourceError(FontSourceError):
    """Exception raised when a font has no byte source attached."""

    def __init__(self, name: str):
        super().__init__(f"No font source to read from for '{name}'")


class FontReadError(FontSourceError):
    """Exception raised when reading font bytes from the attached source fails."""

    def __init__(self, path: str, error: str):
        super().__init__(f"Cannot read font data from {path}: {error}")


# Configuration
class ConfigFileNotFoundError(ConfigurationError):
    """Exception raised when configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(f"Configuration file not found: {config_path}")


class EmptyConfigFileError(ConfigurationError):
    """Exception raised when configuration file is empty."""

    def __init__(self, config_path: str):
        super().__init__(f"Empty configuration file: {config_path}")


class InvalidYamlError(ConfigurationError):
    """Exception raised for invalid YAML content."""

    def __init__(self, config_path: str, error: str):
        super().__init__(f"Invalid YAML in {config_path}: {error}")


class ConfigLoadError(ConfigurationError):
    """Exception raised when configuration loading fails."""

    def __init__(self, error: str):
        super().__init__(f"Failed to load configuration: {error}")


class InvalidWeightError(ValueError):
    """Exception raised for font weights outside 1..1000."""

    def __init__(self, weight: int):
        super().__init__(f"Font weight must be between 1 and 1000, got {weight}")


class EmptyPatternError(ValueError):
    """Exception raised for blank font name patterns."""

    def __init__(self):
        super().__init__("Font name pattern cannot be empty")
