"""Core components for font location."""

from .cancellation import CancelReason, CancellationToken
from .config import FontLocateConfig, GoogleFontsConfig
from .exceptions import (
    ConfigurationError,
    FallbackUnavailableError,
    FontLocateError,
    FontNotFoundError,
    ProviderError,
    ResolutionCancelledError,
)
from .models import Descriptor, FontStyle, FontWeight, MatchConfidence, Resolution

__all__ = [
    "CancelReason",
    "CancellationToken",
    "ConfigurationError",
    "Descriptor",
    "FallbackUnavailableError",
    "FontLocateConfig",
    "FontLocateError",
    "FontNotFoundError",
    "FontStyle",
    "FontWeight",
    "GoogleFontsConfig",
    "MatchConfidence",
    "ProviderError",
    "Resolution",
    "ResolutionCancelledError",
]
