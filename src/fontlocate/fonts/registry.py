"""
Font Registry
=============

Process-wide memoization of resolved fonts, keyed by a normalized request
name, plus the always-available fallback font.
"""

import logging
import re
import threading
from collections.abc import Callable

from fontlocate.core.exceptions import (
    FallbackUnavailableError,
    FontLocateError,
    FontNotFoundError,
)
from fontlocate.core.models import FontStyle, FontWeight, Resolution

from .models import NULL_FONT, ScalableFont
from .utils import strip_font_extension

logger = logging.getLogger(__name__)

# contains whitespace, so normalize_font_name never produces it
FALLBACK_KEY = "<fallback font>"

_WHITESPACE = re.compile(r"\s+")


def normalize_font_name(pattern: str, style: FontStyle, weight: int) -> str:
    """
    Build the registry key for a font request.

    Example:
        >>> normalize_font_name("Clarendon", FontStyle.ITALIC, FontWeight.BOLD)
        'clarendon-italic-bold'
    """
    name = _WHITESPACE.sub("_", pattern.strip())
    name = strip_font_extension(name).lower()
    if style.is_slanted:
        name += "-italic"
    if weight <= FontWeight.LIGHT:
        name += "-light"
    elif weight >= FontWeight.SEMI_BOLD:
        name += "-bold"
    return name


def _default_fallback_loader() -> ScalableFont:
    from .bundled import default_font

    return default_font()


class FontRegistry:
    """
    Thread-safe cache of resolved fonts.

    Entries are never replaced: the first font stored under a key is kept
    for the lifetime of the registry.
    """

    def __init__(self, fallback_loader: Callable[[], ScalableFont] | None = None):
        """
        Initialize font registry.

        Args:
            fallback_loader: Loads the fallback font; defaults to the packaged
                default font
        """
        self._fonts: dict[str, ScalableFont] = {}
        self._lock = threading.Lock()
        self._fallback_lock = threading.Lock()
        self._fallback_loader = fallback_loader or _default_fallback_loader

    def lookup(self, key: str) -> ScalableFont | None:
        """Return the font cached under `key`, if any."""
        with self._lock:
            return self._fonts.get(key)

    def store(self, key: str, font: ScalableFont) -> ScalableFont | None:
        """
        Cache `font` under `key` unless the key is already taken.

        Returns:
            The font held under `key` after the call, or None if `font` was
            rejected and nothing is cached
        """
        if font is None or not font.is_valid:
            logger.error(f"Refusing to register null font under '{key}': {font!r}")
            with self._lock:
                return self._fonts.get(key)

        with self._lock:
            existing = self._fonts.get(key)
            if existing is not None:
                logger.debug(f"Font '{key}' already registered, keeping {existing.name}")
                return existing
            self._fonts[key] = font

        logger.debug(f"Registered font '{key}': {font.name}")
        return font

    def fallback(self) -> ScalableFont:
        """
        Return the fallback font, loading it on first use.

        Raises:
            FallbackUnavailableError: If the fallback font cannot be loaded
        """
        font = self.lookup(FALLBACK_KEY)
        if font is not None:
            return font

        with self._fallback_lock:
            font = self.lookup(FALLBACK_KEY)
            if font is not None:
                return font

            try:
                font = self._fallback_loader()
            except FallbackUnavailableError:
                raise
            except Exception as e:
                raise FallbackUnavailableError(f"Cannot load fallback font: {e}") from e

            if font is None or not font.is_valid:
                raise FallbackUnavailableError(
                    f"Fallback loader returned no usable font: {font!r}"
                )

            logger.info(f"Loaded fallback font {font.name}")
            return self.store(FALLBACK_KEY, font)

    def resolve_or_fallback(self, key: str) -> Resolution:
        """
        Look up `key`, substituting the fallback font on a miss.

        Returns:
            (font, None) on a hit, (fallback, FontNotFoundError) on a miss and
            (NULL_FONT, FallbackUnavailableError) if even the fallback failed
        """
        font = self.lookup(key)
        if font is not None:
            return Resolution(font)

        logger.info(f"Font '{key}' not registered, using fallback")
        return self.fallback_resolution(FontNotFoundError(key))

    def fallback_resolution(self, error: FontLocateError) -> Resolution:
        """Pair the fallback font with `error`."""
        try:
            return Resolution(self.fallback(), error)
        except FallbackUnavailableError as e:
            logger.error(f"No fallback font available: {e}")
            return Resolution(
                NULL_FONT,
                FallbackUnavailableError(f"{error}; fallback unavailable: {e}", details=error),
            )

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._fonts)

    def __len__(self) -> int:
        with self._lock:
            return len(self._fonts)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._fonts

    def log_font_list(self) -> None:
        """Log all registered fonts at INFO level."""
        with self._lock:
            entries = sorted(self._fonts.items())
        logger.info(f"--- registered fonts ({len(entries)}) ---")
        for key, font in entries:
            logger.info(f"  {key}: {font.name} [{font.path}]")
        logger.info("--- end of font list ---")


_global_registry: FontRegistry | None = None
_global_registry_lock = threading.Lock()


def global_registry() -> FontRegistry:
    """Return the process-wide default registry, creating it on first use."""
    global _global_registry
    with _global_registry_lock:
        if _global_registry is None:
            _global_registry = FontRegistry()
        return _global_registry
