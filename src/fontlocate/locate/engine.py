"""
Resolution Engine
=================

Resolves font requests through an ordered chain of providers, memoizing
results in a font registry and substituting the fallback font when every
provider fails.

Example:
    >>> engine = ResolutionEngine(providers=[BundledFontProvider()])
    >>> font, error = engine.start(Descriptor(pattern="Lato")).font()
"""

import logging
import threading
from collections.abc import Sequence

from fontlocate.core.cancellation import CancellationToken
from fontlocate.core.config import FontLocateConfig
from fontlocate.core.exceptions import FontLocateError, FontNotFoundError
from fontlocate.core.models import Descriptor, Resolution
from fontlocate.fonts.models import NULL_FONT
from fontlocate.fonts.registry import FontRegistry, global_registry, normalize_font_name

from .promise import FontPromise
from .providers import Provider, provider_name

logger = logging.getLogger(__name__)


class ResolutionEngine:
    """Runs font requests through registry lookup, provider chain and fallback."""

    def __init__(
        self,
        registry: FontRegistry | None = None,
        providers: Sequence[Provider] = (),
        config: FontLocateConfig | None = None,
    ):
        """
        Initialize resolution engine.

        Args:
            registry: Font registry; defaults to the process-wide registry
            providers: Default provider chain, tried in order
            config: Configuration; only the resolution timeout is used here
        """
        self.registry = registry if registry is not None else global_registry()
        self.providers = list(providers)
        self.timeout_seconds = config.resolve_timeout_seconds if config else None

    def _token(self, token: CancellationToken | None) -> CancellationToken:
        if self.timeout_seconds:
            return CancellationToken.with_timeout(self.timeout_seconds, parent=token)
        return token or CancellationToken.never()

    def resolve(
        self,
        descriptor: Descriptor,
        providers: Sequence[Provider] | None = None,
        token: CancellationToken | None = None,
    ) -> Resolution:
        """
        Resolve a font request on the calling thread.

        Args:
            descriptor: Font request
            providers: Provider chain for this request; defaults to the
                engine's chain
            token: Cancellation token, checked before the registry lookup and
                before each provider

        Returns:
            (font, None) on success, (fallback, FontNotFoundError) if no
            provider succeeded, and (NULL_FONT, error) on cancellation or if
            the fallback font is unavailable
        """
        token = token or CancellationToken.never()
        if token.cancelled:
            return Resolution(NULL_FONT, token.error())

        key = normalize_font_name(descriptor.pattern, descriptor.style, descriptor.weight)
        font = self.registry.lookup(key)
        if font is not None:
            logger.debug(f"Font '{key}' found in registry")
            return Resolution(font)

        chain = self.providers if providers is None else list(providers)
        for provider in chain:
            if token.cancelled:
                logger.debug(f"Resolution of '{key}' cancelled")
                return Resolution(NULL_FONT, token.error())

            name = provider_name(provider)
            try:
                font = provider(token, descriptor)
            except FontLocateError as e:
                logger.debug(f"Provider {name} failed for '{key}': {e}")
            except Exception as e:
                logger.debug(f"Provider {name} raised for '{key}': {e!r}")
            else:
                stored = self.registry.store(key, font)
                if stored is not None:
                    logger.info(f"Resolved '{key}' with {name}: {stored.name}")
                    return Resolution(stored)
                logger.debug(f"Provider {name} returned no usable font for '{key}'")

            if token.cancelled:
                return Resolution(NULL_FONT, token.error())

        logger.info(f"No provider found font '{key}'")
        return self.registry.fallback_resolution(FontNotFoundError(key))

    def start(
        self,
        descriptor: Descriptor,
        providers: Sequence[Provider] | None = None,
        token: CancellationToken | None = None,
    ) -> FontPromise:
        """Resolve a font request on a background thread."""
        key = normalize_font_name(descriptor.pattern, descriptor.style, descriptor.weight)
        promise = FontPromise(key)
        owns_token = bool(self.timeout_seconds)
        token = self._token(token)

        def run() -> None:
            try:
                result = self.resolve(descriptor, providers, token)
            except Exception as e:
                logger.exception(f"Resolution of '{key}' failed")
                if isinstance(e, FontLocateError):
                    result = Resolution(NULL_FONT, e)
                else:
                    result = Resolution(NULL_FONT, FontLocateError(str(e), details=e))
            finally:
                if owns_token:
                    # deadline token created for this resolution
                    token.close()
            promise._set_result(result)

        thread = threading.Thread(target=run, name=f"fontlocate-{key}", daemon=True)
        thread.start()
        return promise


def resolve_font(
    descriptor: Descriptor,
    *providers: Provider,
    token: CancellationToken | None = None,
    registry: FontRegistry | None = None,
) -> FontPromise:
    """Start resolving `descriptor` with `providers`, in order."""
    return ResolutionEngine(registry, providers).start(descriptor, token=token)


def resolve_font_sync(
    descriptor: Descriptor,
    *providers: Provider,
    token: CancellationToken | None = None,
    registry: FontRegistry | None = None,
) -> Resolution:
    """Resolve `descriptor` with `providers` on the calling thread."""
    return ResolutionEngine(registry, providers).resolve(descriptor, token=token)


def default_providers(config: FontLocateConfig | None = None) -> list[Provider]:
    """
    Build the standard provider chain for a configuration.

    System fonts and Google Fonts come first when enabled, followed by the
    bundled fonts.
    """
    from fontlocate.fonts.bundled import BundledFontProvider
    from fontlocate.fonts.google import GoogleFontsProvider
    from fontlocate.fonts.system import SystemFontProvider

    config = config or FontLocateConfig()
    providers: list[Provider] = []
    if config.enable_system_fonts:
        providers.append(SystemFontProvider(config))
    if config.enable_google_fonts:
        providers.append(GoogleFontsProvider(config))
    providers.append(BundledFontProvider())
    return providers
