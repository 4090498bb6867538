"""Provider chain orchestration and asynchronous resolution."""

from .engine import ResolutionEngine, default_providers, resolve_font, resolve_font_sync
from .promise import FontPromise
from .providers import Provider, SimpleProvider, adapt_provider

__all__ = [
    "FontPromise",
    "Provider",
    "ResolutionEngine",
    "SimpleProvider",
    "adapt_provider",
    "default_providers",
    "resolve_font",
    "resolve_font_sync",
]
