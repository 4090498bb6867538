"""Font Location
=============

Resolves font requests (a family name pattern plus style and weight) to
loadable font files, drawing on the fonts bundled with the package, locally
installed fonts and the Google Fonts service.

Resolutions are memoized in a process-wide registry and never come back
empty handed: if no provider has the requested font, the bundled fallback
font is returned together with a FontNotFoundError.
"""

__version__ = "1.0.0"

from .core.cancellation import CancellationToken
from .core.config import FontLocateConfig, GoogleFontsConfig
from .core.exceptions import FontLocateError, FontNotFoundError, ResolutionCancelledError
from .core.models import Descriptor, FontStyle, FontWeight, MatchConfidence, Resolution
from .fonts import FontRegistry, ScalableFont, global_registry
from .locate import FontPromise, ResolutionEngine, resolve_font, resolve_font_sync

__all__ = [
    "CancellationToken",
    "Descriptor",
    "FontLocateConfig",
    "FontLocateError",
    "FontNotFoundError",
    "FontPromise",
    "FontRegistry",
    "FontStyle",
    "FontWeight",
    "GoogleFontsConfig",
    "MatchConfidence",
    "Resolution",
    "ResolutionCancelledError",
    "ResolutionEngine",
    "ScalableFont",
    "global_registry",
    "resolve_font",
    "resolve_font_sync",
]
