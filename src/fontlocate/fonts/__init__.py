"""Font Providers Module
=====================

Variant matching, the font registry and the providers for bundled, system
and Google fonts.
"""

from .bundled import BundledFontProvider
from .google import GoogleFontsProvider
from .matching import MatchResult, best_match, closest_match, matches
from .models import NULL_FONT, FontVariantsLocation, GoogleFontInfo, ScalableFont
from .registry import FontRegistry, global_registry, normalize_font_name
from .system import SystemFontProvider
from .utils import guess_style_and_weight

__all__ = [
    "NULL_FONT",
    "BundledFontProvider",
    "FontRegistry",
    "FontVariantsLocation",
    "GoogleFontInfo",
    "GoogleFontsProvider",
    "MatchResult",
    "ScalableFont",
    "SystemFontProvider",
    "best_match",
    "closest_match",
    "global_registry",
    "guess_style_and_weight",
    "matches",
    "normalize_font_name",
]
