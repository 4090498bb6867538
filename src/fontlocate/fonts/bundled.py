"""Bundled Font Provider
====================

Provider for the fonts packaged with fontlocate. These fonts are always
available and back the registry's fallback font.
"""

import logging
from importlib import resources
from importlib.resources.abc import Traversable

from fontlocate.core.cancellation import CancellationToken
from fontlocate.core.exceptions import FallbackUnavailableError, NoMatchError
from fontlocate.core.models import Descriptor, FontStyle, FontWeight

from .matching import matches, variant_confidence
from .models import FONT_EXTENSIONS, ScalableFont
from .utils import guess_style_and_weight, strip_font_extension

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_FILENAME = "Lato-Regular.ttf"


def packaged_fonts_dir() -> Traversable:
    """Directory holding the packaged font files."""
    return resources.files("fontlocate.fonts").joinpath("packaged")


class BundledFontProvider:
    """Provider for fonts shipped inside the package.

    A request is answered with the best packaged file whose name matches
    it. If none does, the last packaged file is returned. The provider only
    fails when nothing is packaged at all.
    """

    def __init__(self, fonts_dir: Traversable | None = None):
        """Initialize bundled font provider.

        Args:
            fonts_dir: Directory containing the font files; defaults to the
                packaged fonts

        """
        self.fonts_dir = fonts_dir or packaged_fonts_dir()

    def list_fonts(self) -> list[str]:
        """List packaged font file names in sorted order."""
        if not self.fonts_dir.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self.fonts_dir.iterdir()
            if entry.is_file() and _has_font_extension(entry.name)
        )

    def find_font(self, pattern: str, style: FontStyle, weight: int) -> ScalableFont:
        """Find the packaged font for a request.

        Raises:
            NoMatchError: If there are no packaged fonts
        """
        filenames = self.list_fonts()
        if not filenames:
            raise NoMatchError(pattern)

        candidates = [name for name in filenames if matches(name, pattern, style, weight)]
        if candidates:
            # best candidate, first one on equal confidence
            filename = max(
                candidates,
                key=lambda name: variant_confidence(strip_font_extension(name), style, weight),
            )
            logger.debug(f"Found packaged font file {filename}")
        else:
            filename = filenames[-1]

        return ScalableFont(
            name=filename,
            style=style,
            weight=weight,
            source=self.fonts_dir,
            path=filename,
        )

    def default_font(self) -> ScalableFont:
        """Return the packaged default font.

        Raises:
            FallbackUnavailableError: If the default font is not packaged

        """
        entry = self.fonts_dir.joinpath(DEFAULT_FALLBACK_FILENAME)
        if not entry.is_file():
            raise FallbackUnavailableError(
                f"Packaged default font {DEFAULT_FALLBACK_FILENAME} is missing"
            )
        style, weight = guess_style_and_weight(DEFAULT_FALLBACK_FILENAME)
        return ScalableFont(
            name=DEFAULT_FALLBACK_FILENAME,
            style=style,
            weight=weight or FontWeight.NORMAL,
            source=self.fonts_dir,
            path=DEFAULT_FALLBACK_FILENAME,
        )

    def __call__(self, token: CancellationToken, descriptor: Descriptor) -> ScalableFont:
        return self.find_font(descriptor.pattern, descriptor.style, descriptor.weight)


def _has_font_extension(filename: str) -> bool:
    return any(filename.lower().endswith(ext) for ext in FONT_EXTENSIONS)


def default_font() -> ScalableFont:
    """Return the packaged default font (the registry's fallback)."""
    return BundledFontProvider().default_font()
