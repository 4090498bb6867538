"""
Font data models and types.
"""

from dataclasses import dataclass, field
from importlib.resources.abc import Traversable
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, Field

from fontlocate.core.exceptions import FontReadError, NoFontSourceError
from fontlocate.core.models import FontStyle, FontWeight

# Extensions of font collections bundling several faces in one file
COLLECTION_EXTENSIONS = (".ttc", ".otc")

FONT_EXTENSIONS = {".ttf", ".otf", ".woff", ".woff2", ".ttc", ".otc"}


@dataclass(frozen=True)
class ScalableFont:
    """A resolved font: where to find the bytes of one font variant.

    `source` is a directory-like handle (a filesystem directory, a cache
    directory or a packaged resource directory) and `path` the file name
    relative to it. Font data is only read on request.
    """

    name: str
    style: FontStyle = FontStyle.NORMAL
    weight: int = FontWeight.NORMAL
    source: Path | Traversable | None = field(default=None, compare=False)
    path: str = ""

    @property
    def is_null(self) -> bool:
        return not self.name and self.source is None and not self.path

    @property
    def is_valid(self) -> bool:
        """True if the font names a file inside an attached source."""
        return bool(self.name) and bool(self.path) and self.source is not None

    @property
    def filename(self) -> str:
        """Get the font filename."""
        return PurePosixPath(self.path).name

    @property
    def extension(self) -> str:
        """Get the font file extension."""
        return PurePosixPath(self.path).suffix.lower()

    @property
    def location(self) -> str:
        """Printable location of the font file, empty without a source."""
        if self.source is None or not self.path:
            return ""
        return str(self.source.joinpath(self.path))

    def read_bytes(self) -> bytes:
        """Read the raw font data from the attached source."""
        if self.source is None or not self.path:
            raise NoFontSourceError(self.name)
        try:
            return self.source.joinpath(self.path).read_bytes()
        except OSError as e:
            raise FontReadError(self.path, str(e)) from e

    def __str__(self) -> str:
        if self.is_null:
            return "<null font>"
        return f"{self.name} {self.style.value} {int(self.weight)} ({self.path})"


NULL_FONT = ScalableFont(name="")


class FontVariantsLocation(BaseModel):
    """One font family's known variants, as reported by a provider."""

    family: str = Field(..., description="Font family name")
    path: str = Field("", description="File the variants live in, if a single file")
    variants: list[str] = Field(default_factory=list, description="Variant labels")

    @property
    def is_collection(self) -> bool:
        return self.path.lower().endswith(COLLECTION_EXTENSIONS)


class GoogleFontInfo(FontVariantsLocation):
    """A font family entry of the Google Fonts directory."""

    version: str = ""
    subsets: list[str] = Field(default_factory=list)
    files: dict[str, str] = Field(default_factory=dict)
