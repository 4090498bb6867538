"""Pydantic models and enums describing font requests."""

from enum import Enum, IntEnum
from typing import TYPE_CHECKING, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import EmptyPatternError, FontLocateError, InvalidWeightError

if TYPE_CHECKING:
    from fontlocate.fonts.models import ScalableFont


class FontStyle(str, Enum):
    """Slant of a font variant."""

    NORMAL = "normal"
    ITALIC = "italic"
    OBLIQUE = "oblique"

    @property
    def is_slanted(self) -> bool:
        return self is not FontStyle.NORMAL


class FontWeight(IntEnum):
    """Font weights on the CSS/OpenType 100-900 scale."""

    THIN = 100
    EXTRA_LIGHT = 200
    LIGHT = 300
    NORMAL = 400
    MEDIUM = 500
    SEMI_BOLD = 600
    BOLD = 700
    EXTRA_BOLD = 800
    BLACK = 900


class MatchConfidence(IntEnum):
    """Ordinal measure of how well a font variant matches a request."""

    NO_CONFIDENCE = 0
    LOW_CONFIDENCE = 1
    HIGH_CONFIDENCE = 2
    PERFECT_CONFIDENCE = 3


class Descriptor(BaseModel):
    """A font request: family name pattern, style and weight."""

    model_config = ConfigDict(frozen=True)

    pattern: str = Field(..., description="Family name pattern (regular expression)")
    style: FontStyle = Field(FontStyle.NORMAL, description="Requested slant")
    weight: int = Field(FontWeight.NORMAL, description="Requested weight (1-1000)")

    @field_validator("pattern")
    @classmethod
    def pattern_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise EmptyPatternError()
        return v

    @field_validator("weight")
    @classmethod
    def weight_in_range(cls, v: int) -> int:
        if not 1 <= int(v) <= 1000:
            raise InvalidWeightError(v)
        return int(v)

    def __str__(self) -> str:
        return f"{self.pattern} {self.style.value} {self.weight}"


class Resolution(NamedTuple):
    """Outcome of a font resolution: a font paired with an optional error.

    A resolution carrying both a usable font and an error is degraded, not
    failed: the font is the packaged fallback and may be used as is.
    """

    font: "ScalableFont"
    error: FontLocateError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def degraded(self) -> bool:
        return self.error is not None and not self.font.is_null
