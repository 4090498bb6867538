"""
Unit tests for core models - Imperative style.

Tests font requests, resolved fonts and resolution results.
"""

import pytest
from pydantic import ValidationError

from fontlocate.core.exceptions import (
    FallbackUnavailableError,
    FontNotFoundError,
    FontReadError,
    NoFontSourceError,
    ResolutionCancelledError,
)
from fontlocate.core.models import Descriptor, FontStyle, FontWeight, MatchConfidence, Resolution
from fontlocate.fonts.bundled import packaged_fonts_dir
from fontlocate.fonts.models import NULL_FONT, FontVariantsLocation, GoogleFontInfo, ScalableFont


class TestDescriptor:
    """Test Descriptor model validation."""

    def test_valid_descriptor_creation(self):
        """Test creating a valid descriptor."""
        descriptor = Descriptor(pattern="Noto Sans", style="italic", weight=700)

        assert descriptor.pattern == "Noto Sans"
        assert descriptor.style is FontStyle.ITALIC
        assert descriptor.weight == 700
        assert str(descriptor) == "Noto Sans italic 700"

    def test_descriptor_defaults(self):
        """Test descriptor defaults."""
        descriptor = Descriptor(pattern="Arial")

        assert descriptor.style is FontStyle.NORMAL
        assert descriptor.weight == FontWeight.NORMAL

    @pytest.mark.parametrize("pattern", ["", "   ", "\t"])
    def test_blank_pattern(self, pattern):
        """Test that the pattern cannot be blank."""
        with pytest.raises(ValidationError):
            Descriptor(pattern=pattern)

    @pytest.mark.parametrize("weight", [0, -100, 1001])
    def test_weight_out_of_range(self, weight):
        """Test that weights must lie in 1..1000."""
        with pytest.raises(ValidationError):
            Descriptor(pattern="Arial", weight=weight)

    @pytest.mark.parametrize("weight", [1, 350, 1000])
    def test_weight_in_range(self, weight):
        """Test weights at and between the bounds."""
        assert Descriptor(pattern="Arial", weight=weight).weight == weight

    def test_unknown_style(self):
        """Test that only the three slants are accepted."""
        with pytest.raises(ValidationError):
            Descriptor(pattern="Arial", style="slanted")

    def test_descriptor_is_frozen(self):
        """Test that descriptors are immutable and hashable."""
        descriptor = Descriptor(pattern="Arial")

        with pytest.raises(ValidationError):
            descriptor.weight = 700
        assert hash(descriptor) == hash(Descriptor(pattern="Arial"))


class TestEnums:
    """Test style, weight and confidence enums."""

    def test_slanted_styles(self):
        """Test which styles count as slanted."""
        assert not FontStyle.NORMAL.is_slanted
        assert FontStyle.ITALIC.is_slanted
        assert FontStyle.OBLIQUE.is_slanted

    def test_confidence_order(self):
        """Test that confidence levels are ordered."""
        assert (
            MatchConfidence.NO_CONFIDENCE
            < MatchConfidence.LOW_CONFIDENCE
            < MatchConfidence.HIGH_CONFIDENCE
            < MatchConfidence.PERFECT_CONFIDENCE
        )

    def test_weights(self):
        """Test named weights."""
        assert FontWeight.NORMAL == 400
        assert FontWeight.BOLD == 700
        assert [int(w) for w in FontWeight] == list(range(100, 1000, 100))


class TestScalableFont:
    """Test ScalableFont."""

    def test_null_font(self):
        """Test the null font."""
        assert NULL_FONT.is_null
        assert not NULL_FONT.is_valid
        assert NULL_FONT.location == ""
        assert str(NULL_FONT) == "<null font>"

    def test_file_font(self, make_font, temp_dir):
        """Test a font backed by a file."""
        font = make_font("Noto", data=b"glyphs")

        assert not font.is_null
        assert font.is_valid
        assert font.filename == "Noto.ttf"
        assert font.extension == ".ttf"
        assert font.location == str(temp_dir / "Noto.ttf")
        assert font.read_bytes() == b"glyphs"
        assert str(font) == "Noto normal 400 (Noto.ttf)"

    def test_packaged_font(self):
        """Test a font backed by a packaged resource directory."""
        font = ScalableFont(name="Lato", source=packaged_fonts_dir(), path="Lato-Light.ttf")

        assert font.read_bytes()
        assert font.location.endswith("Lato-Light.ttf")

    def test_read_without_source(self):
        """Test reading a font that has no source."""
        with pytest.raises(NoFontSourceError):
            ScalableFont(name="Orphan", path="orphan.ttf").read_bytes()

    def test_read_missing_file(self, temp_dir):
        """Test reading a font whose file is gone."""
        font = ScalableFont(name="Gone", source=temp_dir, path="gone.ttf")

        with pytest.raises(FontReadError, match="gone.ttf"):
            font.read_bytes()

    def test_equality_ignores_source(self, temp_dir):
        """Test that fonts compare by name, style, weight and path."""
        a = ScalableFont(name="Noto", source=temp_dir, path="Noto.ttf")
        b = ScalableFont(name="Noto", source=temp_dir / "other", path="Noto.ttf")

        assert a == b
        assert a != ScalableFont(name="Noto", weight=700, source=temp_dir, path="Noto.ttf")


class TestFontVariantsLocation:
    """Test font family locations."""

    @pytest.mark.parametrize(
        "path,expected",
        [("/fonts/Noto.ttc", True), ("/fonts/NOTO.OTC", True), ("/fonts/Noto.ttf", False)],
    )
    def test_is_collection(self, path, expected):
        """Test collection detection by file extension."""
        location = FontVariantsLocation(family="Noto", path=path, variants=["regular"])
        assert location.is_collection is expected

    def test_google_font_info(self):
        """Test a directory entry with extra fields."""
        info = GoogleFontInfo.model_validate(
            {
                "family": "Roboto",
                "variants": ["regular"],
                "files": {"regular": "https://fonts.gstatic.com/s/roboto/Roboto.ttf"},
                "category": "sans-serif",
            }
        )

        assert info.family == "Roboto"
        assert not info.is_collection
        assert info.subsets == []


class TestResolution:
    """Test resolution results."""

    def test_success(self, make_font):
        """Test a plain success."""
        result = Resolution(make_font("Noto"))

        assert result.ok
        assert not result.degraded
        font, error = result
        assert error is None

    def test_degraded(self, make_font):
        """Test a fallback font paired with a not-found error."""
        result = Resolution(make_font("Fallback"), FontNotFoundError("noto_sans"))

        assert not result.ok
        assert result.degraded

    @pytest.mark.parametrize(
        "error",
        [ResolutionCancelledError(), FallbackUnavailableError("nothing packaged")],
    )
    def test_failed(self, error):
        """Test that a null font with an error is a failure."""
        result = Resolution(NULL_FONT, error)

        assert not result.ok
        assert not result.degraded
