"""
Variant Matching
================

Confidence-based matching of font requests against the variants a provider
knows about.

Every variant label gets a style confidence and a weight confidence on the
four-level `MatchConfidence` scale. The two are averaged with integer
division, so a mismatch on one axis rounds the combined value down. Across
all candidates the strictly highest combined confidence wins; on equal
confidence the first candidate seen is kept.
"""

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import PurePath

from fontlocate.core.exceptions import InvalidPatternError, NoMatchError
from fontlocate.core.models import FontStyle, MatchConfidence

from .models import FontVariantsLocation
from .utils import parse_label_style, parse_label_weight, strip_font_extension

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """Best candidate found by `closest_match`."""

    location: FontVariantsLocation | None = None
    variant: str = ""
    confidence: MatchConfidence = MatchConfidence.NO_CONFIDENCE
    skipped: int = 0  # font collections passed over

    @property
    def found(self) -> bool:
        return self.location is not None

    def accepted(self, threshold: MatchConfidence = MatchConfidence.LOW_CONFIDENCE) -> bool:
        return self.found and self.confidence >= threshold


def match_style(label: str, style: FontStyle) -> MatchConfidence:
    """Confidence that variant `label` has the requested slant."""
    label_style = parse_label_style(label)
    if label_style is style:
        return MatchConfidence.PERFECT_CONFIDENCE
    if label_style.is_slanted and style.is_slanted:
        # italic for oblique or vice versa
        return MatchConfidence.HIGH_CONFIDENCE
    return MatchConfidence.LOW_CONFIDENCE


def match_weight(label: str, weight: int) -> MatchConfidence:
    """Confidence that variant `label` has the requested weight."""
    distance = abs(parse_label_weight(label) - int(weight))
    if distance == 0:
        return MatchConfidence.PERFECT_CONFIDENCE
    if distance <= 100:
        return MatchConfidence.HIGH_CONFIDENCE
    if distance <= 200:
        return MatchConfidence.LOW_CONFIDENCE
    return MatchConfidence.NO_CONFIDENCE


def variant_confidence(label: str, style: FontStyle, weight: int) -> MatchConfidence:
    """Combined confidence for one variant label, rounded toward the lower level."""
    combined = (match_style(label, style) + match_weight(label, weight)) // 2
    return MatchConfidence(combined)


def select_variant(
    variants: Iterable[str], style: FontStyle, weight: int
) -> tuple[str, MatchConfidence]:
    """
    Pick the best variant label for a style and weight.

    Returns:
        Tuple of (variant, confidence); variant is empty if nothing scored
        above NO_CONFIDENCE.
    """
    best_variant = ""
    best_confidence = MatchConfidence.NO_CONFIDENCE
    for variant in variants:
        confidence = variant_confidence(variant, style, weight)
        if confidence > best_confidence:
            best_variant, best_confidence = variant, confidence
    return best_variant, best_confidence


def compile_pattern(pattern: str) -> re.Pattern:
    """Compile a family name pattern for case-insensitive matching."""
    try:
        return re.compile(pattern.strip(), re.IGNORECASE)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e


def closest_match(
    locations: Iterable[FontVariantsLocation],
    pattern: str,
    style: FontStyle,
    weight: int,
) -> MatchResult:
    """
    Find the variant closest to a request among font family locations.

    Families whose name does not contain `pattern`, families without variants
    and font collections are passed over. Collections are counted in the
    result's `skipped` field.

    Raises:
        InvalidPatternError: If `pattern` is not a valid regular expression
    """
    regex = compile_pattern(pattern)
    result = MatchResult()

    for location in locations:
        if location.is_collection:
            result.skipped += 1
            continue
        if not location.variants:
            continue
        if not regex.search(location.family):
            continue
        variant, confidence = select_variant(location.variants, style, weight)
        if confidence > result.confidence:
            result.location = location
            result.variant = variant
            result.confidence = confidence

    if result.skipped:
        logger.info(f"Skipped {result.skipped} font collections: not yet supported")
    if result.found:
        logger.debug(
            f"Closest match for '{pattern}': {result.location.family}|{result.variant} "
            f"(confidence={result.confidence.name})"
        )
    return result


def best_match(
    locations: Sequence[FontVariantsLocation],
    pattern: str,
    style: FontStyle,
    weight: int,
    threshold: MatchConfidence = MatchConfidence.LOW_CONFIDENCE,
) -> MatchResult:
    """
    Like `closest_match`, but fail unless the winner reaches `threshold`.

    Raises:
        InvalidPatternError: If `pattern` is not a valid regular expression
        NoMatchError: If no candidate reaches the threshold
    """
    result = closest_match(locations, pattern, style, weight)
    if not result.accepted(threshold):
        family = result.location.family if result.location else None
        raise NoMatchError(pattern, int(result.confidence), family)
    return result


def matches(filename: str, pattern: str, style: FontStyle, weight: int) -> bool:
    """
    Check whether a font file name plausibly satisfies a request.

    The pattern must be contained in the file stem and the style/weight read
    from the name must reach at least HIGH_CONFIDENCE.
    """
    stem = strip_font_extension(PurePath(filename).name)
    regex = compile_pattern(pattern)
    if not regex.search(stem) and not regex.search(stem.replace(" ", "")):
        return False
    return variant_confidence(stem, style, weight) >= MatchConfidence.HIGH_CONFIDENCE
