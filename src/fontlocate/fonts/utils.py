"""
Font Utilities
==============

Helpers for interpreting font file names and variant labels.
"""

import os
import platform
import re
from pathlib import Path, PurePath

from fontlocate.core.models import FontStyle, FontWeight

from .models import FONT_EXTENSIONS

# Ordered so that compound keywords win over their suffixes ("semibold" before "bold")
WEIGHT_KEYWORDS: list[tuple[str, int]] = [
    ("extralight", FontWeight.EXTRA_LIGHT),
    ("ultralight", FontWeight.EXTRA_LIGHT),
    ("hairline", FontWeight.THIN),
    ("thin", FontWeight.THIN),
    ("light", FontWeight.LIGHT),
    ("semibold", FontWeight.SEMI_BOLD),
    ("demibold", FontWeight.SEMI_BOLD),
    ("extrabold", FontWeight.EXTRA_BOLD),
    ("ultrabold", FontWeight.EXTRA_BOLD),
    ("bold", FontWeight.BOLD),
    ("black", FontWeight.BLACK),
    ("heavy", FontWeight.BLACK),
    ("medium", FontWeight.MEDIUM),
    ("regular", FontWeight.NORMAL),
    ("normal", FontWeight.NORMAL),
    ("book", FontWeight.NORMAL),
]

_NUMERIC_WEIGHT = re.compile(r"(?<!\d)([1-9]00)(?!\d)")
_SEPARATORS = re.compile(r"[\s_\-]+")


def _squash(text: str) -> str:
    """Lower-case and drop separators: 'Semi Bold' -> 'semibold'."""
    return _SEPARATORS.sub("", text.lower())


def parse_label_style(label: str) -> FontStyle:
    """Interpret the slant named by a variant label or file name."""
    text = label.lower()
    if "oblique" in text:
        return FontStyle.OBLIQUE
    if "italic" in text:
        return FontStyle.ITALIC
    return FontStyle.NORMAL


def parse_label_weight(label: str) -> int:
    """
    Interpret the weight named by a variant label or file name.

    Numeric labels ("700", "300italic") are taken literally; otherwise the
    first weight keyword found decides. Labels without a weight qualifier,
    such as "regular" or "italic", are normal weight.
    """
    match = _NUMERIC_WEIGHT.search(label)
    if match:
        return int(match.group(1))

    squashed = _squash(label)
    for keyword, weight in WEIGHT_KEYWORDS:
        if keyword in squashed:
            return int(weight)
    return int(FontWeight.NORMAL)


def strip_font_extension(filename: str) -> str:
    """Return the file stem if `filename` carries a font extension."""
    path = PurePath(filename)
    if path.suffix.lower() in FONT_EXTENSIONS:
        return path.stem
    return path.name


def guess_style_and_weight(filename: str) -> tuple[FontStyle, int]:
    """
    Guess style and weight of a font from its file name.

    Args:
        filename: Font file name, optionally with directories

    Returns:
        Tuple of (style, weight)
    """
    stem = strip_font_extension(PurePath(filename).name)
    style = parse_label_style(stem)
    if style is FontStyle.OBLIQUE:
        style = FontStyle.ITALIC
    return style, parse_label_weight(stem)


def user_config_dir() -> Path:
    """Per-user configuration directory of the current platform."""
    system = platform.system().lower()
    if system == "windows":
        return Path(os.environ.get("APPDATA") or Path.home() / "AppData" / "Roaming")
    if system == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")


def user_cache_dir() -> Path:
    """Per-user cache directory of the current platform."""
    system = platform.system().lower()
    if system == "windows":
        return Path(os.environ.get("LOCALAPPDATA") or Path.home() / "AppData" / "Local")
    if system == "darwin":
        return Path.home() / "Library" / "Caches"
    return Path(os.environ.get("XDG_CACHE_HOME") or Path.home() / ".cache")
