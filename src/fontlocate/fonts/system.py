"""
System Font Provider
====================

Provider for fonts installed on the local machine.

If the user prepared a font list (the output of `fc-list`) in
`<config dir>/<app key>/fontconfig/fontlist.txt`, requests are matched
against that list only. Otherwise the standard system font directories
are scanned.
"""

import logging
import os
import platform
import re
import threading
from pathlib import Path
from typing import Any

from fontlocate.core.cancellation import CancellationToken
from fontlocate.core.config import FontLocateConfig
from fontlocate.core.exceptions import FontListError, NoMatchError
from fontlocate.core.models import Descriptor, FontStyle, MatchConfidence

from .matching import best_match
from .models import FONT_EXTENSIONS, FontVariantsLocation, ScalableFont
from .utils import strip_font_extension, user_config_dir

logger = logging.getLogger(__name__)

FONTLIST_FILENAME = "fontlist.txt"

# path: family[,alias...]:style=Style[,...]
_FONTLIST_LINE = re.compile(r"^(?P<path>.+?):\s*(?P<family>[^:]+):\s*style=(?P<style>.*)$")
_SEPARATORS = re.compile(r"[\s_\-]+")


def parse_font_list(text: str) -> list[FontVariantsLocation]:
    """
    Parse `fc-list` output into font locations.

    Each entry becomes one location with a single variant label taken from
    the first style name. Lines that do not carry a style are ignored.
    """
    locations = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        match = _FONTLIST_LINE.match(line)
        if not match:
            continue

        family = match.group("family").split(",")[0].strip().lstrip(".")
        style = match.group("style").split(",")[0].strip().lower() or "regular"
        if not family:
            continue
        locations.append(
            FontVariantsLocation(
                family=family,
                path=match.group("path").strip(),
                variants=[style],
            )
        )
    return locations


class SystemFontProvider:
    """
    Provider for system fonts available on the local machine.

    The font list and the directory scan are each read at most once per
    provider; `refresh_font_list` forgets both.
    """

    def __init__(
        self,
        config: FontLocateConfig | None = None,
        font_dirs: list[Path] | None = None,
        fontlist_path: Path | None = None,
    ):
        """
        Initialize system font provider.

        Args:
            config: Configuration; app key, font list path, extra font
                directories and confidence threshold are taken from it
            font_dirs: Directories to scan instead of the platform defaults
            fontlist_path: Font list file instead of the per-user default
        """
        self.config = config or FontLocateConfig()
        self.system = platform.system().lower()
        self.fontlist_path = (
            fontlist_path or self.config.fontlist_path or self._default_fontlist_path()
        )
        if font_dirs is None:
            font_dirs = self._get_system_font_directories() + list(self.config.font_dirs)
        self.font_directories = [Path(d) for d in font_dirs]

        self._lock = threading.Lock()
        self._font_list: list[FontVariantsLocation] | None = None
        self._font_list_loaded = False
        self._font_list_error: FontListError | None = None
        self._scanned: list[FontVariantsLocation] | None = None

        logger.debug(f"SystemFontProvider initialized for {self.system}")
        logger.debug(f"Font list: {self.fontlist_path}, font directories: {self.font_directories}")

    def _default_fontlist_path(self) -> Path | None:
        if not self.config.app_key:
            logger.debug("No app key configured, not looking for a font list")
            return None
        return user_config_dir() / self.config.app_key / "fontconfig" / FONTLIST_FILENAME

    def _get_system_font_directories(self) -> list[Path]:
        """Get system font directories based on operating system."""
        home = Path.home()
        if self.system == "windows":
            return [
                Path(os.environ.get("WINDIR", "C:\\Windows")) / "Fonts",
                Path(os.environ.get("LOCALAPPDATA", "")) / "Microsoft" / "Windows" / "Fonts",
            ]
        if self.system == "darwin":
            return [
                Path("/System/Library/Fonts"),
                Path("/Library/Fonts"),
                home / "Library" / "Fonts",
            ]
        return [
            Path("/usr/share/fonts"),
            Path("/usr/local/share/fonts"),
            home / ".fonts",
            home / ".local" / "share" / "fonts",
        ]

    def _load_font_list(self) -> list[FontVariantsLocation] | None:
        """
        Read the font list file once. Returns None if there is none.

        Raises:
            FontListError: If the font list exists but cannot be read
        """
        with self._lock:
            if self._font_list_loaded:
                if self._font_list_error is not None:
                    raise self._font_list_error
                return self._font_list
            self._font_list_loaded = True

            path = self.fontlist_path
            if path is None or not Path(path).is_file():
                logger.debug("No font list found, falling back to directory scan")
                return None
            try:
                text = Path(path).read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                self._font_list_error = FontListError(str(path), str(e))
                logger.error(str(self._font_list_error))
                raise self._font_list_error from e

            self._font_list = parse_font_list(text)
            logger.info(f"Loaded font list {path} with {len(self._font_list)} entries")
            return self._font_list

    def _scan_font_directories(self) -> list[FontVariantsLocation]:
        """Collect font files of all font directories once."""
        with self._lock:
            if self._scanned is not None:
                return self._scanned

            locations = []
            for font_dir in self.font_directories:
                if not font_dir.is_dir():
                    continue
                try:
                    for font_file in sorted(font_dir.rglob("*")):
                        if font_file.suffix.lower() not in FONT_EXTENSIONS:
                            continue
                        if not font_file.is_file():
                            continue
                        stem = strip_font_extension(font_file.name)
                        locations.append(
                            FontVariantsLocation(
                                family=_SEPARATORS.sub("", stem),
                                path=str(font_file),
                                variants=[stem],
                            )
                        )
                except PermissionError:
                    logger.debug(f"Permission denied accessing {font_dir}")
                except OSError as e:
                    logger.warning(f"Error scanning {font_dir}: {e}")

            logger.debug(f"Scanned {len(locations)} font files")
            self._scanned = locations
            return locations

    @property
    def threshold(self) -> MatchConfidence:
        return self.config.min_confidence

    def find_font(self, pattern: str, style: FontStyle, weight: int) -> ScalableFont:
        """
        Find a locally installed font variant.

        Raises:
            InvalidPatternError: If `pattern` is not a valid regular expression
            NoMatchError: If no installed font matches well enough
        """
        font_list = self._load_font_list()
        if font_list is not None:
            # font list is active, a miss does not fall through to a scan
            result = best_match(font_list, pattern, style, weight, self.threshold)
            logger.debug(f"{pattern} found in font list: {result.location.path}")
        else:
            needle = _SEPARATORS.sub("", pattern)
            if not needle:
                raise NoMatchError(pattern)
            result = best_match(self._scan_font_directories(), needle, style, weight, self.threshold)
            logger.debug(f"{pattern} is a system font: {result.location.path}")

        font_path = Path(result.location.path)
        return ScalableFont(
            name=pattern,
            style=style,
            weight=weight,
            source=font_path.parent,
            path=font_path.name,
        )

    def __call__(self, token: CancellationToken, descriptor: Descriptor) -> ScalableFont:
        return self.find_font(descriptor.pattern, descriptor.style, descriptor.weight)

    def get_system_font_info(self) -> dict[str, Any]:
        """Get system font information."""
        font_list = self._load_font_list()
        info: dict[str, Any] = {
            "system": self.system,
            "fontlist_path": str(self.fontlist_path) if self.fontlist_path else None,
            "fontlist_active": font_list is not None,
            "font_directories": [str(d) for d in self.font_directories if d.is_dir()],
        }
        if font_list is not None:
            info["fontlist_entries"] = len(font_list)
            info["fontlist_collections"] = sum(1 for loc in font_list if loc.is_collection)
            return info

        directory_counts = {}
        for location in self._scan_font_directories():
            for font_dir in self.font_directories:
                if Path(location.path).is_relative_to(font_dir):
                    directory_counts[str(font_dir)] = directory_counts.get(str(font_dir), 0) + 1
                    break
        info["directory_font_counts"] = directory_counts
        info["total_system_fonts"] = sum(directory_counts.values())
        info["collections"] = sum(1 for loc in self._scan_font_directories() if loc.is_collection)
        return info

    def refresh_font_list(self) -> None:
        """Forget the loaded font list and scan results."""
        with self._lock:
            self._font_list = None
            self._font_list_loaded = False
            self._font_list_error = None
            self._scanned = None
        logger.info("Cleared system font list")
