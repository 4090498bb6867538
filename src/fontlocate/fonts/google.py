"""
Google Fonts Provider
=====================

Provider backed by the Google Fonts developer API. The font directory is
fetched once per provider; font files are downloaded on demand and kept in
a per-user cache directory.
"""

import logging
import shutil
import tempfile
import threading
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

import requests

from fontlocate.core.cancellation import CancellationToken
from fontlocate.core.config import FontLocateConfig
from fontlocate.core.exceptions import (
    DirectoryLoadError,
    DownloadError,
    FontLocateError,
    MissingApiKeyError,
    MissingAppKeyError,
)
from fontlocate.core.models import Descriptor, FontStyle

from .matching import best_match, compile_pattern
from .models import GoogleFontInfo, ScalableFont
from .utils import user_cache_dir

logger = logging.getLogger(__name__)


class GoogleFontsProvider:
    """
    Provider for fonts of the Google Fonts service.

    Requires an API key, configured as `google.api_key` or through the
    GOOGLE_FONTS_API_KEY environment variable.
    """

    def __init__(
        self,
        config: FontLocateConfig | None = None,
        session: requests.Session | None = None,
    ):
        self.config = config or FontLocateConfig()
        self.google = self.config.google
        self.session = session or self._create_session()

        self._lock = threading.Lock()
        self._directory: list[GoogleFontInfo] | None = None
        self._load_error: FontLocateError | None = None

    def _create_session(self) -> requests.Session:
        """Create HTTP session with appropriate configuration."""
        session = requests.Session()
        session.headers.update({"User-Agent": self.google.user_agent})
        return session

    def load_directory(self) -> list[GoogleFontInfo]:
        """
        Fetch the font directory on first use.

        A failed load is remembered and raised again on every later call.

        Raises:
            MissingApiKeyError: If no API key is configured
            DirectoryLoadError: If the directory cannot be fetched or decoded
        """
        with self._lock:
            if self._load_error is not None:
                raise self._load_error
            if self._directory is not None:
                return self._directory

            try:
                self._directory = self._fetch_directory()
            except FontLocateError as e:
                logger.error(f"Cannot set up Google Fonts directory: {e}")
                self._load_error = e
                raise
            return self._directory

    def _fetch_directory(self) -> list[GoogleFontInfo]:
        logger.info("Setting up Google Fonts service directory")
        api_key = self.google.api_key
        if not api_key:
            raise MissingApiKeyError()

        try:
            response = self.session.get(
                self.google.api_url,
                params={"sort": "alpha", "key": api_key},
                timeout=self.google.timeout_seconds,
            )
        except requests.RequestException as e:
            raise DirectoryLoadError(
                f"Could not get fonts directory from Google Fonts service: {e}"
            ) from e

        if response.status_code != 200:
            raise DirectoryLoadError(
                f"Could not get fonts directory from Google Fonts service "
                f"(status={response.status_code})"
            )

        try:
            items = response.json().get("items", [])
            directory = [GoogleFontInfo.model_validate(item) for item in items]
        except (ValueError, AttributeError) as e:
            raise DirectoryLoadError(
                f"Could not decode fonts list from Google Fonts service: {e}"
            ) from e

        logger.info(f"Transferred list of {len(directory)} fonts from Google Fonts service")
        return directory

    def cache_dir(self, family: str) -> Path:
        """
        Directory a family's files are cached in, created if missing.

        Raises:
            MissingAppKeyError: If neither a cache directory nor an app key is set
        """
        letter = family[:1].upper()
        if self.config.fonts_cache_dir:
            cache_dir = Path(self.config.fonts_cache_dir) / letter
        else:
            if not self.config.app_key:
                raise MissingAppKeyError("the font cache directory")
            cache_dir = user_cache_dir() / self.config.app_key / "fonts" / letter
        cache_dir.mkdir(mode=0o750, parents=True, exist_ok=True)
        return cache_dir

    def cache_font(self, info: GoogleFontInfo, variant: str) -> Path:
        """
        Make sure one variant of a family is in the cache.

        Returns:
            Path of the cached font file

        Raises:
            DownloadError: If the variant has no file or the download fails
        """
        file_url = info.files.get(variant) if variant in info.variants else None
        if not file_url:
            raise DownloadError(info.family, f"no file for variant '{variant}'")

        ext = PurePosixPath(urlparse(file_url).path).suffix
        target_path = self.cache_dir(info.family) / f"{info.family}-{variant}{ext}"
        if target_path.exists():
            logger.info(f"Font already cached: {target_path}")
            return target_path

        logger.info(f"Caching font {info.family} as {target_path}")
        self._download(file_url, target_path)
        return target_path

    def _download(self, url: str, target_path: Path) -> None:
        """Stream `url` into `target_path`; nothing is left behind on failure."""
        with tempfile.NamedTemporaryFile(
            dir=target_path.parent, delete=False, suffix=".tmp"
        ) as temp_file:
            temp_path = Path(temp_file.name)

        try:
            try:
                response = self.session.get(url, stream=True, timeout=self.google.timeout_seconds)
            except requests.RequestException as e:
                raise DownloadError(url, str(e)) from e

            if response.status_code != 200:
                raise DownloadError(url, f"HTTP status {response.status_code}")

            try:
                with temp_path.open("wb") as f:
                    for chunk in response.iter_content(chunk_size=self.google.chunk_size):
                        if chunk:
                            f.write(chunk)
            except requests.RequestException as e:
                raise DownloadError(url, str(e)) from e

            shutil.move(str(temp_path), str(target_path))
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def find_font(
        self,
        pattern: str,
        style: FontStyle,
        weight: int,
        token: CancellationToken | None = None,
    ) -> ScalableFont:
        """
        Find a Google font and make sure it is cached locally.

        Raises:
            ConfigurationError: If the API key or app key is missing
            DirectoryLoadError: If the font directory is unavailable
            InvalidPatternError: If `pattern` is not a valid regular expression
            NoMatchError: If no family variant matches well enough
            DownloadError: If the font file cannot be downloaded
        """
        directory = self.load_directory()
        result = best_match(directory, pattern, style, weight, self.config.min_confidence)
        info = result.location
        logger.debug(f"Found Google font: {info.family} {result.variant}")

        if token is not None:
            token.raise_if_cancelled()

        font_path = self.cache_font(info, result.variant)
        return ScalableFont(
            name=font_path.name,
            style=style,
            weight=weight,
            source=font_path.parent,
            path=font_path.name,
        )

    def __call__(self, token: CancellationToken, descriptor: Descriptor) -> ScalableFont:
        return self.find_font(descriptor.pattern, descriptor.style, descriptor.weight, token)

    def list_fonts(self, pattern: str = "") -> list[GoogleFontInfo]:
        """
        List directory entries whose family matches `pattern`.

        The entries are also written to the log at INFO level.
        """
        directory = self.load_directory()
        regex = compile_pattern(pattern) if pattern.strip() else None

        logger.info(f"{len(directory)} fonts in Google Fonts directory")
        logger.info("======================================")
        listed = []
        for i, info in enumerate(directory):
            if regex is not None and not regex.search(info.family):
                continue
            listed.append(info)
            logger.info(f"[{i:4d}] {info.family:<20}: {info.version}")
            logger.info(f"       subsets: {', '.join(info.subsets)}")
            for variant, url in info.files.items():
                logger.info(f"       - {variant:<18}: {url[-4:]}")
        if not listed and regex is not None:
            logger.info(f"No Google font matches '{pattern}'")
        return listed
