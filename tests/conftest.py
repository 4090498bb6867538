"""
Pytest configuration and fixtures for font location tests.
"""

import os
import tempfile
import threading
from pathlib import Path

import pytest

from fontlocate.core.config import FontLocateConfig
from fontlocate.core.exceptions import NoMatchError
from fontlocate.core.models import Descriptor
from fontlocate.fonts.models import ScalableFont
from fontlocate.fonts.registry import FontRegistry


class RecordingProvider:
    """Provider stub that counts calls and returns a font or raises."""

    def __init__(
        self,
        font: ScalableFont | None = None,
        error: Exception | None = None,
        before=None,
    ):
        self.font = font
        self.error = error
        self.before = before
        self.calls = 0
        self.descriptors: list[Descriptor] = []
        self._lock = threading.Lock()
        self.__name__ = f"recording-{font.name if font else 'failing'}"

    def __call__(self, token, descriptor):
        with self._lock:
            self.calls += 1
            self.descriptors.append(descriptor)
        if self.before is not None:
            self.before(token, descriptor)
        if self.error is not None:
            raise self.error
        if self.font is None:
            raise NoMatchError(descriptor.pattern)
        return self.font


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests independent of the developer's environment and .env file."""
    for name in list(os.environ):
        if name.startswith(("FONTLOCATE_", "GOOGLE_FONTS_")):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg-cache"))


@pytest.fixture
def temp_dir():
    """Create temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def registry():
    """Fresh registry with the packaged fallback font."""
    return FontRegistry()


@pytest.fixture
def make_font(temp_dir):
    """Factory for fonts backed by small files in a temporary directory."""

    def _make_font(name: str, data: bytes = b"\x00\x01\x00\x00font") -> ScalableFont:
        path = f"{name}.ttf"
        (temp_dir / path).write_bytes(data)
        return ScalableFont(name=name, source=temp_dir, path=path)

    return _make_font


@pytest.fixture
def test_config(temp_dir):
    """Configuration that touches only temporary directories."""
    return FontLocateConfig(
        app_key="fontlocate-test",
        fonts_cache_dir=temp_dir / "cache",
        fontlist_path=temp_dir / "no-fontlist.txt",
        enable_google_fonts=False,
    )


@pytest.fixture
def provider_factory():
    """Build recording provider stubs."""
    return RecordingProvider


@pytest.fixture
def descriptor():
    """Plain regular-weight request."""
    return Descriptor(pattern="Noto Sans")


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers."""
    for item in items:
        # Mark slow tests
        if "slow" in item.nodeid or item.get_closest_marker("slow"):
            item.add_marker(pytest.mark.slow)

        # Mark integration tests
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
