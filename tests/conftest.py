"""
Pytest configuration and fixtures for focus-crop tests.

Provides generated source images, a mock imaging backend and a Flask test
client.
"""

import pytest
from pathlib import Path

from tests.helpers import image_generator as ig
from tests.mocks.mock_backend import MockBackend
from focus_crop.config import FocusCropConfig
from focus_crop.web import AppState, create_app


@pytest.fixture
def quiet_config() -> FocusCropConfig:
    """Default config without timing output."""
    return FocusCropConfig(quiet=True)


@pytest.fixture
def placeholder_jpeg(tmp_path: Path) -> Path:
    """An empty .jpg file - enough for the source checks when decoding is mocked."""
    path = tmp_path / "photo.jpg"
    path.write_bytes(b"")
    return path


@pytest.fixture
def placeholder_png(tmp_path: Path) -> Path:
    """An empty .png file for mocked runs."""
    path = tmp_path / "graphic.png"
    path.write_bytes(b"")
    return path


@pytest.fixture
def mock_backend() -> MockBackend:
    """Mock backend with a 1600x900 source."""
    return MockBackend(dimensions=(1600, 900))


@pytest.fixture
def split_jpeg(tmp_path: Path) -> Path:
    """600x400 JPEG, red on the left half and blue on the right half."""
    return ig.create_split_image(tmp_path / "split.jpg", ig.ImageConfig(600, 400))


@pytest.fixture
def stacked_jpeg(tmp_path: Path) -> Path:
    """400x600 JPEG, red on the top half and blue on the bottom half."""
    return ig.create_stacked_image(tmp_path / "stacked.jpg", ig.ImageConfig(400, 600))


@pytest.fixture
def transparent_png(tmp_path: Path) -> Path:
    """600x400 PNG, opaque red on the left, transparent on the right."""
    return ig.create_transparent_image(tmp_path / "transparent.png", ig.ImageConfig(600, 400, "PNG"))


@pytest.fixture
def api_client():
    """Flask test client plus the state object it reports."""
    state = AppState()
    app = create_app(state)
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield {"client": client, "state": state}
