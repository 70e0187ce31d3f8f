"""Pytest configuration for repository test runs."""

from __future__ import annotations

import base64
import io
import sys
from pathlib import Path
from typing import Callable

import pytest
from PIL import Image


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


def _encode_image(image: Image.Image, pil_format: str) -> str:
    buffer = io.BytesIO()
    image.save(buffer, format=pil_format)
    return base64.b64encode(buffer.getvalue()).decode("ascii")


@pytest.fixture
def red_png_payload() -> str:
    """Base64 of a 2x2 all-red PNG."""
    return _encode_image(Image.new("RGB", (2, 2), (255, 0, 0)), "PNG")


@pytest.fixture
def jpeg_payload() -> str:
    """Base64 of a small solid-color JPEG."""
    return _encode_image(Image.new("RGB", (8, 8), (0, 128, 255)), "JPEG")


@pytest.fixture
def gif_payload() -> str:
    """Base64 of a small palette GIF."""
    return _encode_image(Image.new("P", (4, 4), 3), "GIF")


@pytest.fixture
def bmp_payload() -> str:
    """Base64 of a small BMP."""
    return _encode_image(Image.new("RGB", (3, 3), (10, 20, 30)), "BMP")


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper writing CSV text into ``tmp_path/input.csv``."""

    def _write(text: str) -> Path:
        csv_path = tmp_path / "input.csv"
        csv_path.write_text(text, encoding="utf-8")
        return csv_path

    return _write
