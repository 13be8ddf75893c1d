from pathlib import Path
from typing import Callable

import pytest
from PIL import Image


@pytest.fixture
def write_png(tmp_path: Path) -> Callable[[Image.Image, str], Path]:
    """Save a Pillow image as PNG under tmp_path and return its path."""

    def _write(image: Image.Image, name: str = "image.png") -> Path:
        path = tmp_path / name
        image.save(path, format="PNG")
        return path

    return _write
