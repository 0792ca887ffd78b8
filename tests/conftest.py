"""Shared fixtures: small images generated with Pillow into tmp_path."""

from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from image_wrapper.config import Config

ORIENTATION_TAG = 0x0112

ImageFactory = Callable[..., Path]


@pytest.fixture
def config() -> Config:
    """Packaged default configuration."""
    return Config.default()


@pytest.fixture
def make_image(tmp_path: Path) -> ImageFactory:
    """Write a solid colour image and return its path.

    Optional ``orientation`` stores an EXIF orientation tag (JPEG only).
    """

    def _make(
        name: str = "image.png",
        size: tuple[int, int] = (40, 20),
        color: str | tuple[int, ...] = "red",
        mode: str = "RGB",
        format: str | None = None,
        orientation: int | None = None,
    ) -> Path:
        path = tmp_path / name
        image = Image.new(mode, size, color)
        params = {}
        if orientation is not None:
            exif = Image.Exif()
            exif[ORIENTATION_TAG] = orientation
            params["exif"] = exif
        image.save(path, format=format, **params)
        return path

    return _make


@pytest.fixture
def split_image(tmp_path: Path) -> Callable[..., Path]:
    """Write a 40x20 image, left half red and right half blue."""

    def _make(name: str = "split.png", orientation: int | None = None, format: str | None = None) -> Path:
        path = tmp_path / name
        image = Image.new("RGB", (40, 20), "blue")
        image.paste(Image.new("RGB", (20, 20), "red"), (0, 0))
        params = {}
        if orientation is not None:
            exif = Image.Exif()
            exif[ORIENTATION_TAG] = orientation
            params["exif"] = exif
        image.save(path, format=format, **params)
        return path

    return _make
