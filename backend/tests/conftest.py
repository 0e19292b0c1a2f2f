from __future__ import annotations

import io
from typing import Callable

import pytest
from PIL import Image

from printpack.formats import PrintFormat
from printpack.processing.models import SourceImage

ImageFactory = Callable[..., bytes]


@pytest.fixture()
def image_factory() -> ImageFactory:
    def _create(
        width: int = 60,
        height: int = 40,
        color: tuple = (200, 30, 30),
        mode: str = "RGB",
        fmt: str = "JPEG",
    ) -> bytes:
        img = Image.new(mode, (width, height), color)
        out = io.BytesIO()
        img.save(out, format=fmt)
        return out.getvalue()

    return _create


@pytest.fixture()
def small_formats() -> list[PrintFormat]:
    """Tiny stand-ins for the print catalog so pipeline tests stay fast."""
    return [
        PrintFormat(id="s2x3", label="S 2:3", ratio="2:3", width=40, height=60),
        PrintFormat(id="s3x4", label="S 3:4", ratio="3:4", width=45, height=60),
        PrintFormat(id="s4x5", label="S 4:5", ratio="4:5", width=48, height=60),
    ]


@pytest.fixture()
def sources(image_factory: ImageFactory) -> list[SourceImage]:
    return [
        SourceImage(filename="beach.jpg", data=image_factory(80, 40)),
        SourceImage(filename="portrait.png", data=image_factory(30, 90, fmt="PNG")),
    ]
