from __future__ import annotations

import io

import pytest
from PIL import Image

from printpack.exceptions import ImageDecodeError
from printpack.formats import FitMode
from printpack.processing.resize import fit_to_canvas, resize_image

RED = (200, 30, 30)
BLUE = (0, 0, 255)


def _open(data: bytes) -> Image.Image:
    img = Image.open(io.BytesIO(data))
    img.load()
    return img


def _close_to(pixel: tuple, expected: tuple, tolerance: int = 40) -> bool:
    return all(abs(a - b) <= tolerance for a, b in zip(pixel, expected))


@pytest.mark.parametrize("fit_mode", [FitMode.CONTAIN, FitMode.COVER])
@pytest.mark.parametrize("source_size", [(80, 40), (30, 90), (31, 47), (1, 1), (997, 13)])
def test_output_has_exact_target_size(image_factory, fit_mode, source_size) -> None:
    data = resize_image(image_factory(*source_size), 31, 47, fit_mode, BLUE)

    img = _open(data)
    assert img.format == "JPEG"
    assert img.size == (31, 47)
    assert img.mode == "RGB"


def test_contain_pads_with_background(image_factory) -> None:
    # 80x40 into 40x60 scales to 40x20, centred vertically
    img = _open(resize_image(image_factory(80, 40, RED), 40, 60, FitMode.CONTAIN, BLUE))

    assert _close_to(img.getpixel((20, 3)), BLUE)
    assert _close_to(img.getpixel((20, 56)), BLUE)
    assert _close_to(img.getpixel((20, 30)), RED)


def test_contain_keeps_whole_source_visible() -> None:
    # a green stripe on each edge of the source must survive
    src = Image.new("RGB", (100, 50), RED)
    for x in range(100):
        for y in (0, 1, 2, 3, 46, 47, 48, 49):
            src.putpixel((x, y), (0, 200, 0))
    out = fit_to_canvas(src, 100, 150, FitMode.CONTAIN, BLUE)

    # source occupies rows 50..99 of the canvas
    assert _close_to(out.getpixel((50, 51)), (0, 200, 0))
    assert _close_to(out.getpixel((50, 98)), (0, 200, 0))
    assert _close_to(out.getpixel((50, 20)), BLUE, tolerance=5)


def test_cover_fills_canvas_without_padding(image_factory) -> None:
    img = _open(resize_image(image_factory(80, 40, RED), 40, 60, FitMode.COVER, BLUE))

    for xy in [(0, 0), (39, 0), (0, 59), (39, 59), (20, 30)]:
        assert _close_to(img.getpixel(xy), RED)


def test_cover_crops_centre() -> None:
    # left half black, right half white; cropping the centre keeps both
    src = Image.new("RGB", (200, 100), (0, 0, 0))
    src.paste((255, 255, 255), (100, 0, 200, 100))
    out = fit_to_canvas(src, 50, 100, FitMode.COVER)

    assert out.size == (50, 100)
    assert _close_to(out.getpixel((5, 50)), (0, 0, 0))
    assert _close_to(out.getpixel((45, 50)), (255, 255, 255))


def test_transparency_is_flattened_onto_background(image_factory) -> None:
    data = image_factory(20, 20, (255, 0, 0, 0), mode="RGBA", fmt="PNG")

    img = _open(resize_image(data, 20, 30, FitMode.CONTAIN, (0, 180, 0)))

    assert _close_to(img.getpixel((10, 15)), (0, 180, 0))


def test_resize_is_deterministic(image_factory) -> None:
    data = image_factory(64, 48)

    first = resize_image(data, 40, 60, FitMode.CONTAIN, BLUE)
    second = resize_image(data, 40, 60, FitMode.CONTAIN, BLUE)

    assert first == second


def test_fit_mode_accepts_plain_strings(image_factory) -> None:
    assert _open(resize_image(image_factory(), 10, 20, "cover")).size == (10, 20)


def test_undecodable_input_raises_decode_error() -> None:
    with pytest.raises(ImageDecodeError) as exc_info:
        resize_image(b"definitely not an image", 40, 60, FitMode.CONTAIN, filename="notes.jpg")

    assert exc_info.value.status_code == 400
    assert exc_info.value.filename == "notes.jpg"
    assert "notes.jpg" in exc_info.value.message


def test_truncated_input_raises_decode_error(image_factory) -> None:
    data = image_factory(200, 200)[:300]

    with pytest.raises(ImageDecodeError):
        resize_image(data, 40, 60, FitMode.COVER, filename="cut.jpg")


def test_sixteen_bit_greyscale_png_keeps_its_tone() -> None:
    src = Image.new("I;16", (20, 30), 32768)
    buf = io.BytesIO()
    src.save(buf, format="PNG")

    img = _open(resize_image(buf.getvalue(), 20, 30, FitMode.COVER, BLUE))

    assert _close_to(img.getpixel((10, 15)), (128, 128, 128), tolerance=10)
