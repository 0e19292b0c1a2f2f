from __future__ import annotations

import pytest

from printpack.formats import PRINT_FORMATS, get_format, page_size_points


def test_catalog_order_and_dimensions() -> None:
    assert [(f.id, f.width, f.height) for f in PRINT_FORMATS] == [
        ("2x3", 3125, 4687),
        ("3x4", 3515, 4687),
        ("4x5", 3750, 4687),
    ]


def test_get_format() -> None:
    assert get_format("3x4").label == "3:4"
    assert get_format(" 4x5 ").id == "4x5"
    assert get_format("5x7") is None


def test_page_size_is_pixels_at_300_dpi() -> None:
    fmt = get_format("2x3")
    assert fmt.page_size == pytest.approx((750.0, 1124.88))
    assert page_size_points(300, 600) == pytest.approx((72.0, 144.0))


def test_formats_are_immutable() -> None:
    with pytest.raises(AttributeError):
        PRINT_FORMATS[0].width = 1
