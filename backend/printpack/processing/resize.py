"""Resize an image onto a fixed print canvas with contain (pad) or cover (crop)."""
import io
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

from printpack.config import JPEG_QUALITY
from printpack.exceptions import ImageDecodeError
from printpack.formats import FitMode
from printpack.processing.color import RGB, WHITE

logger = logging.getLogger("printpack.resize")


def _flatten(img: Image.Image, background: RGB) -> Image.Image:
    """Convert to RGB, compositing any transparency onto background."""
    if img.mode == "P" and "transparency" in img.info:
        img = img.convert("RGBA")
    if img.mode in ("RGBA", "LA", "PA"):
        rgba = img.convert("RGBA")
        out = Image.new("RGB", rgba.size, background)
        out.paste(rgba, mask=rgba.getchannel("A"))
        return out
    if img.mode.startswith("I"):
        # 16-bit greyscale PNGs; scale to 8 bits instead of clipping at 255
        img = img.convert("I").point(lambda v: v * (1 / 256)).convert("L")
    if img.mode != "RGB":
        return img.convert("RGB")
    return img


def fit_to_canvas(
    img: Image.Image,
    target_width: int,
    target_height: int,
    fit_mode: FitMode = FitMode.CONTAIN,
    background: RGB = WHITE,
) -> Image.Image:
    """
    Produce an RGB image of exactly (target_width, target_height).
    - contain: scale to fit inside target, pad remainder with background.
    - cover: scale to cover target, centre-crop the overflow.
    """
    img = _flatten(img, background)
    w, h = img.size
    tw, th = target_width, target_height
    if w == tw and h == th:
        return img.copy()

    if fit_mode == FitMode.COVER:
        scale = max(tw / w, th / h)
        # never fall short of the canvas through float rounding
        new_w, new_h = max(tw, round(w * scale)), max(th, round(h * scale))
        resized = img.resize((new_w, new_h), Image.Resampling.LANCZOS)
        left = (new_w - tw) // 2
        top = (new_h - th) // 2
        return resized.crop((left, top, left + tw, top + th))

    scale = min(tw / w, th / h)
    new_w = min(tw, max(1, round(w * scale)))
    new_h = min(th, max(1, round(h * scale)))
    resized = img.resize((new_w, new_h), Image.Resampling.LANCZOS)
    out = Image.new("RGB", (tw, th), background)
    out.paste(resized, ((tw - new_w) // 2, (th - new_h) // 2))
    return out


def resize_image(
    data: bytes,
    width: int,
    height: int,
    fit_mode: FitMode,
    background: RGB = WHITE,
    filename: Optional[str] = None,
) -> bytes:
    """Decode data, fit it to width x height and return JPEG bytes."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            work = fit_to_canvas(img, width, height, FitMode(fit_mode), background)
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
        # truncated or corrupt payloads surface as OSError from the decoder
        logger.warning("Could not decode %s: %s", filename or "image", e)
        raise ImageDecodeError(filename) from e

    out = io.BytesIO()
    work.save(out, format="JPEG", quality=JPEG_QUALITY)
    logger.debug("Resized %s to %sx%s (%s)", filename or "image", width, height, FitMode(fit_mode).value)
    return out.getvalue()
