"""Request validation. Runs before any image is touched."""
import json
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from printpack.config import (
    ALLOWED_EXTENSIONS,
    DEFAULT_BG_COLOR,
    DEFAULT_FIT_MODE,
    MAX_FILE_SIZE_BYTES,
    MAX_FILE_SIZE_MB,
)
from printpack.exceptions import InvalidRequestError
from printpack.formats import FitMode, PrintFormat, get_format
from printpack.processing.models import SourceImage

logger = logging.getLogger("printpack.validation")

NO_FORMATS_MESSAGE = "No formats selected. Please select at least one print format."
INVALID_FORMATS_MESSAGE = "Invalid format selection."
NO_FILES_MESSAGE = "No files uploaded. Please select at least one image."


@dataclass
class PrintRequest:
    files: list[SourceImage]
    formats: list[PrintFormat]
    fit_mode: FitMode
    bg_color: str


def parse_format_ids(raw: Optional[str]) -> list[str]:
    """Accept a JSON array ('["2x3","4x5"]') or a comma-separated list ('2x3,4x5')."""
    raw = (raw or "").strip()
    if not raw:
        return []
    if raw.startswith("["):
        try:
            parsed = json.loads(raw)
        except ValueError:
            raise InvalidRequestError(INVALID_FORMATS_MESSAGE) from None
        if not isinstance(parsed, list) or not all(isinstance(v, str) for v in parsed):
            raise InvalidRequestError(INVALID_FORMATS_MESSAGE)
        return parsed
    return [f.strip() for f in raw.split(",") if f.strip()]


def resolve_formats(format_ids: Sequence[str]) -> list[PrintFormat]:
    """Known formats in selection order. Unknown ids are dropped, repeats kept once."""
    if not format_ids:
        raise InvalidRequestError(NO_FORMATS_MESSAGE)
    selected: list[PrintFormat] = []
    for format_id in format_ids:
        fmt = get_format(format_id)
        if fmt is None:
            logger.warning("Ignoring unknown format %r", format_id)
            continue
        if fmt not in selected:
            selected.append(fmt)
    if not selected:
        raise InvalidRequestError(INVALID_FORMATS_MESSAGE)
    return selected


def check_file_name(filename: str) -> None:
    ext = SourceImage(filename=filename, data=b"").extension
    if ext not in ALLOWED_EXTENSIONS:
        raise InvalidRequestError(
            f"Unsupported file type: {filename}. Only JPG, PNG, and JFIF files are allowed."
        )


def check_file_size(filename: str, size: int) -> None:
    if size > MAX_FILE_SIZE_BYTES:
        raise InvalidRequestError(f"File too large: {filename}. Maximum size is {MAX_FILE_SIZE_MB} MB.")


def parse_fit_mode(value: Optional[str]) -> FitMode:
    value = (value or "").strip().lower() or DEFAULT_FIT_MODE
    try:
        return FitMode(value)
    except ValueError:
        raise InvalidRequestError(f"Invalid fit mode: {value}. Use 'contain' or 'cover'.") from None


def validate_request(
    format_ids: Sequence[str],
    files: Sequence[SourceImage],
    fit_mode: Optional[str] = None,
    bg_color: Optional[str] = None,
) -> PrintRequest:
    """Check formats, then fit mode, then every file in upload order, then that files exist."""
    formats = resolve_formats(format_ids)
    mode = parse_fit_mode(fit_mode)
    for source in files:
        check_file_name(source.filename)
        check_file_size(source.filename, source.size)
    if not files:
        raise InvalidRequestError(NO_FILES_MESSAGE)
    return PrintRequest(
        files=list(files),
        formats=formats,
        fit_mode=mode,
        bg_color=(bg_color or "").strip() or DEFAULT_BG_COLOR,
    )
