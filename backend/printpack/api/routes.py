"""API routes for building print packages."""
import logging
from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from printpack.config import ALLOWED_EXTENSIONS, ARCHIVE_FILENAME, MAX_FILE_SIZE_BYTES, MAX_FILE_SIZE_MB
from printpack.formats import PRINT_FORMATS
from printpack.processing.archive import get_package_builder
from printpack.processing.models import ProgressEvent, SourceImage
from printpack.validation import (
    check_file_name,
    check_file_size,
    parse_fit_mode,
    parse_format_ids,
    resolve_formats,
    validate_request,
)

logger = logging.getLogger("printpack.api")
router = APIRouter(prefix="/api", tags=["printpack"])

CHUNK_SIZE = 1024 * 1024


async def _read_upload(file: UploadFile) -> SourceImage:
    """Read an upload into memory, stopping as soon as it passes the size limit."""
    filename = file.filename or ""
    check_file_name(filename)
    data = bytearray()
    while chunk := await file.read(CHUNK_SIZE):
        data.extend(chunk)
        check_file_size(filename, len(data))
    return SourceImage(filename=filename, data=bytes(data))


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/limits")
def get_limits():
    """Upload limits for the client."""
    return {
        "allowed_extensions": sorted(ALLOWED_EXTENSIONS),
        "max_file_size_mb": MAX_FILE_SIZE_MB,
        "max_file_size_bytes": MAX_FILE_SIZE_BYTES,
    }


@router.get("/formats")
def get_formats():
    return {"formats": [f.to_dict() for f in PRINT_FORMATS]}


@router.post("/process")
async def process(
    files: Optional[list[UploadFile]] = File(None),
    formats: Optional[str] = Form(None, description='JSON array or comma-separated ids, e.g. ["2x3","4x5"]'),
    fit_mode: Optional[str] = Form(None, alias="fitMode", description="contain | cover"),
    bg_color: Optional[str] = Form(None, alias="bgColor", description="Hex background for contain, e.g. #FFFFFF"),
):
    """Resize every upload to every selected print format and return one zip."""
    # formats and fit mode are checked before any upload is read, as in validate_request
    resolve_formats(parse_format_ids(formats))
    parse_fit_mode(fit_mode)

    sources: list[SourceImage] = []
    for file in files or []:
        sources.append(await _read_upload(file))

    request = validate_request(parse_format_ids(formats), sources, fit_mode, bg_color)
    logger.info(
        "Processing %s file(s) for formats %s (fit=%s, bg=%s)",
        len(request.files),
        ",".join(f.id for f in request.formats),
        request.fit_mode.value,
        request.bg_color,
    )

    logs: list[str] = []

    def on_progress(event: ProgressEvent) -> None:
        logs.append(event.message)

    zip_bytes = await run_in_threadpool(
        get_package_builder().build,
        request.files,
        request.formats,
        request.fit_mode,
        request.bg_color,
        on_progress,
    )
    logger.info("Built %s (%s bytes, %s progress steps)", ARCHIVE_FILENAME, len(zip_bytes), len(logs))
    return Response(
        content=zip_bytes,
        media_type="application/zip",
        headers={
            "Content-Disposition": f'attachment; filename="{ARCHIVE_FILENAME}"',
            "Content-Length": str(len(zip_bytes)),
        },
    )
