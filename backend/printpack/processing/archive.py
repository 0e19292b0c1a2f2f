"""Assemble resized images and PDFs for every selected format into one zip."""
import io
import logging
import zipfile
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Sequence

from printpack.config import DEFAULT_BG_COLOR, MAX_WORKERS, MERGED_PDF_NAME, ZIP_COMPRESSION_LEVEL
from printpack.exceptions import ArchiveError
from printpack.formats import FitMode, PrintFormat
from printpack.processing.color import resolve_color
from printpack.processing.models import ProgressEvent, ProgressStage, ResizedImage, SourceImage
from printpack.processing.pdf import build_format_pdf, merge_pdfs
from printpack.processing.resize import resize_image

logger = logging.getLogger("printpack.archive")

ProgressCallback = Callable[[ProgressEvent], None]


class ArchiveWriter:
    """
    In-memory zip that entries are appended to one at a time.

    finalize() closes the container exactly once and returns its bytes;
    the archive is not usable as a download before that.
    """

    def __init__(self, compresslevel: int = ZIP_COMPRESSION_LEVEL):
        self._buffer = io.BytesIO()
        self._zip = zipfile.ZipFile(
            self._buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=compresslevel
        )
        self._entries: list[str] = []
        self._data: Optional[bytes] = None

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def finalized(self) -> bool:
        return self._data is not None

    def append(self, name: str, data: bytes) -> None:
        if self.finalized:
            raise ArchiveError(f"cannot add {name} after the archive was finalized")
        if name in self._entries:
            raise ArchiveError(f"duplicate entry {name}")
        self._zip.writestr(name, data)
        self._entries.append(name)
        logger.debug("Added %s (%s bytes)", name, len(data))

    def finalize(self) -> bytes:
        if self.finalized:
            raise ArchiveError("archive already finalized")
        self._zip.close()
        self._data = self._buffer.getvalue()
        self._buffer.close()
        logger.info("Finalized archive with %s entries (%s bytes)", len(self._entries), len(self._data))
        return self._data

    def close(self) -> None:
        """Release the buffer without producing output (used on failure)."""
        if not self.finalized:
            self._zip.close()
            self._buffer.close()


def unique_basenames(files: Sequence[SourceImage]) -> list[str]:
    """Basenames in upload order; repeats get a -2, -3 ... suffix so entries never collide."""
    used: set[str] = set()
    names: list[str] = []
    for source in files:
        base = name = source.basename
        n = 1
        while name.lower() in used:
            n += 1
            name = f"{base}-{n}"
        used.add(name.lower())
        names.append(name)
    return names


class PrintPackageBuilder:
    """Runs resize -> PDF -> merge for all formats and streams results into one zip."""

    def __init__(self, max_workers: int = MAX_WORKERS):
        self.max_workers = max(1, max_workers)
        self._executor = ThreadPoolExecutor(max_workers=self.max_workers) if self.max_workers > 1 else None
        logger.info("PrintPackageBuilder initialized with max_workers=%s", self.max_workers)

    @staticmethod
    def _emit(on_progress: Optional[ProgressCallback], event: ProgressEvent) -> None:
        logger.info(event.message)
        if on_progress is None:
            return
        try:
            on_progress(event)
        except Exception as e:
            logger.warning("Progress callback failed for %r: %s", event.message, e)

    def _resize_all(
        self,
        files: Sequence[SourceImage],
        basenames: Sequence[str],
        fmt: PrintFormat,
        fit_mode: FitMode,
        bg_color: str,
    ):
        """Yield ResizedImage per file in upload order. Work may run ahead on the pool."""
        background = resolve_color(bg_color)

        def work(source: SourceImage, basename: str) -> ResizedImage:
            data = resize_image(source.data, fmt.width, fmt.height, fit_mode, background, filename=source.filename)
            return ResizedImage(filename=f"{basename}_{fmt.id}.jpg", data=data, width=fmt.width, height=fmt.height)

        if self._executor is None or len(files) < 2:
            for source, basename in zip(files, basenames):
                yield work(source, basename)
            return
        # map() returns results in submission order
        yield from self._executor.map(work, files, basenames)

    def build(
        self,
        files: Sequence[SourceImage],
        formats: Sequence[PrintFormat],
        fit_mode: FitMode = FitMode.CONTAIN,
        bg_color: str = DEFAULT_BG_COLOR,
        on_progress: Optional[ProgressCallback] = None,
    ) -> bytes:
        """
        Build the print package and return the finalized zip bytes.

        Layout:
          {format}/{basename}_{format}.jpg   per file, per format
          {format}.pdf                       per format
          merged.pdf                         only if more than one format
        """
        fit_mode = FitMode(fit_mode)
        archive = ArchiveWriter()
        documents: list[bytes] = []
        total = len(files)
        basenames = unique_basenames(files)
        try:
            for fmt in formats:
                resized_images: list[bytes] = []
                results = self._resize_all(files, basenames, fmt, fit_mode, bg_color)
                for i, source in enumerate(files, start=1):
                    self._emit(on_progress, ProgressEvent(
                        stage=ProgressStage.RESIZE,
                        message=f"[{fmt.label}] Resizing {source.filename} ({i}/{total})...",
                        format_id=fmt.id,
                        filename=source.filename,
                        current=i,
                        total=total,
                    ))
                    resized = next(results)
                    archive.append(f"{fmt.id}/{resized.filename}", resized.data)
                    resized_images.append(resized.data)

                self._emit(on_progress, ProgressEvent(
                    stage=ProgressStage.PDF,
                    message=f"[{fmt.label}] Creating PDF...",
                    format_id=fmt.id,
                ))
                pdf_bytes = build_format_pdf(resized_images, fmt.width, fmt.height, format_id=fmt.id)
                archive.append(f"{fmt.id}.pdf", pdf_bytes)
                documents.append(pdf_bytes)

            if len(documents) > 1:
                self._emit(on_progress, ProgressEvent(
                    stage=ProgressStage.MERGE,
                    message=f"Merging all PDFs into {MERGED_PDF_NAME}...",
                ))
                archive.append(MERGED_PDF_NAME, merge_pdfs(documents))

            self._emit(on_progress, ProgressEvent(
                stage=ProgressStage.FINALIZE,
                message="All processing complete! Preparing download...",
            ))
            return archive.finalize()
        except Exception:
            archive.close()
            raise


# Singleton
_package_builder: Optional[PrintPackageBuilder] = None


def get_package_builder() -> PrintPackageBuilder:
    global _package_builder
    if _package_builder is None:
        _package_builder = PrintPackageBuilder()
    return _package_builder
