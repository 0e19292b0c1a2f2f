"""Exception classes for the print package pipeline."""
from typing import Optional


class PrintPackError(Exception):
    """Base exception for pipeline errors. Carries the HTTP status to report."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class InvalidRequestError(PrintPackError):
    """Raised when the request is rejected before any processing starts."""

    def __init__(self, message: str):
        super().__init__(message=message, status_code=400)


class ImageDecodeError(PrintPackError):
    """Raised when an uploaded file cannot be decoded as an image."""

    def __init__(self, filename: Optional[str] = None, reason: Optional[str] = None):
        name = filename or "image"
        message = f"Could not process {name}: not a readable image."
        if reason:
            message = f"Could not process {name}: {reason}"
        super().__init__(message=message, status_code=400)
        self.filename = filename


class DocumentBuildError(PrintPackError):
    """Raised when a format PDF cannot be built from the resized images."""

    def __init__(self, message: str, format_id: Optional[str] = None):
        prefix = f"PDF creation failed for {format_id}" if format_id else "PDF creation failed"
        super().__init__(message=f"{prefix}: {message}", status_code=500)
        self.format_id = format_id


class DocumentMergeError(PrintPackError):
    """Raised when the per-format PDFs cannot be merged."""

    def __init__(self, message: str):
        super().__init__(message=f"PDF merge failed: {message}", status_code=500)


class ArchiveError(PrintPackError):
    """Raised on misuse or failure of the output archive."""

    def __init__(self, message: str):
        super().__init__(message=f"Archive error: {message}", status_code=500)
