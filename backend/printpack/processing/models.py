"""In-memory artifacts passed between pipeline stages."""
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath, PureWindowsPath
from typing import Optional


class ProgressStage(str, Enum):
    RESIZE = "resize"
    PDF = "pdf"
    MERGE = "merge"
    FINALIZE = "finalize"


@dataclass
class SourceImage:
    """One uploaded file. Only lives for the duration of a single build."""

    filename: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        return PurePosixPath(self._name).suffix.lower()

    @property
    def basename(self) -> str:
        """Filename without its last extension. Dotfiles keep their full name."""
        name = self._name
        dot = name.rfind(".")
        return name[:dot] if dot > 0 else name

    @property
    def _name(self) -> str:
        # Browsers may send full client paths (old IE, some Windows clients)
        return PureWindowsPath(self.filename or "").name or "image"


@dataclass
class ResizedImage:
    filename: str  # {basename}_{formatId}.jpg
    data: bytes
    width: int
    height: int


@dataclass
class ProgressEvent:
    stage: ProgressStage
    message: str
    format_id: Optional[str] = None
    filename: Optional[str] = None
    current: Optional[int] = None
    total: Optional[int] = None
