"""Print format catalog and fit modes."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from printpack.config import SOURCE_DPI


class FitMode(str, Enum):
    CONTAIN = "contain"  # pad with background colour
    COVER = "cover"  # centre crop


@dataclass(frozen=True)
class PrintFormat:
    id: str
    label: str
    ratio: str
    width: int  # pixels
    height: int  # pixels

    @property
    def page_size(self) -> tuple[float, float]:
        return page_size_points(self.width, self.height)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "ratio": self.ratio,
            "width": self.width,
            "height": self.height,
        }


PRINT_FORMATS: tuple[PrintFormat, ...] = (
    PrintFormat(id="2x3", label="2:3", ratio="2:3", width=3125, height=4687),
    PrintFormat(id="3x4", label="3:4", ratio="3:4", width=3515, height=4687),
    PrintFormat(id="4x5", label="4:5", ratio="4:5", width=3750, height=4687),
)


def page_size_points(width: int, height: int) -> tuple[float, float]:
    """Pixel dimensions to PDF points for images printed at SOURCE_DPI."""
    return (width / SOURCE_DPI * 72, height / SOURCE_DPI * 72)


_FORMATS_BY_ID = {f.id: f for f in PRINT_FORMATS}


def get_format(format_id: str) -> Optional[PrintFormat]:
    return _FORMATS_BY_ID.get((format_id or "").strip())
