"""Background colour parsing."""
import re
from typing import Optional, Tuple

RGB = Tuple[int, int, int]

WHITE: RGB = (255, 255, 255)

_HEX_COLOR = re.compile(r"#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})", re.IGNORECASE)


def resolve_color(value: Optional[str]) -> RGB:
    """Parse #RRGGBB (or RRGGBB) to (r, g, b). White if invalid."""
    if not isinstance(value, str):
        return WHITE
    m = _HEX_COLOR.fullmatch(value)
    if not m:
        return WHITE
    return (int(m.group(1), 16), int(m.group(2), 16), int(m.group(3), 16))
