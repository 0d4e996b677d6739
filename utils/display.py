"""Presentation helpers shared by the API and the terminal browser."""

import re
from datetime import date, datetime
from typing import Union

BLACK = "#000000"
WHITE = "#ffffff"

_HEX_COLOR = re.compile(r"^[0-9a-fA-F]{6}$")


def label_text_color(hex_color: str) -> str:
    """
    Pick a readable text color for a label background.

    Uses perceived luminance L = (0.299R + 0.587G + 0.114B) / 255 and
    returns black text above 0.5, white otherwise. Anything that is not
    six hex digits (a leading '#' is allowed) falls back to black.

    Examples:
        "ffffff" -> "#000000"
        "000000" -> "#ffffff"
        "fff" -> "#000000"
    """
    value = (hex_color or "").strip().lstrip("#")
    if not _HEX_COLOR.match(value):
        return BLACK

    r = int(value[0:2], 16)
    g = int(value[2:4], 16)
    b = int(value[4:6], 16)
    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255

    return BLACK if luminance > 0.5 else WHITE


def format_date(value: Union[date, datetime], with_time: bool = False) -> str:
    """Format like "Jan 5, 2024" (or "Jan 5, 2024, 03:04 PM" with time)."""
    text = f"{value.strftime('%b')} {value.day}, {value.year}"
    if with_time and isinstance(value, datetime):
        text += f", {value.strftime('%I:%M %p')}"
    return text
