"""Text coordinates."""

from htmlsnob.text.text import (
    LineIndex,
    Position,
    TextRange,
    TextSize,
    slice_text_range,
)

__all__ = [
    "LineIndex",
    "Position",
    "TextRange",
    "TextSize",
    "slice_text_range",
]
