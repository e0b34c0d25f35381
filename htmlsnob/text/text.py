from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class TextSize:
    """Opaque measure of text length / index into text."""

    value: int

    def __post_init__(self):
        if self.value < 0:
            raise ValueError("TextSize cannot be negative")

    def __repr__(self) -> str:
        return f"TextSize({self.value})"


@dataclass(frozen=True, slots=True, order=True)
class TextRange:
    """
    Half-open range [start, end) in text, represented by TextSize offsets.

    Invariant:
    - 0 <= start <= end
    """

    _start: int
    _end: int

    def __post_init__(self):
        if self._start < 0 or self._end < 0:
            raise ValueError("TextRange positions cannot be negative")
        if self._start > self._end:
            raise ValueError("TextRange invariant violated: start > end")

    @staticmethod
    def _from_offsets(start: int, end: int) -> "TextRange":
        """Create a TextRange from raw string offsets."""
        return TextRange(start, end)

    @property
    def start(self) -> TextSize:
        """Get the start offset as a TextSize."""
        return TextSize(self._start)

    @property
    def end(self) -> TextSize:
        """Get the end offset as a TextSize."""
        return TextSize(self._end)

    def contains(self, offset: TextSize) -> bool:
        """Check if the range contains the given offset."""
        return self._start <= offset.value < self._end

    def __repr__(self) -> str:
        return f"TextRange({self._start}, {self._end})"


def slice_text_range(source: str, range: TextRange) -> str:
    """Get the substring of the source text covered by the given TextRange.

    Coord system matches python string indices so we can just do this.
    """
    return source[range.start.value : range.end.value]


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Zero-based line/column pair. Columns count characters, not bytes."""

    line: int
    column: int

    def __repr__(self) -> str:
        return f"Position({self.line}, {self.column})"


class LineIndex:
    """Offset <-> line/column lookup for one source text.

    Recognizes `\\n`, `\\r\\n` and a lone `\\r` as line terminators, same as
    `str.splitlines` does for those three.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        starts = [0]
        index = 0
        length = len(source)
        while index < length:
            ch = source[index]
            if ch == "\n":
                starts.append(index + 1)
            elif ch == "\r":
                if index + 1 < length and source[index + 1] == "\n":
                    index += 1
                starts.append(index + 1)
            index += 1
        self._line_starts = starts

    @property
    def source(self) -> str:
        return self._source

    def position(self, offset: int | TextSize) -> Position:
        value = offset.value if isinstance(offset, TextSize) else offset
        value = max(0, min(value, len(self._source)))
        line = bisect_right(self._line_starts, value) - 1
        return Position(line, value - self._line_starts[line])

    def utf16_column(self, position: Position) -> int:
        """Column of `position` in UTF-16 code units, as editors count them."""
        text = self.line_text(position.line)[: position.column]
        return position.column + sum(1 for ch in text if ord(ch) > 0xFFFF)

    def line_text(self, line: int) -> str:
        """Text of `line` without its terminator; empty for out-of-range lines."""
        if line < 0 or line >= len(self._line_starts):
            return ""
        start = self._line_starts[line]
        end = self._line_starts[line + 1] if line + 1 < len(self._line_starts) else len(self._source)
        return self._source[start:end].rstrip("\r\n")
