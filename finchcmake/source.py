"""Source text with line and column lookup."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class SourceLocation:
    """A position in a source file; lines and columns count from 1."""

    file: str = ""
    line: int = 0
    column: int = 0
    offset: int = 0

    def is_valid(self) -> bool:
        return bool(self.file) and self.line > 0 and self.column > 0

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


class SourceBuffer:
    """Holds source text and maps offsets to lines and columns."""

    def __init__(self, content: str, filename: str) -> None:
        self.content = content
        self.filename = filename
        self._line_starts: List[int] = self._compute_line_starts(content)

    @staticmethod
    def _compute_line_starts(content: str) -> List[int]:
        starts = [0]
        starts.extend(i + 1 for i, ch in enumerate(content) if ch == "\n")
        return starts

    def at(self, pos: int) -> str:
        """Character at ``pos``, or ``'\\0'`` past the end."""
        if 0 <= pos < len(self.content):
            return self.content[pos]
        return "\0"

    def slice(self, start: int, end: int) -> str:
        """Text from ``start`` up to ``end``, clipped to the buffer."""
        if start < 0 or end < 0:
            raise ValueError("offsets must not be negative")
        if start >= len(self.content):
            return ""
        if end < start:
            # An inverted range runs to the end of the text.
            return self.content[start:]
        return self.content[start:min(end, len(self.content))]

    def location_at(self, offset: int) -> SourceLocation:
        line, column = self.line_column_at(offset)
        return SourceLocation(self.filename, line, column, offset)

    def line_column_at(self, offset: int) -> Tuple[int, int]:
        """1-based line and column for an offset."""
        if offset < 0:
            raise ValueError("offset must not be negative")
        index = bisect_right(self._line_starts, offset) - 1
        return index + 1, offset - self._line_starts[index] + 1

    def line_content(self, line_number: int) -> str:
        """Text of a 1-based line without its line ending; empty if out of range."""
        if line_number < 1 or line_number > len(self._line_starts):
            return ""
        start = self._line_starts[line_number - 1]
        if line_number < len(self._line_starts):
            end = self._line_starts[line_number] - 1
        else:
            end = len(self.content)
        text = self.content[start:end]
        return text[:-1] if text.endswith("\r") else text

    def line_count(self) -> int:
        return len(self._line_starts)

    def __len__(self) -> int:
        return len(self.content)

    def is_valid_offset(self, offset: int) -> bool:
        return 0 <= offset < len(self.content)