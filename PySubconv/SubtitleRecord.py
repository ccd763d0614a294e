from __future__ import annotations

from PySubconv.StyledLine import StyledLine
from PySubconv.TimeCode import TimeCode

class SubtitleRecord:
    """
    One caption: a number, start and end times, an optional SRT position string and styled display lines.

    The number is expected to be the 1-based position of the record in its sequence,
    but parsers keep whatever the file said so that the validator can report gaps.
    """
    def __init__(self, number : int, start : TimeCode, end : TimeCode, lines : list[StyledLine]|None = None, position : str|None = None):
        self.number : int = number
        self.start : TimeCode = start
        self.end : TimeCode = end
        self.lines : list[StyledLine] = lines or []
        self.position : str|None = position

    @property
    def duration(self) -> float:
        return self.end.time - self.start.time

    @property
    def linecount(self) -> int:
        return len(self.lines)

    @property
    def text(self) -> str:
        return '\n'.join(line.text for line in self.lines)

    def __repr__(self) -> str:
        return f"SubtitleRecord({self.number}, {self.start}, {self.end}, {self.text!r})"
