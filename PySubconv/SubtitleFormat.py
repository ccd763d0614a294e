from __future__ import annotations
from enum import Enum

from PySubconv.SubtitleError import SubtitleError

class SubtitleFormat(Enum):
    """
    The two subtitle formats that can be read and written.

    SUB is the frame-indexed `{start}{end}text|text` format (also known as MicroDVD, or TXT),
    SRT is the numbered, timecode-indexed block format.
    """
    SUB = 'sub'
    SRT = 'srt'

    @property
    def extension(self) -> str:
        return f".{self.value}"

    @property
    def opposite(self) -> SubtitleFormat:
        return SubtitleFormat.SRT if self is SubtitleFormat.SUB else SubtitleFormat.SUB

    @classmethod
    def Parse(cls, name : str|SubtitleFormat) -> SubtitleFormat:
        """
        Get the format from a name or file extension, e.g. 'srt', '.sub' or 'TXT'
        """
        if isinstance(name, SubtitleFormat):
            return name

        key = str(name).strip().lower().lstrip('.')
        if key in ('sub', 'txt'):
            return cls.SUB
        if key == 'srt':
            return cls.SRT

        raise SubtitleError(f"Unknown subtitle format '{name}', expected one of sub, txt, srt")
