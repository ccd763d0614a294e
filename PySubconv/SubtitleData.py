from __future__ import annotations

from typing import Any

from PySubconv.SubtitleFormat import SubtitleFormat
from PySubconv.SubtitleRecord import SubtitleRecord


class SubtitleData:
    """
    Format-agnostic container for a parsed subtitle sequence and file-level metadata.

    Attributes:
        records (list[SubtitleRecord]): Subtitle records in document order
        metadata (dict[str, Any]): File-level metadata collected while loading
        detected_format (SubtitleFormat|None): The format the records were parsed from
        encoding (str|None): The encoding the input was decoded with
    """

    def __init__(self, records : list[SubtitleRecord]|None = None, metadata : dict[str, Any]|None = None, detected_format : SubtitleFormat|None = None, encoding : str|None = None):
        self.records : list[SubtitleRecord] = records or []
        self.metadata : dict[str, Any] = metadata or {}
        self.detected_format : SubtitleFormat|None = detected_format
        self.encoding : str|None = encoding

    @property
    def count(self) -> int:
        """ Number of subtitle records """
        return len(self.records)
