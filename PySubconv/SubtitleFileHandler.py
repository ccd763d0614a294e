from abc import ABC, abstractmethod
import logging

import regex

from PySubconv.Options import Options
from PySubconv.SubtitleData import SubtitleData
from PySubconv.SubtitleError import SubtitleParseError
from PySubconv.SubtitleFormat import SubtitleFormat


class SubtitleFileHandler(ABC):
    """
    Abstract interface for reading and writing subtitle files.

    Implementations handle format-specific parsing and composition while validation,
    duration adjustment and shifting remain format-agnostic.
    """

    FORMAT : SubtitleFormat
    SUPPORTED_EXTENSIONS: dict[str, int] = {}

    def __init__(self, options : Options|None = None):
        self.options : Options = options or Options()

    @abstractmethod
    def parse_string(self, content: str) -> SubtitleData:
        """
        Parse subtitle string content and return the records with file-level metadata.

        Returns:
            SubtitleData: Parsed subtitle records and metadata

        Raises:
            SubtitleParseError: If parsing fails and errors are not being ignored
        """
        raise NotImplementedError

    @abstractmethod
    def compose(self, data: SubtitleData) -> str:
        """
        Compose subtitle records into text for saving.

        Args:
            data: SubtitleData containing the subtitle records

        Returns:
            str: Subtitle content in the file handler's format
        """
        raise NotImplementedError

    def get_file_extensions(self) -> list[str]:
        """
        Get file extensions supported by this handler.
        """
        return list(self.__class__.SUPPORTED_EXTENSIONS.keys())

    def get_extension_priorities(self) -> dict[str, int]:
        """
        Get priority for each supported extension.

        Returns:
            dict: Mapping of file extensions to their priority (higher = more preferred)
        """
        return self.__class__.SUPPORTED_EXTENSIONS.copy()

    def _parse_error(self, message : str, line_number : int|None = None) -> None:
        """
        Raise a parse error, or log it and carry on if errors are being ignored
        """
        error = SubtitleParseError(message, line_number=line_number)
        if not self.options.ignore_errors:
            raise error

        logging.error(str(error))

    _NEWLINE_PATTERN = regex.compile(r'\r\n|\r|\n')

    def _split_lines(self, content : str) -> list[str]:
        """
        Split content into physical lines, ignoring a leading BOM.

        Only CR, LF and CRLF end a line. Other Unicode separators such as NEL (which latin-1
        decodes from the cp1252 ellipsis) are part of the caption text.
        """
        lines = self._NEWLINE_PATTERN.split(content.lstrip('\ufeff'))
        if lines and not lines[-1]:
            lines.pop()
        return lines
