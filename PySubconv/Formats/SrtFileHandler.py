import logging
from enum import Enum, auto

import regex

from PySubconv.StyledLine import StyledLine, style_names
from PySubconv.SubtitleData import SubtitleData
from PySubconv.SubtitleFileHandler import SubtitleFileHandler
from PySubconv.SubtitleFormat import SubtitleFormat
from PySubconv.SubtitleRecord import SubtitleRecord
from PySubconv.TimeCode import TimeCode

class SrtParseState(Enum):
    ExpectNumber = auto()
    ExpectTimecode = auto()
    ExpectBody = auto()

# Separators that a well-formed "HH:MM:SS,mmm --> HH:MM:SS,mmm" line has at fixed columns
_timecode_separators : dict[int, str] = { 2: ':', 5: ':', 8: ',', 19: ':', 22: ':', 25: ',' }
_timecode_arrow = (12, ' --> ')
_timecode_fields : list[tuple[int, int]] = [ (0, 2), (3, 5), (6, 8), (9, 12), (17, 19), (20, 22), (23, 25), (26, 29) ]
_timecode_length = 29

class SrtFileHandler(SubtitleFileHandler):
    """
    File handler for SRT subtitle format.

    Parses the file with a three-state machine (number, timecode, body) so that common
    structural errors can be reported precisely, and recovered from when errors are ignored.
    Inline <i>, <b>, <u> and <s> tags are converted to line styles. A tag that is left open
    carries over to the following lines of the same subtitle until it is closed.
    """

    FORMAT = SubtitleFormat.SRT
    SUPPORTED_EXTENSIONS = {'.srt': 10}

    _TIMECODE_SEARCH = regex.compile(r'\d\d:\d\d:\d\d,\d\d\d --> \d\d:\d\d:\d\d,\d\d\d')
    _LENIENT_TIMECODE = regex.compile(r'^\s*(\d+):(\d+):(\d+)[,.](\d+)\s*-->\s*(\d+):(\d+):(\d+)[,.](\d+)')
    _STYLE_TAG = regex.compile(r'<(/?)([ibus])>', regex.IGNORECASE)

    def parse_string(self, content: str) -> SubtitleData:
        """
        Parse SRT content and return SubtitleData with the records in document order.
        """
        parser = _SrtParser(self)
        records = parser.Parse(content)
        return SubtitleData(records=records, metadata={}, detected_format=SubtitleFormat.SRT)

    def compose(self, data: SubtitleData) -> str:
        """
        Compose subtitle records into SRT format.

        Records without any text are skipped with a warning.
        """
        newline = self.options.newline
        output : list[str] = []

        for record in data.records:
            if not record.lines:
                logging.warning(f"Subtitle {record.number} has no text and was not written")
                continue

            output.append(f"{record.number}{newline}")
            output.append(f"{record.start.srt_timestamp} --> {record.end.srt_timestamp}{record.position or ''}{newline}")
            for line in record.lines:
                output.append(f"{self._compose_line(line)}{newline}")
            output.append(newline)

        return ''.join(output)

    def _compose_line(self, line : StyledLine) -> str:
        """ Wrap the text in tags, always nested italic > bold > underline > strike """
        tags = [ style[0] for style in line.styles ]
        opening = ''.join(f"<{tag}>" for tag in tags)
        closing = ''.join(f"</{tag}>" for tag in reversed(tags))
        return f"{opening}{line.text}{closing}"

    def _is_wellformed_timecode(self, line : str) -> bool:
        if len(line) < _timecode_length:
            return False

        if any(line[column] != separator for column, separator in _timecode_separators.items()):
            return False

        column, arrow = _timecode_arrow
        if line[column:column + len(arrow)] != arrow:
            return False

        return all(line[start:end].isdigit() for start, end in _timecode_fields)

    def _salvage_timecode(self, line : str) -> list[int]:
        """
        Extract whatever numeric fields can be found in a malformed timecode line
        """
        match = self._LENIENT_TIMECODE.match(line)
        if match:
            values = list(match.groups())
            for index in (3, 7):
                values[index] = values[index].ljust(3, '0')[:3]
            return [ int(value) for value in values ]

        fields = [ regex.sub(r'\D', '', line[start:end]) for start, end in _timecode_fields ]
        return [ int(field) if field else 0 for field in fields ]

    def _parse_styles(self, text : str, open_styles : dict[str, bool]) -> StyledLine:
        """
        Strip style tags from a line of text, updating the open tag latches.

        The line gets a style if that style was already open from a previous line,
        or if it is opened anywhere on this line.
        """
        line = StyledLine()
        for name in style_names:
            if open_styles[name]:
                setattr(line, name, True)

        for match in self._STYLE_TAG.finditer(text):
            name = _tag_styles[match.group(2).lower()]
            if match.group(1):
                open_styles[name] = False
            else:
                open_styles[name] = True
                setattr(line, name, True)

        line.text = self._STYLE_TAG.sub('', text)
        return line

_tag_styles : dict[str, str] = { name[0]: name for name in style_names }

class _SrtParser:
    """
    State for a single pass over SRT content
    """
    def __init__(self, handler : SrtFileHandler):
        self.handler = handler
        self.records : list[SubtitleRecord] = []
        self.state = SrtParseState.ExpectNumber
        self.counter = 1
        self.number = 1
        self.start = TimeCode()
        self.end = TimeCode()
        self.position : str|None = None
        self.body : list[StyledLine] = []
        self.open_styles : dict[str, bool] = {}

    def Parse(self, content : str) -> list[SubtitleRecord]:
        lines = self.handler._split_lines(content)
        held : str|None = None
        index = 0
        line_number = 0

        while held is not None or index < len(lines):
            if held is not None:
                line, held = held, None
            else:
                line = lines[index]
                index += 1
                line_number = index

            if self.state == SrtParseState.ExpectNumber:
                held = self._expect_number(line, line_number)
            elif self.state == SrtParseState.ExpectTimecode:
                self._expect_timecode(line, line_number)
            else:
                self._expect_body(line, line_number)

        if self.state == SrtParseState.ExpectBody:
            if self.body:
                self._finalise()
            else:
                logging.warning(f"Subtitle {self.number} has no text at the end of the file")
        elif self.state == SrtParseState.ExpectTimecode:
            logging.warning(f"Subtitle {self.number} is missing a timecode at the end of the file")

        return self.records

    def _expect_number(self, line : str, line_number : int) -> str|None:
        """
        Handle a line where a subtitle number is expected.

        Returns input that should be processed again in the next state without reading a new line.
        """
        text = line.strip()
        if not text:
            logging.warning(f"Line {line_number}: unexpected blank line before subtitle {self.counter}")
            return None

        if text.isdigit() and int(text) == self.counter:
            self.number = self.counter
            self.state = SrtParseState.ExpectTimecode
            return None

        self.handler._parse_error(f"Expected subtitle number {self.counter}, found {text!r}", line_number)

        match = self.handler._TIMECODE_SEARCH.search(line)
        if match:
            prefix = line[:match.start()].strip()
            if not prefix:
                logging.info(f"Line {line_number}: subtitle number {self.counter} is missing, treating the line as its timecode")
                self.number = self.counter
                self.state = SrtParseState.ExpectTimecode
                return line[match.start():]

            logging.info(f"Line {line_number}: splitting merged subtitle number {prefix!r} from timecode")
            self.number = int(prefix) if prefix.isdigit() else self.counter
            self.state = SrtParseState.ExpectTimecode
            return line[match.start():]

        if text.isdigit():
            logging.info(f"Line {line_number}: continuing from subtitle number {text}")
            self.number = self.counter = int(text)
            self.state = SrtParseState.ExpectTimecode
            return None

        logging.info(f"Line {line_number}: skipping {text!r}")
        return None

    def _expect_timecode(self, line : str, line_number : int) -> None:
        if not line.strip():
            logging.warning(f"Line {line_number}: unexpected blank line before the timecode of subtitle {self.number}")
            return

        if self.handler._is_wellformed_timecode(line):
            values = [ int(line[start:end]) for start, end in _timecode_fields ]
        else:
            self.handler._parse_error(f"Malformed timecode for subtitle {self.number}: {line!r}", line_number)
            values = self.handler._salvage_timecode(line)

        self.start = TimeCode.FromTimes(*values[0:4])
        self.end = TimeCode.FromTimes(*values[4:8])
        self.position = line[_timecode_length:] or None
        self.body = []
        self.open_styles = { name: False for name in style_names }
        self.state = SrtParseState.ExpectBody

    def _expect_body(self, line : str, line_number : int) -> None:
        if not line.strip():
            if self.body:
                self._finalise()
            else:
                logging.warning(f"Line {line_number}: subtitle {self.number} has no text")
            return

        self.body.append(self.handler._parse_styles(line, self.open_styles))
        if len(self.body) == 3:
            logging.warning(f"Line {line_number}: subtitle {self.number} has more than two lines")

    def _finalise(self) -> None:
        self.records.append(SubtitleRecord(self.number, self.start, self.end, self.body, self.position))
        self.counter = self.number + 1
        self.body = []
        self.state = SrtParseState.ExpectNumber
