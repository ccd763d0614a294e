import logging

import regex

from PySubconv.StyledLine import StyledLine
from PySubconv.SubtitleData import SubtitleData
from PySubconv.SubtitleFileHandler import SubtitleFileHandler
from PySubconv.SubtitleFormat import SubtitleFormat
from PySubconv.SubtitleRecord import SubtitleRecord
from PySubconv.TimeCode import TimeCode

style_tokens : dict[str, str] = {
    'i': 'italic',
    'b': 'bold',
    'u': 'underline',
    's': 'strike',
}

class SubFileHandler(SubtitleFileHandler):
    """
    File handler for the frame-based SUB/TXT format (MicroDVD).

    Each subtitle is a single line, `{start frame}{end frame}` followed by display lines
    separated by `|`. Each display line can be prefixed with `{y:i}`, `{y:b}`, `{y:u}` or `{y:s}`
    tokens to make that line italic, bold, underlined or struck through.
    """

    FORMAT = SubtitleFormat.SUB
    SUPPORTED_EXTENSIONS = {'.sub': 10, '.txt': 5}

    _RECORD_PATTERN = regex.compile(r'^\{(\d+)\}\{(\d+)\}(.*)$')
    _STYLE_PATTERN = regex.compile(r'^\{[yY]:([ibusIBUS]+)\}')

    def parse_string(self, content: str) -> SubtitleData:
        """
        Parse SUB content and return SubtitleData with the records in document order.
        """
        frame_rate = self.options.frame_rate
        records : list[SubtitleRecord] = []

        for line_number, line in enumerate(self._split_lines(content), start=1):
            if not line.strip():
                continue

            match = self._RECORD_PATTERN.match(line)
            if not match:
                self._parse_error(f"Expected {{start}}{{end}} frame numbers: {line!r}", line_number)
                continue

            start_frame = int(match.group(1))
            end_frame = int(match.group(2))
            number = len(records) + 1

            if start_frame == 0 and records:
                logging.warning(f"Line {line_number}: subtitle {number} starts at frame 0")
            if end_frame == 0:
                logging.warning(f"Line {line_number}: subtitle {number} ends at frame 0")

            body = match.group(3)
            lines = [ self._parse_display_line(text) for text in body.split('|') ] if body else []
            if not lines:
                logging.warning(f"Line {line_number}: subtitle {number} has no text")

            records.append(SubtitleRecord(
                number,
                TimeCode.FromFrame(start_frame, frame_rate),
                TimeCode.FromFrame(end_frame, frame_rate),
                lines
            ))

        return SubtitleData(records=records, metadata={'frame_rate': frame_rate}, detected_format=SubtitleFormat.SUB)

    def compose(self, data: SubtitleData) -> str:
        """
        Compose subtitle records into SUB format, converting times to frames at the configured frame rate.
        """
        frame_rate = self.options.frame_rate
        if not self.options.frame_rate_specified:
            logging.warning(f"No frame rate specified, using the default of {frame_rate:g} fps")

        newline = self.options.newline
        output : list[str] = []
        for record in data.records:
            start_frame = self._get_frame(record.start, frame_rate)
            end_frame = self._get_frame(record.end, frame_rate)
            body = '|'.join(self._compose_display_line(line) for line in record.lines)
            output.append(f"{{{start_frame}}}{{{end_frame}}}{body}{newline}")

        return ''.join(output)

    def _parse_display_line(self, text : str) -> StyledLine:
        """
        Strip leading style tokens from a display line and apply them to that line only
        """
        line = StyledLine()
        while True:
            match = self._STYLE_PATTERN.match(text)
            if not match:
                break
            for token in match.group(1).lower():
                setattr(line, style_tokens[token], True)
            text = text[match.end():]

        line.text = text
        return line

    def _compose_display_line(self, line : StyledLine) -> str:
        prefix = ''.join(f"{{y:{style[0]}}}" for style in line.styles)
        return f"{prefix}{line.text}"

    def _get_frame(self, timecode : TimeCode, frame_rate : float) -> int:
        frame = timecode.WithFrameRate(frame_rate).frame
        if frame < 0:
            logging.warning(f"Negative time {timecode.time:.3f}s written as frame 0")
            return 0
        return frame
