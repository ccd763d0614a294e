import io
import os
import tempfile

from PySubconv import (
    compose_subtitles,
    convert_subtitles,
    init_options,
    load_subtitles,
    process_subtitles,
    write_subtitles,
)
from PySubconv.Helpers.TestCases import LoggedTestCase
from PySubconv.SubtitleError import SubtitleError
from PySubconv.SubtitleFormat import SubtitleFormat

hello_srt = b"1\n00:00:01,000 --> 00:00:02,000\nHello\n\n"

overlapping_srt = b"""1
00:00:01,000 --> 00:00:05,000
First

2
00:00:04,900 --> 00:00:06,000
Second

"""

class TestPySubconv(LoggedTestCase):
    def _load(self, raw : bytes, **settings):
        options = init_options(**settings)
        return load_subtitles(options=options, stream=io.BytesIO(raw)), options

    def test_ShiftScenario(self):
        data, options = self._load(hello_srt, output_format='srt', shift=2.5)
        self.assertLoggedEqual("subtitle count", 1, data.count)
        self.assertLoggedEqual("display lines", 1, data.records[0].linecount)
        self.assertLoggedTrue("output is produced", process_subtitles(data, options))

        result = compose_subtitles(data, options)
        self.assertLoggedEqual("shifted srt", "1\n00:00:03,500 --> 00:00:04,500\nHello\n\n", result)
        self.assertLoggedAlmostEqual("records are not shifted in place", 1.0, data.records[0].start.time)

    def test_SubToSrtScenario(self):
        data, options = self._load(b"{24}{48}Hi\n", frame_rate=24)
        process_subtitles(data, options)
        result = compose_subtitles(data, options)
        self.assertLoggedEqual("srt", "1\n00:00:01,000 --> 00:00:02,000\nHi\n\n", result)

    def test_SrtToSub(self):
        data, options = self._load(hello_srt, frame_rate=25, line_ends_with='crlf')
        result = compose_subtitles(data, options)
        self.assertLoggedEqual("sub", "{25}{50}Hello\r\n", result)

    def test_VerifyNeverProducesOutput(self):
        data, options = self._load(overlapping_srt, verify=True)
        with self.assertLogs(level='ERROR'):
            emit = process_subtitles(data, options)
        self.assertLoggedFalse("output is produced", emit)
        self.assertLoggedAlmostEqual("second start unchanged", 4.9, data.records[1].start.time)

    def test_ValidateFixesOverlap(self):
        data, options = self._load(overlapping_srt, validate=True, output_format='srt')
        with self.assertLogs(level='ERROR'):
            emit = process_subtitles(data, options)
        self.assertLoggedTrue("output is produced", emit)

        result = compose_subtitles(data, options)
        self.assertLoggedTrue("fixed start", "00:00:05,050 --> 00:00:06,000" in result)

    def test_ValidateCleanInputProducesNoOutput(self):
        data, options = self._load(hello_srt, validate=True)
        self.assertLoggedFalse("output is produced", process_subtitles(data, options))

        data, options = self._load(hello_srt, validate=True, emit_output_if_clean=True)
        self.assertLoggedTrue("output is produced when requested", process_subtitles(data, options))

    def test_NormaliseScenario(self):
        raw = b"1\n00:00:10,000 --> 00:00:10,500\nOne\n\n2\n00:00:12,000 --> 00:00:12,500\nTwo\n\n"
        data, options = self._load(raw, normalise=3.0, output_format='srt')
        with self.assertLogs(level='WARNING'):
            process_subtitles(data, options)

        result = compose_subtitles(data, options)
        self.assertLoggedTrue("capped end", "00:00:10,000 --> 00:00:11,900" in result)
        self.assertLoggedTrue("last end", "00:00:12,000 --> 00:00:15,000" in result)

    def test_JiggleIsNotImplemented(self):
        data, options = self._load(hello_srt, jiggle=0.5)
        with self.assertRaises(SubtitleError):
            process_subtitles(data, options)

    def test_WriteSubtitlesEncoding(self):
        stream = io.BytesIO()
        write_subtitles("{1}{2}Café\n", None, init_options(output_encoding='utf-16'), stream=stream)
        self.assertLoggedEqual("decoded output", "{1}{2}Café\n", stream.getvalue().decode('utf-16'))

    def test_ConvertFile(self):
        with tempfile.TemporaryDirectory() as directory:
            input_path = os.path.join(directory, "movie.sub")
            output_path = os.path.join(directory, "movie.srt")
            with open(input_path, 'wb') as f:
                f.write(b"{25}{50}{y:i}One|Two\n{75}{100}Three\n")

            options = init_options(frame_rate=25.0, line_ends_with='crlf')
            result = convert_subtitles(input_path, output_path, options)

            with open(output_path, 'rb') as f:
                written = f.read()

        expected = "1\r\n00:00:01,000 --> 00:00:02,000\r\n<i>One</i>\r\nTwo\r\n\r\n2\r\n00:00:03,000 --> 00:00:04,000\r\nThree\r\n\r\n"
        self.assertLoggedEqual("result", expected, result)
        self.assertLoggedEqual("written", expected.encode('utf-8'), written)

    def test_ConvertWithoutOutput(self):
        with tempfile.TemporaryDirectory() as directory:
            input_path = os.path.join(directory, "movie.srt")
            output_path = os.path.join(directory, "fixed.srt")
            with open(input_path, 'wb') as f:
                f.write(hello_srt)

            result = convert_subtitles(input_path, output_path, init_options(verify=True))
            self.assertLoggedEqual("result", None, result)
            self.assertLoggedFalse("output file exists", os.path.exists(output_path))

    def test_LoadedFormat(self):
        data, _ = self._load(hello_srt)
        self.assertLoggedEqual("detected format", SubtitleFormat.SRT, data.detected_format)
