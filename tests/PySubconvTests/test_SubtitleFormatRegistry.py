import codecs
import os
import tempfile

from PySubconv.Formats.SrtFileHandler import SrtFileHandler
from PySubconv.Formats.SubFileHandler import SubFileHandler
from PySubconv.Helpers.TestCases import LoggedTestCase
from PySubconv.Options import Options
from PySubconv.SubtitleError import SubtitleFormatError
from PySubconv.SubtitleFormat import SubtitleFormat
from PySubconv.SubtitleFormatRegistry import SubtitleFormatRegistry


class TestSubtitleFormatRegistry(LoggedTestCase):
    def setUp(self) -> None:
        super().setUp()
        SubtitleFormatRegistry.clear()
        SubtitleFormatRegistry.enable_autodiscovery()

    def test_EnumerateFormats(self):
        self.assertLoggedSequenceEqual("formats", ['.srt', '.sub', '.txt'], SubtitleFormatRegistry.enumerate_formats())
        self.assertLoggedEqual("format list", ".srt, .sub, .txt", SubtitleFormatRegistry.list_available_formats())

    def test_CreateHandler(self):
        options = Options(frame_rate=25.0)
        cases = [
            ({'format': SubtitleFormat.SRT}, SrtFileHandler),
            ({'format': SubtitleFormat.SUB}, SubFileHandler),
            ({'format': '.txt'}, SubFileHandler),
            ({'format': 'srt'}, SrtFileHandler),
            ({'filename': 'movie.SUB'}, SubFileHandler),
            ({'filename': os.path.join('dir', 'movie.srt')}, SrtFileHandler),
        ]
        for kwargs, expected in cases:
            with self.subTest(kwargs=kwargs):
                handler = SubtitleFormatRegistry.create_handler(options=options, **kwargs)
                self.assertLoggedIsInstance("handler", handler, expected, input_value=kwargs)
                self.assertLoggedEqual("handler options", 25.0, handler.options.frame_rate)

    def test_CreateHandlerErrors(self):
        with self.assertRaises(SubtitleFormatError):
            SubtitleFormatRegistry.create_handler('.ass')

        with self.assertRaises(SubtitleFormatError):
            SubtitleFormatRegistry.create_handler(filename='movie')

    def test_DisableAutodiscovery(self):
        SubtitleFormatRegistry.disable_autodiscovery()
        self.assertLoggedSequenceEqual("formats", [], SubtitleFormatRegistry.enumerate_formats())
        SubtitleFormatRegistry.register_handler(SrtFileHandler)
        self.assertLoggedSequenceEqual("formats", ['.srt'], SubtitleFormatRegistry.enumerate_formats())
        SubtitleFormatRegistry.clear()

    def test_DetectAndLoadBytes(self):
        data = SubtitleFormatRegistry.detect_format_and_load_bytes(b"{24}{48}Hi\n", Options())
        self.assertLoggedEqual("detected format", SubtitleFormat.SUB, data.detected_format)
        self.assertLoggedEqual("encoding", 'utf-8', data.encoding)
        self.assertLoggedEqual("text", "Hi", data.records[0].text)

    def test_ExplicitFormatSkipsDetection(self):
        raw = b"\n1\n00:00:01,000 --> 00:00:02,000\nHello\n\n"
        with self.assertRaises(SubtitleFormatError):
            SubtitleFormatRegistry.detect_format_and_load_bytes(raw, Options())

        data = SubtitleFormatRegistry.detect_format_and_load_bytes(raw, Options(input_format='srt'))
        self.assertLoggedEqual("text", "Hello", data.records[0].text)

    def test_DetectAndLoadFile(self):
        content = "1\r\n00:00:01,000 --> 00:00:02,000\r\nCafé\r\n\r\n"
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "subtitles.srt")
            with open(path, 'wb') as f:
                f.write(b'\xef\xbb\xbf' + content.encode('utf-8'))

            data = SubtitleFormatRegistry.detect_format_and_load_file(path, Options())

        self.assertLoggedEqual("detected format", SubtitleFormat.SRT, data.detected_format)
        self.assertLoggedEqual("encoding", 'utf-8-sig', data.encoding)
        self.assertLoggedEqual("text", "Café", data.records[0].text)
        self.assertLoggedEqual("source path", path, data.metadata['sourcepath'])

    def test_LoadFileWithExplicitEncoding(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "subtitles.sub")
            with open(path, 'wb') as f:
                f.write("{25}{50}Żółw\n".encode('cp1250'))

            options = Options(input_format='sub', input_encoding='cp1250', frame_rate=25.0)
            data = SubtitleFormatRegistry.detect_format_and_load_file(path, options)

        self.assertLoggedEqual("text", "Żółw", data.records[0].text)
        self.assertLoggedEqual("encoding", 'cp1250', data.encoding)

    def test_LoadFileWithUtf16ByteOrderMark(self):
        content = "{25}{50}Żółw|Ćma\n"
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "subtitles.sub")
            with open(path, 'wb') as f:
                f.write(codecs.BOM_UTF16_LE + content.encode('utf-16-le'))

            data = SubtitleFormatRegistry.detect_format_and_load_file(path, Options(frame_rate=25.0))

        self.assertLoggedEqual("detected format", SubtitleFormat.SUB, data.detected_format)
        self.assertLoggedEqual("encoding", 'utf-16', data.encoding)
        self.assertLoggedSequenceEqual("lines", ["Żółw", "Ćma"], [ line.text for line in data.records[0].lines ])

    def test_FallbackEncodingKeepsCaptionLinesIntact(self):
        raw = b"1\n00:00:01,000 --> 00:00:02,000\nWait\x85 what\n\n"
        data = SubtitleFormatRegistry.detect_format_and_load_bytes(raw, Options())

        self.assertLoggedEqual("encoding", 'iso-8859-1', data.encoding)
        self.assertLoggedEqual("line count", 1, data.records[0].linecount)
        self.assertLoggedEqual("text", "Wait\x85 what", data.records[0].text)

        raw = b"{24}{48}Wait\x85 what\n"
        data = SubtitleFormatRegistry.detect_format_and_load_bytes(raw, Options(frame_rate=24.0))
        self.assertLoggedEqual("sub text", "Wait\x85 what", data.records[0].text)
