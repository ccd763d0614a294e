from PySubconv.Helpers.TestCases import LoggedTestCase
from PySubconv.Options import Options
from PySubconv.SettingsType import SettingsError, SettingsType
from PySubconv.SubtitleError import SubtitleError
from PySubconv.SubtitleFormat import SubtitleFormat


class TestOptions(LoggedTestCase):
    def test_Defaults(self):
        options = Options()
        self.assertLoggedEqual("frame rate", 24.0, options.frame_rate)
        self.assertLoggedFalse("frame rate specified", options.frame_rate_specified)
        self.assertLoggedEqual("newline", "\n", options.newline)
        self.assertLoggedEqual("shift", 0.0, options.shift)
        self.assertLoggedEqual("output encoding", "utf-8", options.output_encoding)
        self.assertLoggedEqual("input format", None, options.input_format)
        self.assertLoggedEqual("normalise", None, options.normalise)
        self.assertLoggedFalse("ignore errors", options.ignore_errors)
        self.assertLoggedFalse("emit output if clean", options.emit_output_if_clean)

    def test_MaxFixIterations(self):
        self.assertLoggedEqual("default max fix iterations", 100, Options().max_fix_iterations)
        self.assertLoggedEqual("explicit max fix iterations", 1, Options(max_fix_iterations=1).max_fix_iterations)
        self.assertLoggedEqual("max fix iterations from string", 5, Options(max_fix_iterations='5').max_fix_iterations)

    def test_ExplicitSettings(self):
        options = Options({'frame_rate': 25, 'input_format': 'txt', 'output_format': '.SRT'}, line_ends_with='crlf', shift=None)
        self.assertLoggedEqual("frame rate", 25.0, options.frame_rate)
        self.assertLoggedTrue("frame rate specified", options.frame_rate_specified)
        self.assertLoggedEqual("input format", SubtitleFormat.SUB, options.input_format)
        self.assertLoggedEqual("output format", SubtitleFormat.SRT, options.output_format)
        self.assertLoggedEqual("newline", "\r\n", options.newline)
        self.assertLoggedEqual("shift", 0.0, options.shift)

    def test_InvalidSettings(self):
        with self.assertRaises(SettingsError):
            Options(line_ends_with='lfcr')

        with self.assertRaises(SubtitleError):
            Options(input_format='ass')

        for value in (0, -1):
            with self.subTest(max_fix_iterations=value):
                with self.assertRaises(SettingsError):
                    Options(max_fix_iterations=value)

    def test_OptionsAreReadOnly(self):
        options = Options()
        with self.assertRaises(SettingsError):
            options['shift'] = 1.0

        with self.assertRaises(SettingsError):
            options.update({'shift': 1.0})

        with self.assertRaises(SettingsError):
            del options['shift']

    def test_With(self):
        options = Options(validate=True)
        changed = options.With(shift=1.5)
        self.assertLoggedEqual("changed shift", 1.5, changed.shift)
        self.assertLoggedTrue("validate is kept", changed.validate)
        self.assertLoggedEqual("original shift", 0.0, options.shift)
        self.assertLoggedFalse("frame rate still unspecified", changed.frame_rate_specified)

        with_frame_rate = options.With(frame_rate=30.0)
        self.assertLoggedTrue("frame rate now specified", with_frame_rate.frame_rate_specified)

class TestSettingsType(LoggedTestCase):
    def test_Getters(self):
        settings = SettingsType({'flag': 'true', 'count': '3', 'rate': '23.976'})
        self.assertLoggedTrue("bool from string", settings.get_bool('flag'))
        self.assertLoggedEqual("int from string", 3, settings.get_int('count'))
        self.assertLoggedEqual("float from string", 23.976, settings.get_float('rate'))

        with self.assertRaises(SettingsError):
            SettingsType({'rate': 'fast'}).get_float('rate')
        with self.assertRaises(SettingsError):
            SettingsType({'count': 'many'}).get_int('count')

    def test_UpdateIgnoresNone(self):
        settings = SettingsType({'shift': 1.0})
        settings.update({'shift': None, 'verify': True})
        self.assertLoggedEqual("shift", 1.0, settings.get_float('shift'))
        self.assertLoggedTrue("verify", settings.get_bool('verify'))

class TestSubtitleFormat(LoggedTestCase):
    def test_Parse(self):
        cases = [ ('sub', SubtitleFormat.SUB), ('TXT', SubtitleFormat.SUB), ('.srt', SubtitleFormat.SRT), (SubtitleFormat.SRT, SubtitleFormat.SRT) ]
        for name, expected in cases:
            with self.subTest(name=name):
                self.assertLoggedEqual("format", expected, SubtitleFormat.Parse(name), input_value=name)

        with self.assertRaises(SubtitleError):
            SubtitleFormat.Parse('vtt')

    def test_Opposite(self):
        self.assertLoggedEqual("opposite of SUB", SubtitleFormat.SRT, SubtitleFormat.SUB.opposite)
        self.assertLoggedEqual("opposite of SRT", SubtitleFormat.SUB, SubtitleFormat.SRT.opposite)
        self.assertLoggedEqual("extension", ".srt", SubtitleFormat.SRT.extension)
