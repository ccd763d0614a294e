import unittest
from typing import Any

from PySubconv.Helpers.Tests import log_input_expected_result, log_test_name
from PySubconv.StyledLine import StyledLine
from PySubconv.SubtitleRecord import SubtitleRecord
from PySubconv.TimeCode import TimeCode

class LoggedTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        super().setUpClass()
        log_test_name(f"{cls.__name__}")

    def setUp(self) -> None:
        super().setUp()
        log_test_name(self._testMethodName)

    def assertLoggedEqual(self, name : str, expected : Any, actual : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else name, expected, actual)
        self.assertEqual(expected, actual, f"{name}: expected {expected!r}, got {actual!r}")

    def assertLoggedAlmostEqual(self, name : str, expected : float, actual : float, places : int = 6, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else name, expected, actual)
        self.assertAlmostEqual(expected, actual, places=places, msg=f"{name}: expected {expected!r}, got {actual!r}")

    def assertLoggedTrue(self, name : str, actual : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else name, True, actual)
        self.assertTrue(actual, f"{name}: expected a true value, got {actual!r}")

    def assertLoggedFalse(self, name : str, actual : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else name, False, actual)
        self.assertFalse(actual, f"{name}: expected a false value, got {actual!r}")

    def assertLoggedIsInstance(self, name : str, obj : Any, expected_type : type, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else name, expected_type.__name__, type(obj).__name__)
        self.assertIsInstance(obj, expected_type, f"{name}: expected {expected_type.__name__}, got {type(obj).__name__}")

    def assertLoggedSequenceEqual(self, name : str, expected : Any, actual : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else name, expected, actual)
        self.assertSequenceEqual(expected, actual, f"{name}: sequences differ")

def BuildRecord(number : int, start : float, end : float, *texts : str, position : str|None = None) -> SubtitleRecord:
    """ Create a record with plain text lines """
    lines = [ StyledLine(text) for text in texts ]
    return SubtitleRecord(number, TimeCode(start), TimeCode(end), lines, position)

def BuildRecords(timings : list[tuple[float, float]], lines_per_record : int = 1) -> list[SubtitleRecord]:
    """ Create a numbered sequence of records from (start, end) pairs """
    return [
        BuildRecord(number, start, end, *[ f"Line {line} of subtitle {number}" for line in range(1, lines_per_record + 1) ])
        for number, (start, end) in enumerate(timings, start=1)
    ]
