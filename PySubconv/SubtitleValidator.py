from __future__ import annotations
import logging

from PySubconv.Options import Options
from PySubconv.SubtitleError import (
    InvalidDurationError,
    NumberingError,
    OverlapError,
    ShortDurationError,
    SubtitleValidationError,
)
from PySubconv.SubtitleRecord import SubtitleRecord
from PySubconv.TimeCode import TimeCode

# Duration given to subtitles that end before they start
fixed_duration = 0.1

# Subtitles shorter than this are reported
minimum_duration = 0.1

# Gap inserted after a subtitle when the next one is moved to stop them overlapping
overlap_gap = 0.05

# Tolerance for comparing durations computed from floating point times
_epsilon = 1e-9

class ValidationResult:
    """
    Errors and warnings found by the validator, and the number of fixes that were applied
    """
    def __init__(self) -> None:
        self.errors : list[SubtitleValidationError] = []
        self.warnings : list[SubtitleValidationError] = []
        self.fixes : int = 0

    @property
    def fixed(self) -> bool:
        return self.fixes > 0

    @property
    def valid(self) -> bool:
        return not self.errors

class SubtitleValidator:
    """
    Checks a subtitle sequence for structural problems and optionally repairs them.

    Records are checked left to right. When a fix is applied the checks are run again for the same
    record, since a fix can move the start of the following record, until the record passes or the
    iteration limit is reached. The following record is re-checked in its own turn.
    """
    def __init__(self, options : Options|None = None) -> None:
        self.options = options or Options()

    def ValidateSubtitles(self, records : list[SubtitleRecord], fix : bool = False) -> ValidationResult:
        """
        Check every record for non-positive or short durations, overlaps and numbering gaps.

        With fix=True errors are repaired in place: non-positive durations are extended, overlapping
        records are pushed back and numbers are made sequential. Warnings are never fixed.
        """
        result = ValidationResult()
        max_iterations = self.options.max_fix_iterations

        for index, record in enumerate(records):
            reported : set[tuple[type, int]] = set()
            for _ in range(max_iterations):
                if not self._check_record(records, index, fix, result, reported):
                    break
            else:
                logging.error(f"Subtitle {record.number} still has errors after {max_iterations} attempts to fix it")

        if result.errors:
            logging.info(f"Found {len(result.errors)} errors and {len(result.warnings)} warnings in {len(records)} subtitles, applied {result.fixes} fixes")

        return result

    def _check_record(self, records : list[SubtitleRecord], index : int, fix : bool, result : ValidationResult, reported : set[tuple[type, int]]) -> bool:
        """
        Run each check on a record in turn, returning True as soon as a fix is applied
        """
        record = records[index]
        expected_number = index + 1

        if record.start.time >= record.end.time:
            self._report_error(result, InvalidDurationError(f"ends at {record.end} but starts at {record.start}", record.number, fix))
            if fix:
                record.end = TimeCode(record.start.time + fixed_duration, record.end.frame_rate)
                result.fixes += 1
                return True

        elif record.duration < minimum_duration - _epsilon:
            self._report_warning(result, ShortDurationError(f"duration {record.duration:.3f}s is shorter than {minimum_duration}s", record.number), reported)

        if index + 1 < len(records):
            next_record = records[index + 1]
            if record.end.time >= next_record.start.time:
                self._report_error(result, OverlapError(f"ends at {record.end} after subtitle {next_record.number} starts at {next_record.start}", record.number, fix))
                if fix:
                    next_record.start = TimeCode(record.end.time + overlap_gap, next_record.start.frame_rate)
                    result.fixes += 1
                    return True

        if record.number != expected_number:
            self._report_error(result, NumberingError(f"should be number {expected_number}", record.number, fix))
            if fix:
                record.number = expected_number
                result.fixes += 1
                return True

        return False

    def _report_error(self, result : ValidationResult, error : SubtitleValidationError) -> None:
        result.errors.append(error)
        if error.fixed:
            logging.error(f"{error} (fixed)")
        else:
            logging.error(str(error))

    def _report_warning(self, result : ValidationResult, warning : SubtitleValidationError, reported : set[tuple[type, int]]) -> None:
        key = (type(warning), warning.number or 0)
        if key in reported:
            return
        reported.add(key)
        result.warnings.append(warning)
        logging.warning(str(warning))

def ShouldEmitOutput(result : ValidationResult|None, options : Options) -> bool:
    """
    Decide whether subtitles should be written after validation.

    Verifying is read-only, so nothing is written. Validating only writes output if something
    needed fixing, unless emit_output_if_clean is set.
    """
    if options.validate:
        if result is not None and result.fixed:
            return True
        return options.emit_output_if_clean

    if options.verify:
        return False

    return True
