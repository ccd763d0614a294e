from __future__ import annotations
from collections.abc import Mapping
import os

from PySubconv.SettingsType import SettingType, SettingsError, SettingsType
from PySubconv.SubtitleFormat import SubtitleFormat

# Encodings used to decode input when none is specified or detected
default_encoding = os.getenv('DEFAULT_ENCODING', 'utf-8')
fallback_encoding = os.getenv('FALLBACK_ENCODING', 'iso-8859-1')

default_frame_rate = 24.0

newline_sequences : dict[str, str] = {
    'lf': '\n',
    'cr': '\r',
    'crlf': '\r\n',
}

default_settings : dict[str, SettingType] = {
    'input_encoding': None,
    'output_encoding': 'utf-8',
    'input_format': None,
    'output_format': None,
    'ignore_errors': False,
    'line_ends_with': 'lf',
    'frame_rate': default_frame_rate,
    'shift': 0.0,
    'verify': False,
    'validate': False,
    'normalise': None,
    'adaptive_duration': None,
    'jiggle': None,
    'emit_output_if_clean': False,
    'max_fix_iterations': 100,
}

class Options(SettingsType):
    """
    Immutable conversion settings, built once and passed to every stage of the pipeline.

    Settings that are not provided (or are None) take their default values.
    """
    def __init__(self, settings : Mapping[str, SettingType]|None = None, **kwargs : SettingType):
        explicit = SettingsType(settings)
        explicit.update(kwargs)

        merged = SettingsType(default_settings)
        merged.update(explicit)
        super().__init__(merged)

        self._frame_rate_specified = explicit.get('frame_rate') is not None

        line_ends_with = self.get_str('line_ends_with') or 'lf'
        if line_ends_with.lower() not in newline_sequences:
            raise SettingsError(f"Unknown line ending '{line_ends_with}', expected one of {', '.join(newline_sequences)}")

        if self.max_fix_iterations < 1:
            raise SettingsError(f"max_fix_iterations must be at least 1, got {self.max_fix_iterations}")

        # Validate format names eagerly so that errors surface before any file is read
        _ = self.input_format, self.output_format

    def __setitem__(self, key, value):
        raise SettingsError(f"Options are read-only, cannot set '{key}'")

    def __delitem__(self, key):
        raise SettingsError(f"Options are read-only, cannot delete '{key}'")

    def update(self, other=(), /, **kwds) -> None:
        raise SettingsError("Options are read-only, use Options.With() to derive new options")

    def With(self, **changes : SettingType) -> Options:
        """
        Return a copy of the options with some settings changed
        """
        settings = dict(self)
        if not self._frame_rate_specified and changes.get('frame_rate') is None:
            settings.pop('frame_rate', None)
        settings.update(changes)
        return Options(settings)

    @property
    def input_encoding(self) -> str|None:
        return self.get_str('input_encoding')

    @property
    def output_encoding(self) -> str:
        return self.get_str('output_encoding') or 'utf-8'

    @property
    def input_format(self) -> SubtitleFormat|None:
        return self._get_format('input_format')

    @property
    def output_format(self) -> SubtitleFormat|None:
        return self._get_format('output_format')

    @property
    def ignore_errors(self) -> bool:
        return self.get_bool('ignore_errors')

    @property
    def newline(self) -> str:
        line_ends_with = self.get_str('line_ends_with') or 'lf'
        return newline_sequences[line_ends_with.lower()]

    @property
    def frame_rate(self) -> float:
        frame_rate = self.get_float('frame_rate')
        return default_frame_rate if frame_rate is None else frame_rate

    @property
    def frame_rate_specified(self) -> bool:
        return self._frame_rate_specified

    @property
    def shift(self) -> float:
        return self.get_float('shift') or 0.0

    @property
    def verify(self) -> bool:
        return self.get_bool('verify')

    @property
    def validate(self) -> bool:
        return self.get_bool('validate')

    @property
    def normalise(self) -> float|None:
        return self.get_float('normalise')

    @property
    def adaptive_duration(self) -> float|None:
        return self.get_float('adaptive_duration')

    @property
    def jiggle(self) -> float|None:
        return self.get_float('jiggle')

    @property
    def emit_output_if_clean(self) -> bool:
        return self.get_bool('emit_output_if_clean')

    @property
    def max_fix_iterations(self) -> int:
        max_iterations = self.get_int('max_fix_iterations')
        return default_settings['max_fix_iterations'] if max_iterations is None else max_iterations

    def _get_format(self, key : str) -> SubtitleFormat|None:
        value = self.get(key)
        if value is None or value == '':
            return None
        if isinstance(value, SubtitleFormat):
            return value
        return SubtitleFormat.Parse(str(value))
