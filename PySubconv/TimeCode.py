from __future__ import annotations
from datetime import timedelta
from functools import total_ordering

import pysubs2.time
import srt # type: ignore

@total_ordering
class TimeCode:
    """
    A point in time, in seconds, with an optional frame rate for frame-based formats.

    All other representations (hours, minutes, seconds, milliseconds, frames) are derived
    from `time` and `frame_rate` on demand, so a TimeCode never holds conflicting values.
    Times may be negative while they are being adjusted, they are clamped to zero when formatted.
    """
    __slots__ = ('_time', '_frame_rate')

    def __init__(self, time : float = 0.0, frame_rate : float|None = None):
        self._time : float = float(time)
        self._frame_rate : float|None = frame_rate

    @classmethod
    def FromFrame(cls, frame : int, frame_rate : float) -> TimeCode:
        """
        Create a timecode from a frame number, e.g. `{24}` at 24 fps is one second
        """
        time = frame / frame_rate if frame_rate else 0.0
        return cls(time, frame_rate)

    @classmethod
    def FromTimes(cls, hours : int = 0, minutes : int = 0, seconds : int = 0, millis : int = 0, frame_rate : float|None = None) -> TimeCode:
        ms = pysubs2.time.make_time(h=hours, m=minutes, s=seconds, ms=millis)
        return cls(ms / 1000.0, frame_rate)

    @property
    def time(self) -> float:
        return self._time

    @property
    def frame_rate(self) -> float|None:
        return self._frame_rate

    @property
    def total_millis(self) -> int:
        return int(round(self._time * 1000))

    @property
    def hours(self) -> int:
        return self._times.h

    @property
    def minutes(self) -> int:
        return self._times.m

    @property
    def seconds(self) -> int:
        return self._times.s

    @property
    def millis(self) -> int:
        return self._times.ms

    @property
    def frame(self) -> int:
        """ The nearest frame number, or 0 without a usable frame rate """
        if not self._frame_rate:
            return 0
        return int(round(self._time * self._frame_rate))

    @property
    def timedelta(self) -> timedelta:
        return timedelta(milliseconds=max(self.total_millis, 0))

    @property
    def srt_timestamp(self) -> str:
        """ The time formatted as HH:MM:SS,mmm """
        return srt.timedelta_to_srt_timestamp(self.timedelta)

    def WithFrameRate(self, frame_rate : float|None) -> TimeCode:
        return TimeCode(self._time, frame_rate)

    def Shifted(self, offset : float) -> TimeCode:
        """
        Return a new timecode offset by a number of seconds (which may be negative)
        """
        return TimeCode(self._time + offset, self._frame_rate)

    @property
    def _times(self) -> pysubs2.time.Times:
        return pysubs2.time.ms_to_times(self.total_millis)

    def __eq__(self, other : object) -> bool:
        if isinstance(other, TimeCode):
            return self._time == other._time
        return NotImplemented

    def __lt__(self, other : TimeCode) -> bool:
        return self._time < other._time

    def __hash__(self) -> int:
        return hash(self._time)

    def __str__(self) -> str:
        return self.srt_timestamp

    def __repr__(self) -> str:
        return f"TimeCode({self._time!r}, {self._frame_rate!r})"
