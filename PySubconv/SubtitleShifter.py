from __future__ import annotations
import logging

from PySubconv.SubtitleRecord import SubtitleRecord

def ShiftSubtitles(records : list[SubtitleRecord], offset : float) -> None:
    """
    Move every subtitle by a number of seconds (positive or negative), in place.

    Overlaps are not re-checked, and times that become negative are written as zero.
    """
    negative = 0
    for record in records:
        record.start = record.start.Shifted(offset)
        record.end = record.end.Shifted(offset)
        if record.start.time < 0:
            negative += 1

    if negative:
        logging.warning(f"Shifting by {offset:g}s moved {negative} subtitles before the start of the video")

def ShiftedSubtitles(records : list[SubtitleRecord], offset : float) -> list[SubtitleRecord]:
    """
    Return shifted copies of the subtitles, leaving the originals unchanged
    """
    shifted = [ SubtitleRecord(record.number, record.start, record.end, list(record.lines), record.position) for record in records ]
    if offset:
        ShiftSubtitles(shifted, offset)
    return shifted
