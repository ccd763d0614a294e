from __future__ import annotations
from collections.abc import Callable
import logging

from PySubconv.Options import Options
from PySubconv.SubtitleRecord import SubtitleRecord
from PySubconv.TimeCode import TimeCode

# Minimum gap left before the next subtitle when a duration has to be shortened
overlap_margin = 0.1

def NormaliseDurations(records : list[SubtitleRecord], duration : float) -> int:
    """
    Give every subtitle the same duration, unless that would overlap the next subtitle.

    Returns the number of subtitles that had to be shortened.
    """
    return _adjust_durations(records, lambda record: duration)

def AdaptDurations(records : list[SubtitleRecord], seconds_per_line : float) -> int:
    """
    Set each subtitle's duration in proportion to the number of lines it displays,
    unless that would overlap the next subtitle.

    Note that the duration is based on the number of lines, not the number of characters.

    Returns the number of subtitles that had to be shortened.
    """
    return _adjust_durations(records, lambda record: seconds_per_line * record.linecount)

def AdjustDurations(records : list[SubtitleRecord], options : Options) -> None:
    """
    Apply the duration policy from the options, if any.

    Adaptive duration takes precedence over normalisation if both are requested.
    """
    normalise = options.normalise
    adaptive_duration = options.adaptive_duration

    if normalise is not None:
        capped = NormaliseDurations(records, normalise)
        logging.info(f"Normalised subtitle durations to {normalise:g}s ({capped} shortened)")

    if adaptive_duration is not None:
        if normalise is not None:
            logging.warning("Adaptive duration was requested as well as normalisation, normalised durations are discarded")

        capped = AdaptDurations(records, adaptive_duration)
        logging.info(f"Adapted subtitle durations to {adaptive_duration:g}s per line ({capped} shortened)")

def _adjust_durations(records : list[SubtitleRecord], get_duration : Callable[[SubtitleRecord], float]) -> int:
    capped = 0
    for index, record in enumerate(records):
        end = record.start.time + get_duration(record)

        if index + 1 < len(records):
            next_record = records[index + 1]
            if end >= next_record.start.time:
                end = next_record.start.time - overlap_margin
                capped += 1
                logging.warning(f"Subtitle {record.number} shortened to {end - record.start.time:.3f}s to avoid overlapping subtitle {next_record.number}")

        record.end = TimeCode(end, record.end.frame_rate)

    return capped
