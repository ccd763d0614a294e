"""
PySubconv - Subtitle Conversion Library

Converts subtitles between the frame-based SUB/TXT format and the SRT format,
optionally validating, repairing, shifting and re-timing them along the way.

Basic Usage
-----------

# Configure options
opts = init_options(
        output_format="srt",
        frame_rate=25,
        validate=True,
        shift=1.5,
    )

# Load subtitles, detecting the format and encoding
data = load_subtitles("movie.sub", options=opts)

# Validate, repair and re-time them
if process_subtitles(data, opts):
    text = compose_subtitles(data, opts)
    write_subtitles(text, "movie.srt", opts)
"""
from __future__ import annotations

import logging
import sys
from typing import BinaryIO

from PySubconv.DurationAdjuster import AdjustDurations
from PySubconv.FormatDetection import EncodeOutput
from PySubconv.Helpers import GetInputPath
from PySubconv.Options import Options
from PySubconv.SettingsType import SettingType
from PySubconv.SubtitleData import SubtitleData
from PySubconv.SubtitleError import SubtitleError
from PySubconv.SubtitleFormat import SubtitleFormat
from PySubconv.SubtitleFormatRegistry import SubtitleFormatRegistry
from PySubconv.SubtitleShifter import ShiftedSubtitles
from PySubconv.SubtitleValidator import SubtitleValidator, ShouldEmitOutput
from PySubconv.version import __version__


def init_options(**settings: SettingType) -> Options:
    """
    Create and return an :class:`Options` instance containing settings for the conversion.

    Parameters
    ----------
    **settings : SettingType
        Keyword settings to configure the conversion, e.g.

        input_format = "sub",
        output_format = "srt",
        frame_rate = 25.0,
        line_ends_with = "crlf",
        ignore_errors = True

        See :class:`Options` for available settings.
        Options that are not specified will be assigned default values.

    Returns
    -------
    Options
        An immutable Options instance with the specified configuration.
    """
    return Options(settings)

def load_subtitles(filepath : str|None = None, *, options : Options|None = None, stream : BinaryIO|None = None) -> SubtitleData:
    """
    Load subtitles from a file, or from a binary stream (standard input by default).

    The format and encoding are detected from the content unless they are specified in the options.
    """
    options = options or Options()
    filepath = GetInputPath(filepath)

    if filepath:
        data = SubtitleFormatRegistry.detect_format_and_load_file(filepath, options)
    else:
        stream = stream or sys.stdin.buffer
        data = SubtitleFormatRegistry.detect_format_and_load_bytes(stream.read(), options)

    if not data.records:
        logging.warning("No subtitles were found in the input")
    else:
        logging.info(f"Loaded {data.count} subtitles")

    return data

def process_subtitles(data : SubtitleData, options : Options) -> bool:
    """
    Verify or validate the subtitles and apply any duration adjustments, in place.

    Returns
    -------
    bool
        True if the subtitles should be written out. Verification never produces output,
        and validation only does if something was fixed (or emit_output_if_clean is set).
    """
    if options.jiggle is not None:
        raise SubtitleError("Jiggle is not implemented")

    if options.verify or options.validate:
        validator = SubtitleValidator(options)
        result = validator.ValidateSubtitles(data.records, fix=options.validate)
        if not ShouldEmitOutput(result, options):
            if options.validate:
                logging.info("No fixes were needed, no output written")
            return False

    AdjustDurations(data.records, options)
    return True

def compose_subtitles(data : SubtitleData, options : Options) -> str:
    """
    Shift the subtitles (without modifying them) and compose them in the output format.

    If no output format is specified the subtitles are converted to the other format.
    """
    output_format = get_output_format(data, options)
    records = ShiftedSubtitles(data.records, options.shift)

    handler = SubtitleFormatRegistry.create_handler(output_format, options=options)
    return handler.compose(SubtitleData(records=records, metadata=data.metadata, detected_format=data.detected_format))

def get_output_format(data : SubtitleData, options : Options) -> SubtitleFormat:
    if options.output_format:
        return options.output_format
    if data.detected_format:
        return data.detected_format.opposite
    raise SubtitleError("Unable to determine the output format")

def write_subtitles(text : str, outputpath : str|None, options : Options, stream : BinaryIO|None = None) -> None:
    """
    Encode composed subtitles with the output encoding and write them to a file or stream (standard output by default).
    """
    content = EncodeOutput(text, options.output_encoding)
    if outputpath:
        try:
            with open(outputpath, 'wb') as f:
                f.write(content)
        except OSError as e:
            raise SubtitleError(f"Unable to write {outputpath}: {e}", e)
        logging.info(f"Wrote subtitles to {outputpath}")
    else:
        stream = stream or sys.stdout.buffer
        stream.write(content)
        stream.flush()

def convert_subtitles(filepath : str|None, outputpath : str|None, options : Options) -> str|None:
    """
    Run the whole pipeline: load, validate, adjust, shift, compose and write.

    Returns the composed text, or None if nothing was written.
    """
    data = load_subtitles(filepath, options=options)
    if not process_subtitles(data, options):
        return None

    text = compose_subtitles(data, options)
    write_subtitles(text, outputpath, options)
    return text

__all__ = [
    '__version__',
    'Options',
    'SubtitleData',
    'SubtitleError',
    'SubtitleFormat',
    'SubtitleFormatRegistry',
    'SubtitleValidator',
    'init_options',
    'load_subtitles',
    'process_subtitles',
    'compose_subtitles',
    'get_output_format',
    'write_subtitles',
    'convert_subtitles',
]
