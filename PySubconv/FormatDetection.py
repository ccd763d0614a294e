"""
Sniff the format and text encoding of subtitle input from its first few bytes.
"""
from __future__ import annotations

import codecs
import logging
from typing import NamedTuple

import regex

from PySubconv.Options import default_encoding, fallback_encoding
from PySubconv.SubtitleError import SubtitleEncodingError, SubtitleFormatError
from PySubconv.SubtitleFormat import SubtitleFormat

class DetectedFormat(NamedTuple):
    format : SubtitleFormat
    encoding : str|None

# Byte order marks, with the codec that consumes them while decoding
_byte_order_marks : list[tuple[bytes, str, str]] = [
    (codecs.BOM_UTF8, 'utf-8-sig', 'utf-8'),
    (codecs.BOM_UTF16_LE, 'utf-16', 'utf-16-le'),
    (codecs.BOM_UTF16_BE, 'utf-16', 'utf-16-be'),
]

_srt_pattern = regex.compile(rb'^1(?:\r\n\d|\n\d\d)')
_sub_pattern = regex.compile(rb'^\{(?:\d\}\{|\d\d\}|\d\d\d)')

def DetectFormat(data : bytes) -> DetectedFormat:
    """
    Guess the subtitle format and encoding of raw input.

    Input starting with a byte order mark is identified by the first character after the mark,
    `1` for SRT or `{` for SUB. Without a mark the opening bytes must look like the start of a
    SRT file (`1` followed by a line break and a digit) or a SUB file (`{` and a frame number).

    Raises:
        SubtitleFormatError: if the format cannot be recognised
    """
    for bom, encoding, codec in _byte_order_marks:
        if data.startswith(bom):
            first = data[len(bom):len(bom) + 8].decode(codec, errors='ignore')[:1]
            if first == '1':
                return DetectedFormat(SubtitleFormat.SRT, encoding)
            if first == '{':
                return DetectedFormat(SubtitleFormat.SUB, encoding)
            raise SubtitleFormatError(f"Unable to detect subtitle format after {codec} byte order mark")

    if _srt_pattern.match(data):
        return DetectedFormat(SubtitleFormat.SRT, None)

    if _sub_pattern.match(data):
        return DetectedFormat(SubtitleFormat.SUB, None)

    raise SubtitleFormatError("Unable to detect subtitle format, please specify the input format")

def DecodeInput(data : bytes, encoding : str|None = None) -> tuple[str, str]:
    """
    Decode raw input with a named encoding, returning the text and the encoding that was used.

    If no encoding is given the default encoding is tried first, then the fallback encoding.
    """
    if encoding:
        return _decode(data, encoding), encoding

    try:
        return _decode(data, default_encoding), default_encoding
    except SubtitleEncodingError:
        logging.info(f"Input is not valid {default_encoding}, decoding as {fallback_encoding}")
        return _decode(data, fallback_encoding), fallback_encoding

def EncodeOutput(text : str, encoding : str) -> bytes:
    """
    Encode output text with a named encoding
    """
    try:
        return text.encode(encoding)
    except LookupError as e:
        raise SubtitleEncodingError(f"Unknown output encoding '{encoding}'", e)
    except UnicodeEncodeError as e:
        raise SubtitleEncodingError(f"Unable to encode subtitles as {encoding}: {e}", e)

def _decode(data : bytes, encoding : str) -> str:
    try:
        return data.decode(encoding)
    except LookupError as e:
        raise SubtitleEncodingError(f"Unknown input encoding '{encoding}'", e)
    except UnicodeDecodeError as e:
        raise SubtitleEncodingError(f"Unable to decode input as {encoding}: {e}", e)
