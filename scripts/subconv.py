import os
import sys
import logging

base_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, base_path)

from scripts.subconv_common import (
    InitLogger,
    CreateArgParser,
    CreateOptions,
    GetInputFile,
)

from PySubconv import convert_subtitles
from PySubconv.Options import Options
from PySubconv.SubtitleError import SubtitleError

parser = CreateArgParser("Converts subtitles between SUB/TXT and SRT formats, optionally fixing and re-timing them")
args = parser.parse_args()

logger_options = InitLogger("subconv", args.debug)

try:
    options : Options = CreateOptions(args)

    convert_subtitles(GetInputFile(args), args.output, options)

except SubtitleError as e:
    logging.error(str(e))
    sys.exit(1)
