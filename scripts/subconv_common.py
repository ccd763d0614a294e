import os
import logging

from argparse import ArgumentParser, Namespace
from dataclasses import dataclass

from PySubconv import init_options
from PySubconv.Options import Options, newline_sequences
from PySubconv.SubtitleError import SubtitleError
from PySubconv.SubtitleFormatRegistry import SubtitleFormatRegistry

config_dir = os.getenv('SUBCONV_CONFIG_DIR') or os.path.join(os.path.expanduser('~'), '.subconv')

@dataclass
class LoggerOptions():
    file_handler: logging.FileHandler|None
    log_path: str

def InitLogger(logfilename: str, debug: bool = False) -> LoggerOptions:
    """ Initialise the logger with a file handler and return the path to the log file """
    log_path = os.path.join(config_dir, f"{logfilename}.log")
    file_handler = None

    if debug:
        logging_level = logging.DEBUG
    else:
        level_name = os.getenv('LOG_LEVEL', 'WARNING').upper()
        logging_level = getattr(logging, level_name, logging.WARNING)

    # Diagnostics go to stderr so that converted subtitles can be written to stdout
    try:
        logging.basicConfig(format='%(levelname)s: %(message)s', encoding='utf-8', level=logging_level)
        logging.debug("Initialising log")

    except Exception:
        logging.basicConfig(format='%(levelname)s: %(message)s', level=logging_level)
        logging.debug("Unable to write to utf-8 log, falling back to default encoding")

    if debug:
        logging.debug("Debug logging enabled")

        try:
            os.makedirs(config_dir, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding='utf-8', mode='w')
            file_handler.setLevel(logging_level)
            file_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
            logging.getLogger('').addHandler(file_handler)
        except Exception as e:
            logging.warning(f"Unable to create log file at {log_path}: {e}")

    return LoggerOptions(file_handler=file_handler, log_path=log_path)

def CreateArgParser(description : str) -> ArgumentParser:
    """
    Create the argument parser for the conversion script
    """
    pre_parser = ArgumentParser(add_help=False)
    pre_parser.add_argument('--list-formats', action='store_true')
    pre_args, _ = pre_parser.parse_known_args()
    if pre_args.list_formats:
        HandleFormatListing(pre_args)

    formats = ['sub', 'txt', 'srt']
    parser = ArgumentParser(description=description)
    parser.add_argument('input', nargs='*', help="Subtitle file to convert (reads standard input if not given)")
    parser.add_argument('-i', '--input-encoding', type=str, default=None, help="Encoding of the input file (detected if not given)")
    parser.add_argument('-e', '--output-encoding', type=str, default=None, help="Encoding of the output file (default utf-8)")
    parser.add_argument('-f', '--input-format', type=str.lower, choices=formats, default=None, help="Format of the input file (detected if not given)")
    parser.add_argument('-t', '--output-format', type=str.lower, choices=formats, default=None, help="Format of the output file (default is the other format)")
    parser.add_argument('-I', '--ignore-errors', action='store_true', help="Report parse errors and carry on as best as possible")
    parser.add_argument('-o', '--output', type=str, default=None, help="Output file path (default standard output)")
    parser.add_argument('-l', '--line-ends-with', type=str.lower, choices=list(newline_sequences), default=None, help="Line endings for the output")
    parser.add_argument('-r', '--frame-rate', type=float, default=None, help="Frame rate for SUB files (default 24)")
    parser.add_argument('-s', '--shift', type=float, default=None, help="Number of seconds to shift all subtitles by (may be negative)")
    parser.add_argument('-V', '--verify', action='store_true', help="Report errors in the subtitles without writing any output")
    parser.add_argument('-v', '--validate', action='store_true', help="Fix errors in the subtitles, writing output only if something was fixed")
    parser.add_argument('--emit-output-if-clean', action='store_true', help="Write output after validation even if nothing needed fixing")
    parser.add_argument('-n', '--normalise', type=float, default=None, help="Set every subtitle's duration to this many seconds")
    parser.add_argument('-a', '--adaptive-duration', type=float, default=None, help="Set each subtitle's duration to this many seconds per line")
    parser.add_argument('-j', '--jiggle', type=float, default=None, help="Randomly move subtitles by up to this many seconds (not implemented)")
    parser.add_argument('--list-formats', action='store_true', help="List supported subtitle formats and exit")
    parser.add_argument('--debug', action='store_true', help="Run with DEBUG log level")
    return parser

def HandleFormatListing(args: Namespace) -> None:
    """Print supported subtitle formats and exit if requested."""
    if getattr(args, "list_formats", False):
        formats = SubtitleFormatRegistry.list_available_formats()
        if formats:
            print(f"Supported subtitle formats: {formats}")
        else:
            print("No subtitle formats available.")
        raise SystemExit(0)

def GetInputFile(args: Namespace) -> str|None:
    """
    Get the single input file, or None to read from standard input
    """
    if len(args.input) == 1:
        return args.input[0]

    if args.input:
        logging.warning(f"Expected one input file but {len(args.input)} were given, reading from standard input")
    else:
        logging.warning("No input file given, reading from standard input (only partially supported)")
    return None

def CreateOptions(args: Namespace, **kwargs) -> Options:
    """ Create options from the command line arguments """
    if args.jiggle is not None:
        raise SubtitleError("Jiggle is not implemented")

    settings = {
        'input_encoding': args.input_encoding,
        'output_encoding': args.output_encoding,
        'input_format': args.input_format,
        'output_format': args.output_format,
        'ignore_errors': args.ignore_errors,
        'line_ends_with': args.line_ends_with,
        'frame_rate': args.frame_rate,
        'shift': args.shift,
        'verify': args.verify,
        'validate': args.validate,
        'emit_output_if_clean': args.emit_output_if_clean,
        'normalise': args.normalise,
        'adaptive_duration': args.adaptive_duration,
    }

    settings.update(kwargs)

    options = init_options(**settings)
    CheckOptionValues(options)
    return options

def CheckOptionValues(options : Options) -> None:
    """
    Reject impossible values and warn about unusual ones
    """
    frame_rate = options.frame_rate
    if frame_rate <= 0:
        raise SubtitleError(f"Frame rate must be positive, got {frame_rate:g}")
    if frame_rate < 10 or frame_rate > 120:
        logging.warning(f"Frame rate {frame_rate:g} is unusual, is it correct?")

    if options.normalise is not None and options.normalise < 0.5:
        logging.warning(f"Normalised duration of {options.normalise:g}s is very short")

    if options.adaptive_duration is not None and options.adaptive_duration < 0.5:
        logging.warning(f"Adaptive duration of {options.adaptive_duration:g}s per line is very short")

    if abs(options.shift) > 3600:
        logging.warning(f"Shifting subtitles by {options.shift:g}s is more than an hour")
