import importlib
import inspect
import logging
import os
import pkgutil
from pathlib import Path

from PySubconv.FormatDetection import DecodeInput, DetectFormat
from PySubconv.Options import Options
from PySubconv.SubtitleData import SubtitleData
from PySubconv.SubtitleError import SubtitleError, SubtitleFormatError
from PySubconv.SubtitleFileHandler import SubtitleFileHandler
from PySubconv.SubtitleFormat import SubtitleFormat


class SubtitleFormatRegistry:
    """
    Manages discovery and lookup of subtitle file handlers.

    Uses lazy discovery to find all subclasses of SubtitleFileHandler in the Formats package.
    Handlers are registered by their format and by their supported file extensions and priorities.
    """
    _handlers : dict[str, type[SubtitleFileHandler]] = {}
    _priorities : dict[str, int] = {}
    _formats : dict[SubtitleFormat, type[SubtitleFileHandler]] = {}
    _discovered : bool = False

    @classmethod
    def register_handler(cls, handler_class : type[SubtitleFileHandler]) -> None:
        """
        Register a subtitle file handler class for its format and supported extensions.
        """
        instance = handler_class()
        cls._formats[handler_class.FORMAT] = handler_class
        priorities = instance.get_extension_priorities()
        for ext, priority in priorities.items():
            ext = ext.lower()
            if ext not in cls._handlers or priority >= cls._priorities[ext]:
                cls._handlers[ext] = handler_class
                cls._priorities[ext] = priority

    @classmethod
    def get_handler_by_format(cls, format : SubtitleFormat) -> type[SubtitleFileHandler]:
        """
        Get the subtitle file handler class for a subtitle format.
        """
        cls._ensure_discovered()
        if format not in cls._formats:
            raise SubtitleFormatError(f"No handler is registered for {format.name} subtitles")
        return cls._formats[format]

    @classmethod
    def get_handler_by_extension(cls, extension : str) -> type[SubtitleFileHandler]:
        """
        Get the subtitle file handler class for the given extension.
        """
        cls._ensure_discovered()
        ext = extension.lower()
        if not ext.startswith('.'):
            ext = f".{ext}"
        if ext not in cls._handlers:
            raise SubtitleFormatError(f"Unknown subtitle format: {extension}. Available formats: {cls.list_available_formats()}")
        return cls._handlers[ext]

    @classmethod
    def create_handler(cls, format : SubtitleFormat|str|None = None, filename : str|None = None, options : Options|None = None) -> SubtitleFileHandler:
        """
        Instantiate a subtitle file handler for a format, an extension or a filename.
        """
        if isinstance(format, SubtitleFormat):
            return cls.get_handler_by_format(format)(options)

        extension = format or (cls.get_format_from_filename(filename) if filename else None)
        if not extension:
            raise SubtitleFormatError(
                f"Format cannot be deduced from filename or extension '{filename or format or 'None'}'. Available formats: {cls.list_available_formats()}")

        handler_cls = cls.get_handler_by_extension(extension)
        return handler_cls(options)

    @classmethod
    def enumerate_formats(cls) -> list[str]:
        """
        List all supported subtitle file extensions.
        """
        cls._ensure_discovered()
        return sorted(cls._handlers.keys())

    @classmethod
    def list_available_formats(cls) -> str:
        """
        Get a comma-separated string of all supported subtitle formats.
        """
        formats = cls.enumerate_formats()
        return "None" if not formats else ", ".join(formats)

    @classmethod
    def disable_autodiscovery(cls) -> None:
        """ Disable automatic discovery of subtitle formats (for testing) """
        cls.clear()
        cls._discovered = True

    @classmethod
    def enable_autodiscovery(cls) -> None:
        """ Enable automatic discovery of subtitle formats (for testing) """
        cls._discovered = False

    @classmethod
    def discover(cls) -> None:
        """
        Discover and register all subtitle file handlers in the Formats package.
        """
        package_path = Path(__file__).parent / "Formats"
        for _, module_name, _ in pkgutil.iter_modules([str(package_path)]):
            module = importlib.import_module(f"PySubconv.Formats.{module_name}")
            for _, obj in inspect.getmembers(module, inspect.isclass):
                if issubclass(obj, SubtitleFileHandler) and obj is not SubtitleFileHandler:
                    cls.register_handler(obj)
        cls._discovered = True

    @classmethod
    def clear(cls) -> None:
        """
        Clear all registered handlers
        """
        cls._handlers.clear()
        cls._priorities.clear()
        cls._formats.clear()
        cls._discovered = False

    @classmethod
    def get_format_from_filename(cls, filename : str) -> str|None:
        """
        Deduce subtitle format from file extension
        """
        base, extension = os.path.splitext(filename) # type: ignore[ignore-unused]
        return extension.lower() if extension else None

    @classmethod
    def detect_format_and_load_file(cls, path : str, options : Options) -> SubtitleData:
        """
        Read a subtitle file, detecting its format and encoding from its content where they are not specified.
        """
        try:
            with open(path, 'rb') as f:
                raw = f.read()
        except OSError as e:
            raise SubtitleError(f"Unable to read {path}: {e}", e)

        data = cls.detect_format_and_load_bytes(raw, options)
        data.metadata['sourcepath'] = path
        return data

    @classmethod
    def detect_format_and_load_bytes(cls, raw : bytes, options : Options) -> SubtitleData:
        """
        Decode and parse raw subtitle input, detecting format and encoding where they are not specified.

        Raises:
            SubtitleFormatError: if the format is not specified and cannot be detected
            SubtitleEncodingError: if the input cannot be decoded
            SubtitleParseError: if the input is malformed and errors are not ignored
        """
        cls._ensure_discovered()
        format = options.input_format
        encoding = options.input_encoding

        if format is None or encoding is None:
            try:
                detected = DetectFormat(raw)
                logging.info(f"Detected {detected.format.name} subtitles" + (f" encoded as {detected.encoding}" if detected.encoding else ""))
                format = format or detected.format
                encoding = encoding or detected.encoding
            except SubtitleFormatError:
                if format is None:
                    raise

        content, used_encoding = DecodeInput(raw, encoding)

        handler = cls.create_handler(format, options=options)
        data = handler.parse_string(content)
        data.encoding = used_encoding
        return data

    @classmethod
    def _ensure_discovered(cls) -> None:
        if not cls._discovered:
            cls.discover()
