from __future__ import annotations


class SubtitleError(Exception):
    """
    Base class for all errors raised while converting subtitles
    """
    def __init__(self, message : str|None = None, error : Exception|None = None):
        super().__init__(message)
        self.message : str|None = message
        self.error : Exception|None = error

    def __str__(self) -> str:
        if self.message:
            return self.message
        elif self.error:
            return str(self.error)
        return super().__str__()

class SubtitleParseError(SubtitleError):
    """ Raised when subtitle content cannot be parsed """
    def __init__(self, message : str|None = None, error : Exception|None = None, line_number : int|None = None):
        super().__init__(message, error)
        self.line_number : int|None = line_number

    def __str__(self) -> str:
        text = super().__str__()
        if self.line_number is not None:
            return f"Line {self.line_number}: {text}"
        return text

class SubtitleFormatError(SubtitleError):
    """ Raised when the subtitle format cannot be determined """
    pass

class SubtitleEncodingError(SubtitleError):
    """ Raised when input cannot be decoded or output cannot be encoded """
    pass

class SubtitleValidationError(SubtitleError):
    """
    A structural problem with a subtitle record found by the validator
    """
    def __init__(self, message : str|None = None, number : int|None = None, fixed : bool = False):
        super().__init__(message)
        self.number : int|None = number
        self.fixed : bool = fixed

    def __str__(self) -> str:
        text = self.message or type(self).__name__
        return f"Subtitle {self.number}: {text}" if self.number is not None else text

class InvalidDurationError(SubtitleValidationError):
    pass

class ShortDurationError(SubtitleValidationError):
    pass

class OverlapError(SubtitleValidationError):
    pass

class NumberingError(SubtitleValidationError):
    pass
