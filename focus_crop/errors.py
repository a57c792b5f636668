"""
Error types raised by focus-crop.

Every error derives from FocusCropError so callers can catch the whole
family at once. Validation errors additionally derive from ValueError,
matching how the pure geometry functions report bad input.
"""


class FocusCropError(Exception):
    """Base class for all focus-crop errors"""


class InputError(FocusCropError):
    """The source file cannot be processed at all"""


class SourceNotFound(InputError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"File not found ({path})")


class UnsupportedFileType(InputError):
    def __init__(self, mimetype):
        self.mimetype = mimetype
        super().__init__(f"File not supported ({mimetype})")


class InvalidSizeSpec(FocusCropError, ValueError):
    """A size token is not of the form '<width>x<height>' with positive values"""


class InvalidFocusPoint(FocusCropError, ValueError):
    """A focus percentage is not a real number"""


class InvalidCropGeometry(FocusCropError, ValueError):
    """A crop window would extend past the scaled buffer"""


class ConfigurationError(FocusCropError, ValueError):
    """An option is unknown or outside its allowed range"""


class CollaboratorError(FocusCropError):
    """
    Decode, resample or encode failed.

    The message is the underlying error's message, and the original
    exception is kept as __cause__.
    """
