"""
Image and target size types plus the size token parser.

A size token is what users type on the command line or pass in the size
list: '<width>x<height>', e.g. '400x300'. Parsing is strict - a token that
would produce a missing or non-positive dimension is rejected rather than
allowed to flow into the geometry calculations.
"""
import re
from dataclasses import dataclass

from focus_crop.errors import InvalidSizeSpec


SIZE_PATTERN = re.compile(r'^(-?[0-9]+)x(-?[0-9]+)$')


def _check_positive_int(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


@dataclass(frozen=True)
class ImageDimensions:
    """Pixel size of a decoded image or an intermediate buffer"""
    width: int
    height: int

    def __post_init__(self):
        _check_positive_int("Image width", self.width)
        _check_positive_int("Image height", self.height)


@dataclass(frozen=True)
class TargetSize:
    """Exact output size requested for one derivative"""
    width: int
    height: int

    def __post_init__(self):
        _check_positive_int("Target width", self.width)
        _check_positive_int("Target height", self.height)

    @property
    def token(self) -> str:
        """The size rendered back as '<width>x<height>'"""
        return f"{self.width}x{self.height}"


def parse_size(token: str) -> TargetSize:
    """
    Parse a size token like '400x300'.

    Args:
        token: Size in format '<width>x<height>'. Surrounding whitespace
               is ignored.

    Returns:
        TargetSize with both components > 0

    Raises:
        InvalidSizeSpec: If either component is missing, non-numeric,
                         zero or negative

    Examples:
        >>> parse_size("400x300")
        TargetSize(width=400, height=300)
        >>> parse_size("400x")
        Traceback (most recent call last):
        ...
        focus_crop.errors.InvalidSizeSpec: Invalid size: '400x'. Expected '<width>x<height>' (e.g., '400x300')
    """
    if not isinstance(token, str):
        raise InvalidSizeSpec(f"Invalid size: {token!r}. Expected a string like '400x300'")

    match = SIZE_PATTERN.match(token.strip())
    if not match:
        raise InvalidSizeSpec(f"Invalid size: {token!r}. Expected '<width>x<height>' (e.g., '400x300')")

    width = int(match.group(1))
    height = int(match.group(2))
    if width <= 0 or height <= 0:
        raise InvalidSizeSpec(f"Invalid size values: {token!r}. Both values must be positive")

    return TargetSize(width, height)


def format_size(dimensions: ImageDimensions) -> str:
    """
    Render dimensions as a size token.

    Used to build the default single-size job at the source's native size.

    Examples:
        >>> format_size(ImageDimensions(800, 600))
        '800x600'
    """
    return f"{dimensions.width}x{dimensions.height}"
