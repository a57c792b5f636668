"""
Focus-point crop planning - pure functions with no side effects.

The resampled buffer covers the target box; this module decides which
target-sized window of it to keep. The window is moved toward the focus
point and clamped so it never leaves the buffer. Offsets are expressed the
way they are drawn: the (non-positive) position of the buffer's top-left
corner inside the target canvas.
"""
import math
from dataclasses import dataclass
from numbers import Real

from focus_crop.core.sizes import ImageDimensions, TargetSize
from focus_crop.errors import InvalidCropGeometry, InvalidFocusPoint


def _check_percentage(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, Real) or math.isnan(value):
        raise InvalidFocusPoint(f"{name} must be a number between 0 and 100, got {value!r}")


@dataclass(frozen=True)
class FocusPoint:
    """
    Point of interest in percent of the image size.

    (0, 0) is the top-left corner, (100, 100) the bottom-right. Values
    outside 0-100 are accepted and clamped when planning.
    """
    x: float = 50.0
    y: float = 50.0

    def __post_init__(self):
        _check_percentage("Focus X", self.x)
        _check_percentage("Focus Y", self.y)


@dataclass(frozen=True)
class CropOffset:
    """Where the buffer's top-left corner lands on the target canvas"""
    shift_x: float   # <= 0
    shift_y: float   # <= 0

    @property
    def left(self) -> float:
        """Distance of the crop window from the buffer's left edge"""
        return -self.shift_x

    @property
    def top(self) -> float:
        """Distance of the crop window from the buffer's top edge"""
        return -self.shift_y


def bound_percentage(percentage: float) -> float:
    """
    Clamp a percentage to 0-100.

    Examples:
        >>> bound_percentage(150)
        100
        >>> bound_percentage(-5)
        0
    """
    return max(min(percentage, 100), 0)


def plan_axis_shift(buffer_length: int, target_length: int, focus_percent: float) -> float:
    """
    Compute the crop shift along one axis.

    Args:
        buffer_length: Buffer size along this axis in pixels
        target_length: Target size along this axis in pixels
        focus_percent: Focus position along this axis, in percent

    Returns:
        Shift in pixels, always in [-(buffer_length - target_length), 0]

    Raises:
        InvalidCropGeometry: If the buffer is smaller than the target

    Examples:
        >>> plan_axis_shift(711, 400, 50)
        -155.5
        >>> plan_axis_shift(450, 300, 90)
        -150
        >>> plan_axis_shift(400, 400, 75)
        0
    """
    if buffer_length < target_length:
        raise InvalidCropGeometry(
            f"Buffer ({buffer_length}px) is smaller than target ({target_length}px)"
        )

    # No slack, nothing to move
    if buffer_length == target_length:
        return 0

    focus_px = (buffer_length / 100) * bound_percentage(focus_percent)
    half_target = target_length / 2

    if focus_px <= half_target:
        return 0
    if focus_px > buffer_length - half_target:
        return -(buffer_length - target_length)
    return -(focus_px - half_target)


def plan_crop(buffer: ImageDimensions, target: TargetSize, focus: FocusPoint) -> CropOffset:
    """
    Plan the crop window for a resampled buffer.

    This is a PURE function - same inputs always produce same outputs.
    Each axis is planned independently with plan_axis_shift.

    Args:
        buffer: Dimensions of the resampled buffer
        target: Requested output size
        focus: Focus point in percent

    Returns:
        CropOffset with 0 <= -shift <= buffer - target on both axes

    Raises:
        InvalidCropGeometry: If the buffer does not cover the target

    Examples:
        >>> plan_crop(ImageDimensions(450, 300), TargetSize(300, 300), FocusPoint(90, 10))
        CropOffset(shift_x=-150, shift_y=0)
    """
    return CropOffset(
        shift_x=plan_axis_shift(buffer.width, target.width, focus.x),
        shift_y=plan_axis_shift(buffer.height, target.height, focus.y),
    )
