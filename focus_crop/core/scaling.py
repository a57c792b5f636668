"""
Scale planning - pure functions with no side effects.

Given a source image and a target box, work out how large the source has to
be drawn so that it covers the box on both axes without distortion, and the
ratio that then shrinks it back down to the tightest covering size. The
resampler is handed that final size; the focus cropper trims the rest.
"""
from dataclasses import dataclass

from focus_crop.core.sizes import ImageDimensions, TargetSize


@dataclass(frozen=True)
class ScalePlan:
    """Result of scale planning for one target size"""
    scaled_width: float      # Source width after upscaling (if any)
    scaled_height: float     # Source height after upscaling (if any)
    coverage_ratio: float    # Divisor applied to reach the final size (>= 1)
    target_width: int
    target_height: int

    @property
    def final_width(self) -> float:
        return self.scaled_width / self.coverage_ratio

    @property
    def final_height(self) -> float:
        return self.scaled_height / self.coverage_ratio

    @property
    def resample_dimensions(self) -> ImageDimensions:
        """
        Whole-pixel size handed to the resampler.

        Rounded to the nearest pixel and never smaller than the target, so
        float error on the tight axis cannot leave the buffer one pixel short.
        """
        return ImageDimensions(
            width=max(self.target_width, int(round(self.final_width))),
            height=max(self.target_height, int(round(self.final_height))),
        )


def calculate_scaled_size(
    source_width: int,
    source_height: int,
    target_width: int,
    target_height: int
) -> tuple:
    """
    Upscale the source just enough to cover the target on both axes.

    Dimensions that already reach the target are never shrunk. When an axis
    falls short, the whole image grows by the factor that brings the shortest
    axis up to its target, so the other axis grows proportionally and the
    aspect ratio is kept.

    Args:
        source_width: Source width in pixels
        source_height: Source height in pixels
        target_width: Requested output width
        target_height: Requested output height

    Returns:
        Tuple of (scaled_width, scaled_height) as floats

    Raises:
        ValueError: If any dimension is zero or negative

    Examples:
        >>> calculate_scaled_size(1600, 900, 400, 400)
        (1600.0, 900.0)
        >>> calculate_scaled_size(200, 100, 400, 400)
        (800.0, 400.0)
    """
    if source_width <= 0 or source_height <= 0:
        raise ValueError(f"Source dimensions must be positive: {source_width}x{source_height}")
    if target_width <= 0 or target_height <= 0:
        raise ValueError(f"Target dimensions must be positive: {target_width}x{target_height}")

    growth = max(1.0, target_width / source_width, target_height / source_height)

    scaled_width = source_width * growth
    scaled_height = source_height * growth

    # Guard the axis that was grown to exactly meet its target
    if target_width / source_width == growth:
        scaled_width = float(max(scaled_width, target_width))
    if target_height / source_height == growth:
        scaled_height = float(max(scaled_height, target_height))

    return scaled_width, scaled_height


def calculate_coverage_ratio(
    scaled_width: float,
    scaled_height: float,
    target_width: int,
    target_height: int
) -> float:
    """
    Ratio that shrinks a covering image down to the tightest covering size.

    Only applies when the image overshoots the target on both axes; if
    either axis already matches, there is nothing to shrink and the ratio
    is 1.

    Examples:
        >>> calculate_coverage_ratio(1600, 900, 400, 400)
        2.25
        >>> calculate_coverage_ratio(800, 400, 400, 400)
        1
    """
    if scaled_width > target_width and scaled_height > target_height:
        return min(scaled_width / target_width, scaled_height / target_height)
    return 1


def plan_scale(source: ImageDimensions, target: TargetSize) -> ScalePlan:
    """
    Plan the resample step for one target size.

    This is a PURE function - same inputs always produce same outputs.

    Args:
        source: Decoded source image dimensions
        target: Requested output size

    Returns:
        ScalePlan whose scaled size covers the target while keeping the
        source aspect ratio, plus the ratio down to the final resample size

    Examples:
        >>> plan = plan_scale(ImageDimensions(1600, 900), TargetSize(400, 400))
        >>> plan.coverage_ratio
        2.25
        >>> plan.resample_dimensions
        ImageDimensions(width=711, height=400)
    """
    scaled_width, scaled_height = calculate_scaled_size(
        source.width, source.height, target.width, target.height
    )
    ratio = calculate_coverage_ratio(scaled_width, scaled_height, target.width, target.height)

    return ScalePlan(
        scaled_width=scaled_width,
        scaled_height=scaled_height,
        coverage_ratio=ratio,
        target_width=target.width,
        target_height=target.height,
    )
