"""
Pure geometry for focus cropping: size parsing, scale planning, crop planning
and output naming. Nothing in this package touches pixels or files.
"""
from focus_crop.core.sizes import ImageDimensions, TargetSize, parse_size, format_size
from focus_crop.core.scaling import ScalePlan, plan_scale
from focus_crop.core.focus import CropOffset, FocusPoint, plan_crop
from focus_crop.core.naming import output_path_for

__all__ = [
    'ImageDimensions', 'TargetSize', 'parse_size', 'format_size',
    'ScalePlan', 'plan_scale',
    'CropOffset', 'FocusPoint', 'plan_crop',
    'output_path_for',
]
