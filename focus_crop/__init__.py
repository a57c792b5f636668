"""
Resize and crop images around a focus point.

Each requested size is produced by scaling the source until it covers the
size, then cropping the window that keeps the focus point in view.
"""
from focus_crop.config import FocusCropConfig, ResampleOptions
from focus_crop.orchestrator import ResizeJob, ResizeResult, plan_jobs, process

__version__ = "1.0.0"

__all__ = ['FocusCropConfig', 'ResampleOptions', 'ResizeJob', 'ResizeResult', 'plan_jobs', 'process']
