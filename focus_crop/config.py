"""
Configuration for a focus-crop run.

All options live in one explicit dataclass with documented defaults. The
config is validated once when it is built and then passed unchanged to
every job.

Options can come from three places:
- keyword arguments (library use)
- an option dict with camelCase names (HTTP API)
- environment variables (CLI defaults, e.g. FOCUS_X=30)
"""
import os
from dataclasses import dataclass, field, replace
from typing import Optional

from focus_crop.core.focus import FocusPoint
from focus_crop.errors import ConfigurationError, InvalidFocusPoint

DEFAULT_SUFFIX = '-[size]-focused'

QUALITY_RANGE = (0, 3)
UNSHARP_AMOUNT_RANGE = (0, 500)
UNSHARP_THRESHOLD_RANGE = (0, 100)


def _check_range(name: str, value, bounds) -> None:
    low, high = bounds
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    if not (low <= value <= high):
        raise ConfigurationError(f"{name} must be between {low} and {high}: {value}")


@dataclass(frozen=True)
class ResampleOptions:
    """Settings handed to the resampling collaborator"""
    quality: int = 3              # 0..3, higher = sharper filter
    alpha: bool = False           # Keep the alpha channel when resampling
    unsharp_amount: float = 0     # 0..500, 0 disables sharpening
    unsharp_threshold: float = 0  # 0..100

    def __post_init__(self):
        _check_range("quality", self.quality, QUALITY_RANGE)
        if int(self.quality) != self.quality:
            raise ConfigurationError(f"quality must be an integer: {self.quality}")
        _check_range("unsharpAmount", self.unsharp_amount, UNSHARP_AMOUNT_RANGE)
        _check_range("unsharpThreshold", self.unsharp_threshold, UNSHARP_THRESHOLD_RANGE)


@dataclass(frozen=True)
class FocusCropConfig:
    """
    Options for one call to process().

    Attributes:
        directory: Output directory. None means the source file's directory.
        prefix: Filename prefix template, may contain '[size]'
        suffix: Filename suffix template, may contain '[size]'
        focus_x: Horizontal focus in percent (0 = left, 100 = right)
        focus_y: Vertical focus in percent (0 = top, 100 = bottom)
        resample: Resampling settings
        quiet: Suppress per-size and total timing output
        workers: Number of worker processes. 1 processes sizes sequentially.
    """
    directory: Optional[str] = None
    prefix: str = ''
    suffix: str = DEFAULT_SUFFIX
    focus_x: float = 50.0
    focus_y: float = 50.0
    resample: ResampleOptions = field(default_factory=ResampleOptions)
    quiet: bool = False
    workers: int = 1

    def __post_init__(self):
        if not isinstance(self.prefix, str) or not isinstance(self.suffix, str):
            raise ConfigurationError("prefix and suffix must be strings")
        if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers < 1:
            raise ConfigurationError(f"workers must be at least 1, got {self.workers!r}")
        try:
            FocusPoint(self.focus_x, self.focus_y)
        except InvalidFocusPoint as e:
            raise ConfigurationError(str(e)) from e

    @property
    def focus(self) -> FocusPoint:
        return FocusPoint(self.focus_x, self.focus_y)

    def with_overrides(self, **overrides) -> 'FocusCropConfig':
        """Copy of this config with some fields replaced (None values ignored)"""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    @classmethod
    def from_options(cls, options: Optional[dict] = None) -> 'FocusCropConfig':
        """
        Build a config from an option dict.

        Accepts the camelCase names used by the HTTP API: directory, prefix,
        suffix, focusX, focusY, quality, alpha, unsharpAmount,
        unsharpThreshold, quiet, workers.

        Raises:
            ConfigurationError: On unknown keys or invalid values

        Examples:
            >>> FocusCropConfig.from_options({'focusX': 30, 'quality': 1}).focus_x
            30
        """
        options = dict(options or {})
        unknown = set(options) - set(OPTION_NAMES)
        if unknown:
            raise ConfigurationError(f"Unknown options: {', '.join(sorted(unknown))}")

        resample_kwargs = {}
        config_kwargs = {}
        for key, value in options.items():
            name = OPTION_NAMES[key]
            if name in RESAMPLE_FIELDS:
                resample_kwargs[name] = value
            else:
                config_kwargs[name] = value

        return cls(resample=ResampleOptions(**resample_kwargs), **config_kwargs)

    @classmethod
    def from_env(cls, environ=None) -> 'FocusCropConfig':
        """
        Build a config from environment variables.

        Reads FOCUS_X, FOCUS_Y, QUALITY, ALPHA, UNSHARP_AMOUNT,
        UNSHARP_THRESHOLD, QUIET and WORKERS. Unset variables keep their
        defaults.
        """
        environ = os.environ if environ is None else environ
        try:
            resample = ResampleOptions(
                quality=int(environ.get('QUALITY', '3')),
                alpha=_env_flag(environ.get('ALPHA', '0')),
                unsharp_amount=float(environ.get('UNSHARP_AMOUNT', '0')),
                unsharp_threshold=float(environ.get('UNSHARP_THRESHOLD', '0')),
            )
            return cls(
                focus_x=float(environ.get('FOCUS_X', '50')),
                focus_y=float(environ.get('FOCUS_Y', '50')),
                resample=resample,
                quiet=_env_flag(environ.get('QUIET', '0')),
                workers=int(environ.get('WORKERS', '1')),
            )
        except ValueError as e:
            if isinstance(e, ConfigurationError):
                raise
            raise ConfigurationError(f"Invalid environment setting: {e}") from e


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


# camelCase option name -> dataclass field
OPTION_NAMES = {
    'directory': 'directory',
    'prefix': 'prefix',
    'suffix': 'suffix',
    'focusX': 'focus_x',
    'focusY': 'focus_y',
    'quality': 'quality',
    'alpha': 'alpha',
    'unsharpAmount': 'unsharp_amount',
    'unsharpThreshold': 'unsharp_threshold',
    'quiet': 'quiet',
    'workers': 'workers',
}

RESAMPLE_FIELDS = ('quality', 'alpha', 'unsharp_amount', 'unsharp_threshold')
