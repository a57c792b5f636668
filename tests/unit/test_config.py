"""
Unit tests for focus_crop.config module.

Tests defaults, validation, camelCase option loading and environment
loading.
"""
import pytest
from focus_crop.config import DEFAULT_SUFFIX, FocusCropConfig, ResampleOptions
from focus_crop.core.focus import FocusPoint
from focus_crop.errors import ConfigurationError


class TestDefaults:
    """Tests for documented default values"""

    def test_config_defaults(self):
        config = FocusCropConfig()
        assert config.directory is None
        assert config.prefix == ""
        assert config.suffix == DEFAULT_SUFFIX == "-[size]-focused"
        assert config.focus == FocusPoint(50, 50)
        assert config.quiet is False
        assert config.workers == 1

    def test_resample_defaults(self):
        options = ResampleOptions()
        assert options.quality == 3
        assert options.alpha is False
        assert options.unsharp_amount == 0
        assert options.unsharp_threshold == 0


class TestValidation:
    """Tests that invalid values are rejected once, at construction"""

    @pytest.mark.parametrize("quality", [-1, 4, 1.5, "3", True])
    def test_invalid_quality(self, quality):
        with pytest.raises(ConfigurationError):
            ResampleOptions(quality=quality)

    def test_unsharp_ranges(self):
        ResampleOptions(unsharp_amount=500, unsharp_threshold=100)
        with pytest.raises(ConfigurationError, match="unsharpAmount"):
            ResampleOptions(unsharp_amount=501)
        with pytest.raises(ConfigurationError, match="unsharpThreshold"):
            ResampleOptions(unsharp_threshold=-1)

    def test_invalid_workers(self):
        with pytest.raises(ConfigurationError, match="workers"):
            FocusCropConfig(workers=0)

    def test_nan_focus_rejected(self):
        with pytest.raises(ConfigurationError, match="Focus X"):
            FocusCropConfig(focus_x=float("nan"))

    def test_out_of_range_focus_accepted(self):
        """Out-of-range focus is clamped later, never rejected"""
        assert FocusCropConfig(focus_x=-10, focus_y=200).focus == FocusPoint(-10, 200)

    def test_templates_must_be_strings(self):
        with pytest.raises(ConfigurationError):
            FocusCropConfig(suffix=None)


class TestFromOptions:
    """Tests for FocusCropConfig.from_options"""

    def test_empty_options_give_defaults(self):
        assert FocusCropConfig.from_options(None) == FocusCropConfig()
        assert FocusCropConfig.from_options({}) == FocusCropConfig()

    def test_camel_case_names(self):
        config = FocusCropConfig.from_options({
            "directory": "/tmp/out",
            "prefix": "[size]_",
            "suffix": "",
            "focusX": 30,
            "focusY": 70,
            "quality": 1,
            "alpha": True,
            "unsharpAmount": 80,
            "unsharpThreshold": 2,
            "quiet": True,
        })
        assert config.directory == "/tmp/out"
        assert config.prefix == "[size]_"
        assert config.suffix == ""
        assert config.focus == FocusPoint(30, 70)
        assert config.resample == ResampleOptions(quality=1, alpha=True, unsharp_amount=80, unsharp_threshold=2)
        assert config.quiet is True

    def test_unknown_option_rejected(self):
        with pytest.raises(ConfigurationError, match="Unknown options: focus_x"):
            FocusCropConfig.from_options({"focus_x": 10})

    def test_invalid_value_rejected(self):
        with pytest.raises(ConfigurationError):
            FocusCropConfig.from_options({"quality": 9})


class TestFromEnv:
    """Tests for FocusCropConfig.from_env"""

    def test_empty_environment_gives_defaults(self):
        assert FocusCropConfig.from_env({}) == FocusCropConfig()

    def test_reads_variables(self):
        config = FocusCropConfig.from_env({
            "FOCUS_X": "25",
            "FOCUS_Y": "75.5",
            "QUALITY": "2",
            "ALPHA": "true",
            "UNSHARP_AMOUNT": "100",
            "UNSHARP_THRESHOLD": "5",
            "QUIET": "1",
            "WORKERS": "3",
        })
        assert config.focus == FocusPoint(25, 75.5)
        assert config.resample == ResampleOptions(quality=2, alpha=True, unsharp_amount=100, unsharp_threshold=5)
        assert config.quiet is True
        assert config.workers == 3

    def test_unparseable_variable(self):
        with pytest.raises(ConfigurationError, match="Invalid environment setting"):
            FocusCropConfig.from_env({"QUALITY": "best"})

    def test_out_of_range_variable(self):
        with pytest.raises(ConfigurationError, match="quality"):
            FocusCropConfig.from_env({"QUALITY": "7"})


def test_with_overrides_ignores_none():
    config = FocusCropConfig(focus_x=10).with_overrides(focus_x=None, focus_y=90, quiet=True)
    assert config.focus == FocusPoint(10, 90)
    assert config.quiet is True
