"""
Integration tests for multi-process size handling.

Runs real Pillow jobs in a multiprocessing pool and checks that results
match sequential processing and follow input order.
"""
import pytest
from PIL import Image

from focus_crop.config import FocusCropConfig
from focus_crop.errors import InvalidSizeSpec
from focus_crop.orchestrator import process

pytestmark = pytest.mark.integration

SIZES = ["100x100", "300x150", "50x200", "120x90"]


def test_parallel_matches_sequential(split_jpeg, tmp_path):
    """Same offsets and file sizes with and without workers"""
    sequential = process(split_jpeg, SIZES, FocusCropConfig(
        directory=str(tmp_path / "seq"), focus_x=70, quiet=True))
    parallel = process(split_jpeg, SIZES, FocusCropConfig(
        directory=str(tmp_path / "par"), focus_x=70, workers=2, quiet=True))

    assert [r.size_token for r in parallel] == SIZES
    assert [r.job.crop_offset for r in parallel] == [r.job.crop_offset for r in sequential]
    for result in parallel:
        with Image.open(result.output_path) as img:
            assert img.size == (result.job.target_size.width, result.job.target_size.height)


def test_parallel_progress_in_input_order(split_jpeg):
    progress = []
    process(split_jpeg, SIZES, FocusCropConfig(workers=3, quiet=True),
            progress_callback=lambda current, total: progress.append((current, total)))
    assert progress == [(1, 4), (2, 4), (3, 4), (4, 4)]


def test_parallel_reports_first_error_in_input_order(split_jpeg):
    """Errors are reported for the earliest failing size in the list"""
    errors = []
    results = process(split_jpeg, ["100x100", "first-bad", "0x10", "50x50"],
                      FocusCropConfig(workers=4, quiet=True), callback=errors.append)

    assert len(errors) == 1
    assert isinstance(errors[0], InvalidSizeSpec)
    assert "first-bad" in str(errors[0])
    assert [r.size_token for r in results] == ["100x100"]
