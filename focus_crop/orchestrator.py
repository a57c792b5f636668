"""
Resize/crop orchestration.

Runs the geometry in focus_crop.core against an ImageBackend, once per
requested size:

    parse size -> plan scale -> resample -> plan crop -> crop -> encode

Sizes are processed in input order and the run stops at the first failure.
Files written for earlier sizes are left in place.

With workers > 1 the sizes are spread over a multiprocessing pool. Each
worker decodes its own copy of the source, so no buffers are shared between
jobs, and results (and the reported error) still follow input order.
"""
import mimetypes
from contextlib import contextmanager
from dataclasses import dataclass, replace
from multiprocessing import Pool
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Union

from focus_crop.config import FocusCropConfig
from focus_crop.core.focus import CropOffset, plan_crop
from focus_crop.core.naming import output_path_for
from focus_crop.core.scaling import ScalePlan, plan_scale
from focus_crop.core.sizes import ImageDimensions, TargetSize, format_size, parse_size
from focus_crop.errors import (
    CollaboratorError,
    FocusCropError,
    SourceNotFound,
    UnsupportedFileType,
)
from focus_crop.imaging.backend import ImageBackend, SUPPORTED_MIMETYPES
from focus_crop.imaging.pillow import PillowBackend
from focus_crop.progress import ProgressReporter, elapsed_ms, now_ms

SizeLike = Union[str, TargetSize]


@dataclass(frozen=True)
class ResizeJob:
    """One unit of work: a single output size"""
    target_size: TargetSize
    output_path: Path
    scale_plan: ScalePlan
    crop_offset: Optional[CropOffset] = None   # Set once the buffer exists


@dataclass(frozen=True)
class ResizeResult:
    """A completed job and how long it took"""
    job: ResizeJob
    elapsed_ms: int

    @property
    def size_token(self) -> str:
        return self.job.target_size.token

    @property
    def output_path(self) -> Path:
        return self.job.output_path


@contextmanager
def collaborator_errors():
    """Re-raise backend/library failures as CollaboratorError"""
    try:
        yield
    except FocusCropError:
        raise
    except Exception as e:
        raise CollaboratorError(str(e) or e.__class__.__name__) from e


def detect_mimetype(path: Union[str, Path]) -> str:
    """
    Look up a file's mimetype from its extension.

    Examples:
        >>> detect_mimetype("photo.JPG")
        'image/jpeg'
        >>> detect_mimetype("notes.txt")
        'text/plain'
    """
    mimetype, _ = mimetypes.guess_type(str(path))
    return mimetype or 'application/octet-stream'


def validate_source(source_path: Union[str, Path, None]) -> str:
    """
    Check the source exists and is a supported type.

    Returns:
        The source mimetype

    Raises:
        SourceNotFound: If the path is empty or does not exist
        UnsupportedFileType: If the file is not JPEG or PNG
    """
    if not source_path or not Path(source_path).is_file():
        raise SourceNotFound(source_path)

    mimetype = detect_mimetype(source_path)
    if mimetype not in SUPPORTED_MIMETYPES:
        raise UnsupportedFileType(mimetype)
    return mimetype


def resolve_sizes(sizes: Optional[Sequence[SizeLike]], source: ImageDimensions) -> List[SizeLike]:
    """
    Default an empty size list to the source's native size.

    Examples:
        >>> resolve_sizes(None, ImageDimensions(800, 600))
        ['800x600']
        >>> resolve_sizes(['400x400'], ImageDimensions(800, 600))
        ['400x400']
    """
    if not sizes:
        return [format_size(source)]
    return list(sizes)


def resolve_directory(source_path: Union[str, Path], config: FocusCropConfig) -> Path:
    if config.directory:
        return Path(config.directory)
    return Path(source_path).parent


def plan_job(
    source: ImageDimensions,
    size: SizeLike,
    source_path: Union[str, Path],
    directory: Union[str, Path],
    config: FocusCropConfig
) -> ResizeJob:
    """
    Parse one size and plan its scale step.

    Raises:
        InvalidSizeSpec: If the size token is malformed
    """
    target = size if isinstance(size, TargetSize) else parse_size(size)
    output_path = output_path_for(source_path, directory, config.prefix, config.suffix, target.token)
    return ResizeJob(
        target_size=target,
        output_path=output_path,
        scale_plan=plan_scale(source, target),
    )


def plan_jobs(
    source: ImageDimensions,
    sizes: Optional[Sequence[SizeLike]],
    source_path: Union[str, Path],
    config: Optional[FocusCropConfig] = None
) -> List[ResizeJob]:
    """
    Plan every job up front without touching any pixels.

    Useful for dry runs. process() plans each job lazily instead, so a bad
    size late in the list does not stop earlier sizes from being written.

    Examples:
        >>> jobs = plan_jobs(ImageDimensions(800, 600), [], "photo.jpg")
        >>> [job.target_size.token for job in jobs]
        ['800x600']
    """
    config = config or FocusCropConfig()
    directory = resolve_directory(source_path, config)
    return [
        plan_job(source, size, source_path, directory, config)
        for size in resolve_sizes(sizes, source)
    ]


def run_job(
    backend: ImageBackend,
    image: Any,
    job: ResizeJob,
    mimetype: str,
    config: FocusCropConfig
) -> ResizeJob:
    """
    Resample, crop and encode one planned job.

    The crop is planned against the dimensions the resampler actually
    returned, not the requested ones.

    Returns:
        The job with its crop_offset filled in

    Raises:
        CollaboratorError: If resampling, cropping or encoding fails
        InvalidCropGeometry: If the resampled buffer does not cover the target
    """
    with collaborator_errors():
        buffer = backend.resample(image, job.scale_plan.resample_dimensions, config.resample)
        buffer_dims = backend.dimensions(buffer)

    offset = plan_crop(buffer_dims, job.target_size, config.focus)

    with collaborator_errors():
        cropped = backend.crop(buffer, offset, job.target_size)
        backend.encode(cropped, mimetype, job.output_path)

    return replace(job, crop_offset=offset)


def process_size(
    backend: ImageBackend,
    image: Any,
    source: ImageDimensions,
    size: SizeLike,
    source_path: Union[str, Path],
    mimetype: str,
    directory: Union[str, Path],
    config: FocusCropConfig
) -> ResizeResult:
    """Plan and run a single size, timing it"""
    start = now_ms()
    job = plan_job(source, size, source_path, directory, config)
    job = run_job(backend, image, job, mimetype, config)
    return ResizeResult(job=job, elapsed_ms=elapsed_ms(start))


def _process_size_in_worker(args):
    """
    Worker function for multiprocessing.

    This must be a top-level function so it can be pickled. Each worker
    decodes the source itself, giving every job its own buffers.

    Args:
        args: Tuple of (backend, source_path, mimetype, size, directory, config)
    """
    backend, source_path, mimetype, size, directory, config = args
    with collaborator_errors():
        image, source = backend.decode_with_dimensions(source_path, mimetype)
    return process_size(backend, image, source, size, source_path, mimetype, directory, config)


def _run_sequential(backend, image, source, sizes, source_path, mimetype, directory, config,
                    results, reporter, progress_callback):
    for size in sizes:
        result = process_size(backend, image, source, size, source_path, mimetype, directory, config)
        results.append(result)
        reporter.size_done(result.size_token, result.elapsed_ms)
        if progress_callback:
            progress_callback(len(results), len(sizes))


def _run_parallel(backend, sizes, source_path, mimetype, directory, config, workers,
                  results, reporter, progress_callback):
    args_list = [
        (backend, str(source_path), mimetype, size, str(directory), config)
        for size in sizes
    ]
    with Pool(processes=workers) as pool:
        # imap yields in input order, so the first error raised here is the
        # first failing size in the list, not the first to fail in time
        outcomes = pool.imap(_process_size_in_worker, args_list)
        for _ in args_list:
            # Pickling and pool failures surface here too
            with collaborator_errors():
                result = next(outcomes)
            results.append(result)
            reporter.size_done(result.size_token, result.elapsed_ms)
            if progress_callback:
                progress_callback(len(results), len(sizes))


def process(
    source_path: Union[str, Path],
    sizes: Optional[Sequence[SizeLike]] = None,
    config: Optional[FocusCropConfig] = None,
    backend: Optional[ImageBackend] = None,
    callback: Optional[Callable[[Optional[Exception]], None]] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None
) -> List[ResizeResult]:
    """
    Produce one focus-cropped derivative of an image per requested size.

    Args:
        source_path: JPEG or PNG file to crop
        sizes: Size tokens like '400x300' (or TargetSize objects). None or
               empty means a single derivative at the source's native size.
        config: Options (defaults to FocusCropConfig())
        backend: Imaging collaborators (defaults to PillowBackend())
        callback: Optional function(error) called exactly once, with None on
                  success or the first error. When given, errors (including
                  ones raised by progress_callback) are passed to it instead
                  of being raised.
        progress_callback: Optional function(current, total) called after
                           each size completes

    Returns:
        ResizeResult for every size that completed, in input order

    Raises:
        InputError: If the source is missing or not JPEG/PNG
        InvalidSizeSpec: If a size token is malformed
        CollaboratorError: If decoding, resampling or encoding fails
        InvalidCropGeometry: If a buffer does not cover its target

    Examples:
        >>> results = process("photo.jpg", ["400x400", "300x200"],
        ...                   FocusCropConfig(focus_x=30, focus_y=70))
        - 400x400 in 41 ms
        - 300x200 in 18 ms
        -------------------
        Done in 75 ms
        >>> [str(r.output_path) for r in results]
        ['photo-400x400-focused.jpg', 'photo-300x200-focused.jpg']
    """
    start = now_ms()
    config = config or FocusCropConfig()
    backend = backend or PillowBackend()
    reporter = ProgressReporter(quiet=config.quiet)
    results = []
    error = None

    try:
        mimetype = validate_source(source_path)

        directory = resolve_directory(source_path, config)
        with collaborator_errors():
            image, source = backend.decode_with_dimensions(source_path, mimetype)
            directory.mkdir(parents=True, exist_ok=True)

        sizes = resolve_sizes(sizes, source)
        workers = min(config.workers, len(sizes))

        try:
            if workers > 1:
                _run_parallel(backend, sizes, source_path, mimetype, directory, config, workers,
                              results, reporter, progress_callback)
            else:
                _run_sequential(backend, image, source, sizes, source_path, mimetype, directory,
                                config, results, reporter, progress_callback)
        finally:
            reporter.all_done(elapsed_ms(start))
    except FocusCropError as e:
        error = e
    except Exception as e:
        if callback is None:
            raise
        error = e

    if callback is not None:
        callback(error)
    elif error is not None:
        raise error

    return results
