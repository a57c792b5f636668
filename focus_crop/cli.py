"""
Command line interface.

    focus-crop photo.jpg 400x400 1200x600 --focus-x 30 --focus-y 70

Defaults for the tuning options come from environment variables
(FOCUS_X, FOCUS_Y, QUALITY, ALPHA, UNSHARP_AMOUNT, UNSHARP_THRESHOLD,
QUIET, WORKERS); flags override them.
"""
import argparse
import os
import sys

from focus_crop.config import FocusCropConfig, ResampleOptions
from focus_crop.errors import FocusCropError
from focus_crop.orchestrator import process
from focus_crop.web import DEFAULT_HOST, DEFAULT_PORT, AppState, create_app, run_flask_server


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='focus-crop',
        description='Resize and crop an image around a focus point'
    )
    parser.add_argument('input', nargs='?', help='Input JPEG or PNG file')
    parser.add_argument('sizes', nargs='*', help='Output sizes (e.g., 400x400 1200x600). Default: native size')
    parser.add_argument('--directory', help='Output directory (default: next to the input)')
    parser.add_argument('--prefix', help="Filename prefix, may contain '[size]'")
    parser.add_argument('--suffix', help="Filename suffix, may contain '[size]' (default: '-[size]-focused')")
    parser.add_argument('--focus-x', type=float, help='Horizontal focus in percent (0=left, 100=right)')
    parser.add_argument('--focus-y', type=float, help='Vertical focus in percent (0=top, 100=bottom)')
    parser.add_argument('--quality', type=int, choices=range(4), help='Resampling quality 0-3')
    parser.add_argument('--alpha', action='store_true', default=None, help='Keep the alpha channel')
    parser.add_argument('--unsharp-amount', type=float, help='Unsharp mask amount 0-500')
    parser.add_argument('--unsharp-threshold', type=float, help='Unsharp mask threshold 0-100')
    parser.add_argument('--workers', type=int, help='Process sizes in this many worker processes')
    parser.add_argument('--quiet', action='store_true', default=None, help='Do not print timings')
    parser.add_argument('--serve', action='store_true', help='Start the HTTP API instead of cropping')
    parser.add_argument('--port', type=int, default=int(os.getenv('PORT', DEFAULT_PORT)),
                        help=f'HTTP API port (default: {DEFAULT_PORT})')
    parser.add_argument('--host', default=os.getenv('FOCUS_CROP_HOST', DEFAULT_HOST),
                        help=f'HTTP API bind address (default: {DEFAULT_HOST}; use 0.0.0.0 to expose it)')
    return parser


def config_from_args(args: argparse.Namespace, environ=None) -> FocusCropConfig:
    """Environment defaults with command line flags applied on top"""
    config = FocusCropConfig.from_env(environ)
    resample = config.resample
    resample = ResampleOptions(
        quality=resample.quality if args.quality is None else args.quality,
        alpha=resample.alpha if args.alpha is None else args.alpha,
        unsharp_amount=resample.unsharp_amount if args.unsharp_amount is None else args.unsharp_amount,
        unsharp_threshold=resample.unsharp_threshold if args.unsharp_threshold is None else args.unsharp_threshold,
    )
    return config.with_overrides(
        directory=args.directory,
        prefix=args.prefix,
        suffix=args.suffix,
        focus_x=args.focus_x,
        focus_y=args.focus_y,
        resample=resample,
        quiet=args.quiet,
        workers=args.workers,
    )


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.serve:
        app = create_app(AppState())
        print("\n" + "=" * 70)
        print("API available at: http://{}:{}".format(args.host, args.port))
        print("=" * 70)
        print()
        run_flask_server(app, args.port, args.host)
        return 0

    if not args.input:
        parser.error('input is required unless --serve is given')

    try:
        config = config_from_args(args)
        results = process(args.input, args.sizes, config)
    except FocusCropError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not config.quiet:
        for result in results:
            print(f"✓ {result.output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
