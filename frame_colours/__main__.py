"""frame-colours — top-K exact dominant colours for every frame of a feed.

Usage: frame-colours <technique> <tmp_dir> <image> [options]

Techniques are auto-discovered from frame_colours/techniques/.
Each technique module's docstring is its documentation.
Run `frame-colours help <technique>` for full module docs.

Settings (FRAME_COLOURS_* only):
  OS environment variables are always used first.
  If a variable is not set, its value is read from a .env file found by walking
  up from the current directory, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.

  FRAME_COLOURS_TOP_K      colours per frame (default 5)
  FRAME_COLOURS_SLOTS      swatch slots (default 5)
  FRAME_COLOURS_FPS        stream replay rate, 0 = unpaced (default 0)
  FRAME_COLOURS_LOG_LEVEL  DEBUG/INFO/WARNING/ERROR (default WARNING)
"""

import argparse
import logging
import os
import sys

from frame_colours import registry
from frame_colours.core.config import Settings
from frame_colours.core.logs import setup_logging
from frame_colours.core.report import format_json, format_text
from frame_colours.core.types import InvalidArgumentError, Report

logger = logging.getLogger('frame_colours')


def _build_parser() -> argparse.ArgumentParser:
    techniques = registry.all_techniques()

    epilog = (
        'Examples:\n'
        '  frame-colours top ./tmp photo.png\n'
        '  frame-colours top ./tmp photo.png -k 10 --json\n'
        '  frame-colours stream ./tmp clip.gif --fps 30\n'
        '  frame-colours swatches ./tmp photo.png --slots 5\n'
        '  frame-colours help stream\n'
    )
    parser = argparse.ArgumentParser(
        prog='frame-colours',
        description='Top-K exact dominant colours per frame, with drop-if-busy streaming.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument('--log-level', default=None, help='Override FRAME_COLOURS_LOG_LEVEL')
    sub = parser.add_subparsers(dest='technique', help='Technique to run')

    for name in techniques:
        p = sub.add_parser(name, help=registry.summary(name))
        p.add_argument('tmp_dir', help='Working directory for artefacts')
        p.add_argument('image', help='Image file; multi-frame GIF/APNG/TIFF act as a feed')
        p.add_argument('-k', '--top-k', type=int, default=None, help='Colours per frame (default: 5)')
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        p.add_argument('--fps', type=float, default=None, help='Replay rate for stream, 0 = unpaced')
        p.add_argument('--max-frames', type=int, default=None, metavar='N', help='Stop after N frames')
        p.add_argument('--slots', type=int, default=None, metavar='N', help='Swatch slots (default: 5)')

    help_parser = sub.add_parser('help', help='Print full docs for a technique')
    help_parser.add_argument('command', nargs='?', help='Technique name')

    return parser


def _print_help(command: str | None) -> None:
    """Print full module docstring for a technique."""
    techniques = registry.all_techniques()

    if command is None:
        print('Available techniques:\n')
        for name in techniques:
            print(f'  {name:<10} {registry.summary(name)}')
        print('\nRun: frame-colours help <technique> for full docs.')
        return

    if command not in techniques:
        print(f'Unknown technique: {command}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(techniques))}', file=sys.stderr)
        sys.exit(1)

    doc = registry.doc(command)
    print(doc if doc else f'(No module docs for {command!r})')


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    if getattr(args, 'top_k', None) is not None:
        settings.top_k = args.top_k
    if getattr(args, 'slots', None) is not None:
        settings.slots = args.slots
    if getattr(args, 'fps', None) is not None:
        settings.fps = args.fps
    args.slots = settings.slots
    args.fps = settings.fps
    return settings


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # OS env vars always win over .env values
    try:
        settings = Settings.load(env_file=args.env_file)
    except (ValueError, OSError) as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)
    setup_logging(args.log_level or settings.log_level)
    if settings.env_path:
        logger.info('Loaded %s', settings.env_path)

    if not args.technique:
        parser.print_help()
        sys.exit(1)

    if args.technique == 'help':
        _print_help(args.command)
        return

    if not os.path.isfile(args.image):
        print(f'Error: image not found: {args.image}', file=sys.stderr)
        sys.exit(1)

    settings = _apply_overrides(settings, args)
    if settings.top_k < 1:
        print(f'Error: -k must be a positive integer, got {settings.top_k}', file=sys.stderr)
        sys.exit(1)
    if settings.slots < 1:
        print(f'Error: --slots must be a positive integer, got {settings.slots}', file=sys.stderr)
        sys.exit(1)

    report = Report(source=args.image, k=settings.top_k)

    tech = registry.get(args.technique)
    try:
        tech.execute(args.image, report, args)
    except (InvalidArgumentError, OSError) as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    print(format_json(report) if args.json else format_text(report))


if __name__ == '__main__':
    main()
