"""
ascim - Command Line Interface
==============================
"""

import argparse
import logging
import sys
from typing import List, Optional

from ascim.config import AscimConfig
from ascim.constants import (
    DEFAULT_CHARACTER_RATIO,
    DEFAULT_EDGE_THRESHOLD,
    DEFAULT_MAX_HEIGHT,
    DEFAULT_MAX_WIDTH,
    EDGE_DETECTION_DISABLED,
    RenderMode,
)
from ascim.exceptions import AscimError
from ascim.frame import Frame

logger = logging.getLogger(__name__)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog='ascim',
        description='Print images as colored ASCII art',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s image.png                     # Fit to the terminal
  %(prog)s image.png -mw 80 -mh 40       # At most 80x40 characters
  %(prog)s image.png -et 1.0             # Draw edges as strokes
  %(prog)s image.png --categorical       # Basic 8-color output
  %(prog)s image.png --plain -o art.txt  # Glyphs only, to a file
        """
    )

    parser.add_argument('input', nargs='?', help='Path to image file')
    parser.add_argument('-o', '--output', help='Write to this file instead of stdout')

    # Size options
    parser.add_argument('-mw', '--max-width', type=int,
                        help=f'Maximum width in characters (default: terminal width OR {DEFAULT_MAX_WIDTH})')
    parser.add_argument('-mh', '--max-height', type=int,
                        help=f'Maximum height in characters (default: terminal height OR {DEFAULT_MAX_HEIGHT})')
    parser.add_argument('-cr', '--char-ratio', type=float, default=DEFAULT_CHARACTER_RATIO,
                        help='Height-to-width ratio for characters (default: %(default).1f)')

    # Edge detection options
    parser.add_argument('-et', '--edge-threshold', type=float, default=DEFAULT_EDGE_THRESHOLD,
                        help=f'Edge detection threshold, range: 0.0 - {EDGE_DETECTION_DISABLED:.1f} '
                             '(default: %(default).1f, disabled)')
    parser.add_argument('--no-edges', action='store_true',
                        help='Disable edge detection regardless of threshold')

    # Color options
    color = parser.add_mutually_exclusive_group()
    color.add_argument('--categorical', action='store_true',
                       help='Use the 8 basic terminal colors instead of true color')
    color.add_argument('--plain', action='store_true', help='Print glyphs without color')

    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')

    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )


def config_from_args(args: argparse.Namespace) -> AscimConfig:
    """Build a config from parsed arguments, sized to the terminal."""
    return AscimConfig.for_terminal(
        args.input,
        max_width=args.max_width,
        max_height=args.max_height,
        character_ratio=args.char_ratio,
        edge_threshold=args.edge_threshold,
        edge_detection=False if args.no_edges else None,
        render_mode=RenderMode.CATEGORICAL if args.categorical else RenderMode.TRUE_COLOR,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for command line usage."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.input:
        parser.print_help()
        return 1

    configure_logging(args.verbose)
    config = config_from_args(args)
    logger.debug("converting %s with %s", args.input, config)

    try:
        frame = Frame.from_config(config)
    except AscimError as e:
        logger.debug("conversion failed", exc_info=True)
        print(f"Error loading image: {e}", file=sys.stderr)
        return 1

    text = frame.to_text() + '\n' if args.plain else frame.render(config.render_mode)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(text)
        logger.info("wrote %dx%d frame to %s", frame.width, frame.height, args.output)
    else:
        sys.stdout.write(text)
        sys.stdout.flush()

    return 0
