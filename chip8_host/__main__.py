"""
Application entry point.

Usage:
    python -m chip8_host ROM [options]
    python -m chip8_host --sample [options]

Options:
    --engine NAME   Engine: "demo" or "package.module:Class" [default: demo]
    --mode MODE     Glow: "window" (one cached glow) or "cell" (per cell)
    --size WxH      Surface size in pixels [default: 640x320]
    --fps N         Frame rate cap, 0 = uncapped [default: 0]
    --fullscreen    Run in fullscreen mode
    --dev           Enable development mode (debug logging, FPS)

Examples:
    python -m chip8_host --sample --mode cell
    python -m chip8_host roms/clock.b64 --size 1280x640 --fps 60
    cat clock.b64 | python -m chip8_host -
"""

import argparse
import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, Sequence, Tuple

import pygame

from . import __version__
from .config import BACKGROUND_COLOR, GLOW_COLOR, Config, RenderMode
from .core.app import Application
from .errors import Chip8HostError
from .image import SAMPLE_IMAGE, decode, read_image
from .vm.factory import create_engine


def setup_logging(dev_mode: bool = False, log_file: Optional[str] = None) -> None:
    """Configure logging for the application."""
    level = logging.DEBUG if dev_mode else logging.INFO

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )

    # Console handler
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)

    # Root logger
    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(console)

    if log_file:
        try:
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
            logging.info(f"File logging enabled: {log_file}")
        except OSError as e:
            logging.warning(f"Could not enable file logging: {e}")

    logging.info("Logging initialized")


def parse_size(value: str) -> Tuple[int, int]:
    """Parse "WxH" into a positive (width, height)."""
    try:
        width, height = (int(part) for part in value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected WxH, got '{value}'")
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError(f"Size must be positive, got '{value}'")
    return (width, height)


def parse_color(value: str) -> Tuple[int, int, int]:
    """Parse a colour name or #RRGGBB via pygame.Color."""
    try:
        color = pygame.Color(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Unknown colour '{value}'")
    return (color.r, color.g, color.b)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="chip8_host",
        description=f"CHIP-8 host driver v{__version__}"
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "rom",
        nargs="?",
        default=None,
        help="Program image: base64 text or raw binary file, '-' for stdin"
    )
    source.add_argument(
        "--sample",
        action="store_true",
        help="Run the built-in clock sample image"
    )

    parser.add_argument(
        "--engine",
        type=str,
        default="demo",
        help="Engine: 'demo' or 'package.module:Class' (default: demo)"
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in RenderMode],
        default=RenderMode.WINDOW_GRADIENT.value,
        help="Glow mode: one cached window glow or a fresh glow per cell"
    )
    parser.add_argument(
        "--size",
        type=parse_size,
        default=(640, 320),
        help="Surface size as WxH (default: 640x320)"
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=0,
        help="Frame rate cap, 0 for uncapped (default: 0)"
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Run in fullscreen mode"
    )
    parser.add_argument(
        "--color",
        type=parse_color,
        default=GLOW_COLOR,
        help="Glow colour, name or #RRGGBB (default: #00F200)"
    )
    parser.add_argument(
        "--background",
        type=parse_color,
        default=BACKGROUND_COLOR,
        help="Background colour (default: black)"
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Enable development mode"
    )
    parser.add_argument(
        "--dump-frames",
        action="store_true",
        help="Log every frame as text (needs --dev)"
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also log to this file (rotated at 10 MB)"
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """Build configuration from arguments."""
    width, height = args.size
    return Config(
        surface_width=width,
        surface_height=height,
        fullscreen=args.fullscreen,
        render_mode=RenderMode(args.mode),
        target_fps=max(0, args.fps),
        glow_color=args.color,
        background_color=args.background,
        engine=args.engine,
        dev_mode=args.dev,
        dump_frames=args.dump_frames,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Setup logging first
    setup_logging(dev_mode=args.dev, log_file=args.log_file)

    logger = logging.getLogger(__name__)
    logger.info(f"CHIP-8 host v{__version__} starting...")

    config = build_config(args)
    logger.info(
        f"Config: engine={config.engine}, mode={config.render_mode.value}, "
        f"size={config.surface_width}x{config.surface_height}, fps={config.target_fps or 'uncapped'}"
    )

    # Decode before touching the engine
    try:
        image = decode(SAMPLE_IMAGE) if args.sample else read_image(args.rom)
    except Chip8HostError as e:
        logger.error(f"Invalid program image: {e}")
        return 1
    except OSError as e:
        logger.error(f"Cannot read program image: {e}")
        return 1

    try:
        vm = create_engine(config.engine)
    except ValueError as e:
        logger.error(str(e))
        return 1

    app = Application(config, vm)

    try:
        app.run(image)
    except KeyboardInterrupt:
        print("\nShutdown requested...")
    except Chip8HostError as e:
        logger.error(f"Emulation aborted: {e}")
        return 1
    finally:
        app.cleanup()

    return 0


if __name__ == "__main__":
    sys.exit(main())
