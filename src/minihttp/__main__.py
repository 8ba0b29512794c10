"""
=============================================================================
MINIHTTP CLI ENTRY POINT
=============================================================================

    # Run with defaults (localhost:4221, no file storage)
    python -m minihttp

    # Serve and accept files under /tmp/files
    python -m minihttp --directory /tmp/files

    # Listen on all interfaces with more worker threads
    python -m minihttp --host 0.0.0.0 --workers 8

Flow: argparse → ServerConfig → HTTPServer → run().
=============================================================================
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .server import HTTPServer
from .config import ServerConfig


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="minihttp",
        description="Small HTTP/1.1 server with echo, user-agent and file routes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m minihttp                          # Run with defaults
  python -m minihttp --directory /tmp/files   # Enable /files/ storage
  python -m minihttp --port 8080              # Custom port
  python -m minihttp --workers 8              # 8 worker threads
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # STORAGE
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--directory", "-d",
        default=None,
        help="Directory for GET/POST /files/ (default: none, reads 404 and writes 500)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default="localhost",
        help="Host to bind to (default: localhost)"
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=4221,
        help="Port to listen on (default: 4221)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # PERFORMANCE ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=4,
        help="Number of worker threads (default: 4, max will be 2x this)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # META ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"minihttp {__version__}"
    )

    return parser


def config_from_args(args: argparse.Namespace) -> ServerConfig:
    """Translate parsed CLI arguments to a ServerConfig."""
    return ServerConfig(
        host=args.host,
        port=args.port,
        directory=args.directory,
        min_workers=args.workers,
        max_workers=args.workers * 2,
        log_level=args.log_level,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit code: 0 after a clean shutdown, 1 on bad configuration
        or a failure to start.
    """
    args = build_parser().parse_args(argv)

    try:
        server = HTTPServer(config_from_args(args))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        server.run()
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
