"""Serve the Algo Lab HTTP API with uvicorn.

Defaults for host and port come from `ALGO_LAB_API_HOST` / `ALGO_LAB_API_PORT`
and can be overridden on the command line.

Example:
    python -m scripts.run_api --reload -vv
    ALGO_LAB_API_PORT=9000 python scripts/run_api.py
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

import uvicorn
from loguru import logger

from algo_lab.api.settings import settings
from algo_lab.helpers.logging_helpers import add_console_sink, configure_logger

APP_PATH = "algo_lab.api.main:app"


def _port(value: str) -> int:
    """Validate and return a TCP port.

    Raises:
        argparse.ArgumentTypeError: If the value is not an integer in [1, 65535].
    """
    try:
        port = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError("port must be an integer") from e
    if not (1 <= port <= 65535):
        raise argparse.ArgumentTypeError("port must be between 1 and 65535")
    return port


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the API server."""
    parser = argparse.ArgumentParser(description="Serve the Algo Lab API")
    parser.add_argument("--host", default=settings.host, help="Bind address.")
    parser.add_argument("--port", type=_port, default=settings.port, help="Bind port.")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when source files change (development only).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Echo logs to the console: -v for INFO, -vv for DEBUG.",
    )
    return parser.parse_args(argv)


def serve(host: str, port: int, reload: bool = False) -> int:
    """Run uvicorn in the foreground until it exits.

    Playback sessions live in this process's memory, so the server always runs
    a single worker.

    Returns:
        Exit code: 0 on clean shutdown, 130 on SIGINT, 1 on error.
    """
    logger.info(f"Serving {APP_PATH} on http://{host}:{port} (reload={reload})")
    config = uvicorn.Config(
        APP_PATH,
        host=host,
        port=port,
        reload=reload,
        # loguru owns logging; skip uvicorn's dictConfig
        log_config=None,
    )
    try:
        uvicorn.Server(config).run()
    except KeyboardInterrupt:
        logger.info("Interrupted; API server stopped.")
        return 130
    except Exception:
        logger.exception("API server crashed")
        return 1
    return 0


def main() -> None:
    """Configure logging and serve the API."""
    args = parse_args()

    try:
        configure_logger(source="api")
    except OSError as e:
        logger.warning(f"Could not set up the log file, continuing without it: {e}")
    add_console_sink(args.verbose)

    sys.exit(serve(args.host, args.port, reload=args.reload))


if __name__ == "__main__":
    main()
