"""Launch the Algo Lab Gradio widget.

Example:
    python -m scripts.run_widget -v
    python scripts/run_widget.py --port 7860 --algorithm "Quick Sort" --share
"""

from __future__ import annotations

import argparse
import sys

from loguru import logger

from algo_lab.core.constants import DEFAULT_ALGORITHM
from algo_lab.helpers.logging_helpers import add_console_sink, configure_logger
from algo_lab.widget.widget import build_widget


def _port(value: str) -> int:
    """Validate and return a TCP port."""
    try:
        port = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError("port must be an integer") from e
    if not (1 <= port <= 65535):
        raise argparse.ArgumentTypeError("port must be between 1 and 65535")
    return port


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for the widget."""
    parser = argparse.ArgumentParser(description="Launch the Algo Lab widget")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address.")
    parser.add_argument("--port", type=_port, default=8080, help="Bind port.")
    parser.add_argument(
        "--algorithm",
        default=DEFAULT_ALGORITHM,
        help=f"Algorithm prefilled in the form (default: {DEFAULT_ALGORITHM}).",
    )
    parser.add_argument(
        "--banner", default=None, help="Optional HTML banner above the header."
    )
    parser.add_argument(
        "--share", action="store_true", help="Also serve through a public Gradio link."
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Echo logs to the console: -v for INFO, -vv for DEBUG.",
    )
    return parser.parse_args(argv)


def launch(args: argparse.Namespace) -> int:
    """Build the widget and block until the server stops.

    Returns:
        Exit code: 0 on clean shutdown, 130 on SIGINT, 1 on error.
    """
    app = build_widget(banner=args.banner, default_algorithm=args.algorithm)
    logger.info(f"Widget listening on http://{args.host}:{args.port}")
    try:
        app.launch(server_name=args.host, server_port=args.port, share=args.share)
    except KeyboardInterrupt:
        logger.info("Interrupted; widget stopped.")
        return 130
    except Exception:
        logger.exception("Widget server crashed")
        return 1
    finally:
        app.close()
    return 0


def main() -> None:
    """Configure logging and launch the widget."""
    args = parse_args()

    try:
        configure_logger(source="widget")
    except OSError as e:
        logger.warning(f"Could not set up the log file, continuing without it: {e}")
    add_console_sink(args.verbose)

    sys.exit(launch(args))


if __name__ == "__main__":
    main()
