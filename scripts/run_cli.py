"""Module to run using cli interface.

Example:
    python scripts/run_cli.py -a "Bubble Sort" --data "[5, 1, 4, 2, 8]" --open
"""

import argparse
import sys
from pathlib import Path

from loguru import logger

from algo_lab.cli.runner import run_cli
from algo_lab.core.errors import GenerationError
from algo_lab.helpers.logging_helpers import add_console_sink, configure_logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for the CLI runner."""
    parser = argparse.ArgumentParser(description="CLI runner entrypoint")
    parser.add_argument(
        "-a",
        "--algorithm",
        type=str,
        required=True,
        help="Name of the algorithm to visualize.",
    )
    parser.add_argument("--data", type=str, default=None, help="Optional input data.")
    parser.add_argument(
        "--args", type=str, default=None, help="Optional additional arguments."
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="HTML file to write (default: output/<algorithm>_<timestamp>.html).",
    )
    parser.add_argument(
        "--open",
        action="store_true",
        help="Open the generated document in the default browser.",
    )
    parser.add_argument("--theme", type=str, default=None, help="Theme YAML file.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Show info logs (-v) or debug (-vv) to console",
    )
    return parser.parse_args(argv)


def main() -> None:
    """Main entrypoint for running the CLI."""
    args = parse_args()

    try:
        configure_logger(source="cli")
    except Exception as e:
        logger.warning(f"Failed to configure logger: {e}")

    # --- configure console side channel based on -v
    add_console_sink(args.verbose)

    logger.info("Starting CLI.")
    code = 0
    try:
        run_cli(
            algorithm=args.algorithm,
            input_data=args.data,
            extra_arguments=args.args,
            output=args.output,
            open_browser=args.open,
            custom_theme_path=args.theme,
        )
    except GenerationError:
        code = 1  # already reported by run_cli
    except Exception as e:
        logger.exception(f"Exception occurred while running the CLI: {e}")
        print("Error occurred while running the CLI. Stopping. Check logs for details.")
        code = 1
    finally:
        logger.info("CLI exited.")
    sys.exit(code)


if __name__ == "__main__":
    main()
