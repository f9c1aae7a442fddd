"""CLI runner for Algo Lab.

Generates a visualization document and writes it to an HTML file that can be
opened directly in a browser.
"""

import webbrowser
from pathlib import Path
from typing import Optional

from loguru import logger
from rich.console import Console

from algo_lab.cli.configuration import load_theme
from algo_lab.core.errors import GenerationError
from algo_lab.core.generator import Generator
from algo_lab.core.models import VisualizationRequest
from algo_lab.utils.file import default_output_fpath, write_document


def run_cli(
    algorithm: str,
    input_data: Optional[str] = None,
    extra_arguments: Optional[str] = None,
    output: Optional[Path] = None,
    open_browser: bool = False,
    custom_theme_path: Optional[str] = None,
    generator: Optional[Generator] = None,
    console: Optional[Console] = None,
) -> Path:
    """Generate one visualization and save it.

    Returns:
        Path of the written HTML file.

    Raises:
        GenerationError: If generation fails for any reason.
    """
    console = console or Console()
    theme = load_theme(custom_theme_path)
    request = VisualizationRequest(
        algorithm_name=algorithm,
        input_data=input_data,
        extra_arguments=extra_arguments,
    )

    console.rule("Algo Lab", style=theme["intro"])
    console.print(
        f"Algorithm: {request.algorithm_name or '-'}", style=theme["info"], markup=False
    )

    owns_generator = generator is None
    generator = generator or Generator()
    try:
        with console.status("Generating custom visualization...", spinner="dots"):
            document = generator.generate(request)
    except GenerationError as e:
        console.print(
            f"An error occurred: {e.message}", style=theme["error"], markup=False
        )
        logger.error(f"Generation failed: {e.message}")
        raise
    finally:
        # a caller-supplied generator stays open
        if owns_generator:
            generator.close()

    path = output or default_output_fpath(request.algorithm_name)
    write_document(document.html, path)
    console.print("Visualization saved to", style=theme["success"], end=" ")
    console.print(str(path), style=theme["path"])
    logger.info(f"Wrote {len(document.html)} chars to {path}")

    if open_browser:
        webbrowser.open(Path(path).resolve().as_uri())

    console.rule("Done", style=theme["outtro"])
    return Path(path)
