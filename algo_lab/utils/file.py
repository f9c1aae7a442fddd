"""File utility functions."""

import re
from datetime import datetime
from pathlib import Path

from algo_lab.core.constants import OUTPUT_FPATH


def safe_timestamp() -> str:
    """Returns a timestamp string safe for file names."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def slugify(text: str, max_length: int = 48) -> str:
    """Lowercase, dash-separated file name stem for free text."""
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug[:max_length].rstrip("-") or "visualization"


def unique_fpath(path: Path) -> Path:
    """Returns an incremented unique file path to avoid overwriting existing files."""
    path = Path(path)
    if not path.exists():
        return path

    parent, stem, suffix = path.parent, path.stem, path.suffix
    counter = 1
    while True:
        candidate = parent / f"{stem}_{counter}{suffix}"
        if not candidate.exists():
            return candidate
        counter += 1


def default_output_fpath(algorithm: str, output_dir: Path = OUTPUT_FPATH) -> Path:
    """Non-clobbering HTML path for a generated document."""
    output_dir.mkdir(parents=True, exist_ok=True)
    return unique_fpath(output_dir / f"{slugify(algorithm)}_{safe_timestamp()}.html")


def write_document(html: str, path: Path) -> Path:
    """Write a document to `path`, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    return path
