"""Unit tests for the utility functions."""

from pathlib import Path

import pytest

from algo_lab.utils.file import (
    default_output_fpath,
    slugify,
    unique_fpath,
    write_document,
)


def test_unique_fpath(tmp_path: Path) -> None:
    """Should return an incremented file path when the file exists."""
    p: Path = tmp_path / "file.txt"
    # when missing → same path
    assert unique_fpath(p) == p

    # create file.txt → next is file_1.txt
    p.write_text("x")
    assert unique_fpath(p) == tmp_path / "file_1.txt"

    # create file_1.txt → next is file_2.txt
    (tmp_path / "file_1.txt").write_text("y")
    assert unique_fpath(p) == tmp_path / "file_2.txt"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Dijkstra's Algorithm", "dijkstra-s-algorithm"),
        ("A* Search", "a-search"),
        ("  ", "visualization"),
        ("!!!", "visualization"),
    ],
)
def test_slugify(text: str, expected: str) -> None:
    """Should produce file-name-safe stems."""
    assert slugify(text) == expected


def test_default_output_fpath(tmp_path: Path) -> None:
    """Should create the directory and never clobber existing files."""
    out_dir = tmp_path / "output"
    first = default_output_fpath("Bubble Sort", out_dir)
    assert out_dir.is_dir()
    assert first.parent == out_dir
    assert first.name.startswith("bubble-sort_")
    assert first.suffix == ".html"

    write_document("<html></html>", first)
    second = default_output_fpath("Bubble Sort", out_dir)
    assert second != first


def test_write_document(tmp_path: Path) -> None:
    """Should create parent directories and write the text."""
    path = write_document("<p>hi</p>", tmp_path / "a" / "b" / "doc.html")
    assert path.read_text(encoding="utf-8") == "<p>hi</p>"
