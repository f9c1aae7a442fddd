"""Header UI for the Algo Lab widget."""

from typing import NamedTuple

import gradio as gr

from algo_lab.widget.constants import INTRO_MD


class HeaderUI(NamedTuple):
    """Named tuple for header UI components."""

    pass  # no fields


def build_header(banner: str | None = None) -> HeaderUI:
    """Build the header UI component."""
    if banner:
        gr.HTML(f'<div style="text-align:center" id="banner">{banner} </div>')
    gr.Markdown(
        """
        <div>
          <h1 style='margin-bottom:0'>🧠 Algo Lab</h1>
        </div>
        """
    )
    gr.Markdown(INTRO_MD)
    return HeaderUI()
