"""Viewer and transport control UI components."""

from typing import List, NamedTuple

import gradio as gr

from algo_lab.core.playback import WAITING_TEXT
from algo_lab.widget.constants import EMPTY_TEXT, EMPTY_TITLE


class ViewerUI(NamedTuple):
    """Status panel plus the iframe host."""

    status_panel: gr.HTML
    frame: gr.HTML

    @property
    def outputs(self) -> List[gr.Component]:
        return [self.status_panel, self.frame]


class ControlsUI(NamedTuple):
    """Transport cluster shown once a document is loaded."""

    container: gr.Group
    status: gr.Markdown
    progress: gr.HTML
    prev_btn: gr.Button
    play_btn: gr.Button
    next_btn: gr.Button

    @property
    def transport(self) -> List[gr.Component]:
        """Components updated after every state change, in render order."""
        return [self.status, self.progress, self.prev_btn, self.play_btn, self.next_btn]


def build_viewer() -> ViewerUI:
    """Build the right-hand panel that hosts the visualization."""
    status_panel = gr.HTML(
        f'<div class="viz-panel"><p style="font-size:1.1rem;font-weight:600">'
        f"{EMPTY_TITLE}</p><p>{EMPTY_TEXT}</p></div>"
    )
    frame = gr.HTML("", visible=False)
    return ViewerUI(status_panel=status_panel, frame=frame)


def build_controls() -> ControlsUI:
    """Build the previous / play-pause / next cluster with progress."""
    with gr.Group(visible=False) as group:
        gr.Markdown("**Controls**")
        status = gr.Markdown(WAITING_TEXT)
        progress = gr.HTML('<div class="viz-progress"><div style="width:0%"></div></div>')
        with gr.Row():
            prev_btn = gr.Button("⏮ Prev", interactive=False, min_width=60)
            play_btn = gr.Button(
                "▶ Play", variant="primary", interactive=False, min_width=80
            )
            next_btn = gr.Button("Next ⏭", interactive=False, min_width=60)
    return ControlsUI(
        container=group,
        status=status,
        progress=progress,
        prev_btn=prev_btn,
        play_btn=play_btn,
        next_btn=next_btn,
    )
