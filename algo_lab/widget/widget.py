"""Gradio widget construction."""

from __future__ import annotations

import gradio as gr
from loguru import logger

from algo_lab.core.constants import DEFAULT_ALGORITHM
from algo_lab.widget.constants import BRIDGE_CSS, HOST_BRIDGE_JS, MAX_TTL_SECONDS
from algo_lab.widget.helpers import cleanup
from algo_lab.widget.session_state import SessionState
from algo_lab.widget.ui.bridge import build_bridge
from algo_lab.widget.ui.form import build_form
from algo_lab.widget.ui.header import build_header
from algo_lab.widget.ui.player import build_controls, build_viewer
from algo_lab.widget.wiring import wire_handlers


def build_widget(
    banner: str | None = None,
    default_algorithm: str = DEFAULT_ALGORITHM,
) -> gr.Blocks:
    """Build the Gradio UI for generating and playing visualizations."""
    logger.info("Building Gradio widget for Algo Lab")

    widget = gr.Blocks(
        title="Algo Lab",
        theme=gr.themes.Default(primary_hue="indigo"),
        css=BRIDGE_CSS,
        head=HOST_BRIDGE_JS,
    )
    with widget:
        # sessions are created lazily by handlers; keep the initial value
        # plain so gradio can copy it per browser session
        state = gr.State(
            value=SessionState(last_seen=0, inbox_origin=None, command_nonce=0),
            time_to_live=MAX_TTL_SECONDS,
            delete_callback=cleanup,  # function to call when state is deleted
        )

        with gr.Row():
            # --- Left panel: request form and controls ---
            with gr.Column(scale=1, min_width=320):
                build_header(banner)
                form = build_form(default_algorithm)
                controls = build_controls()
            # --- Right panel: visualization ---
            with gr.Column(scale=3):
                viewer = build_viewer()

        bridge = build_bridge()

        # Wire up event handlers
        wire_handlers(state, form, viewer, controls, bridge)

        ### CLEAN UP ON DISCONNECT ###

        def on_unload(req: gr.Request) -> None:
            """Handle per-user client disconnect."""
            logger.debug(f"Client disconnected with session hash: {req.session_hash}")

        # unload runs when the session ends (tab close, refresh, hard nav away)
        widget.unload(on_unload)

    return widget
