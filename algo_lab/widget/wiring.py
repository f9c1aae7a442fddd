"""Wiring of event handlers to widget components."""

import gradio as gr

from algo_lab.widget.constants import DISPATCH_COMMANDS_JS
from algo_lab.widget.handlers import (
    on_generate,
    on_next,
    on_play_pause,
    on_poll_ready,
    on_previous,
    on_submit_start,
    on_viz_message,
)
from algo_lab.widget.ui.bridge import BridgeUI
from algo_lab.widget.ui.form import FormUI
from algo_lab.widget.ui.player import ControlsUI, ViewerUI


def wire_handlers(
    state: gr.State,
    form: FormUI,
    viewer: ViewerUI,
    controls: ControlsUI,
    bridge: BridgeUI,
) -> None:
    """Wire event handlers to widget components."""
    panels = [*viewer.outputs, controls.container]

    # Submit: show loading first, then run the (slow) generation call
    form.submit_btn.click(
        fn=on_submit_start,
        inputs=[state, *form.fields],
        outputs=[state, form.submit_btn, *panels, *controls.transport],
    ).success(
        fn=on_generate,
        inputs=[state],
        outputs=[
            state,
            form.submit_btn,
            *panels,
            *controls.transport,
            bridge.ready_timer,
        ],
    )

    # Messages relayed from the iframe by the head script
    bridge.inbox.input(
        fn=on_viz_message,
        inputs=[state, bridge.inbox],
        outputs=[state, *controls.transport, bridge.ready_timer],
        show_progress="hidden",
    )

    # Readiness timeout while loading
    bridge.ready_timer.tick(
        fn=on_poll_ready,
        inputs=[state],
        outputs=[state, *panels, *controls.transport, bridge.ready_timer],
        show_progress="hidden",
    )

    # Transport controls write commands to the outbox
    for button, handler in (
        (controls.play_btn, on_play_pause),
        (controls.next_btn, on_next),
        (controls.prev_btn, on_previous),
    ):
        button.click(
            fn=handler,
            inputs=[state],
            outputs=[state, bridge.outbox, *controls.transport],
            show_progress="hidden",
        )

    # Outbox changes are posted into the iframe browser-side
    bridge.outbox.change(
        fn=None,
        inputs=[bridge.outbox],
        outputs=None,
        js=DISPATCH_COMMANDS_JS,
    )
