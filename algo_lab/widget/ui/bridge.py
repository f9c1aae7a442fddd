"""Hidden components that connect the viewer iframe to Python handlers."""

from typing import NamedTuple

import gradio as gr

from algo_lab.widget.constants import INBOX_ID, OUTBOX_ID, POLL_INTERVAL


class BridgeUI(NamedTuple):
    """Inbox (iframe → Python), outbox (Python → iframe) and ready poll timer."""

    inbox: gr.Textbox
    outbox: gr.Textbox
    ready_timer: gr.Timer


def build_bridge() -> BridgeUI:
    """Build the bridge components.

    Both textboxes are rendered but hidden with css; the head script needs
    them in the DOM.
    """
    inbox = gr.Textbox(elem_id=INBOX_ID, show_label=False, container=False)
    outbox = gr.Textbox(elem_id=OUTBOX_ID, show_label=False, container=False)
    ready_timer = gr.Timer(POLL_INTERVAL, active=False)
    return BridgeUI(inbox=inbox, outbox=outbox, ready_timer=ready_timer)
