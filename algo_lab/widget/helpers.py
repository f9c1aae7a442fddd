"""Helper functions for widget."""

import html
import json
from typing import Any, Dict, List, Optional, Tuple

import gradio as gr
from loguru import logger

from algo_lab.core.document import render_iframe
from algo_lab.core.generator import Generator
from algo_lab.core.messages import Command
from algo_lab.core.session import VisualizationSession
from algo_lab.widget.constants import (
    EMPTY_TEXT,
    EMPTY_TITLE,
    ERROR_TITLE,
    FRAME_ID,
    LOADING_TEXT,
    LOADING_TITLE,
    MAX_ALGORITHM_LENGTH,
    MAX_INPUT_LENGTH,
)
from algo_lab.widget.session_state import SessionState

_generator: Optional[Generator] = None


def get_generator() -> Generator:
    """Return the process-wide generator, creating it on first use."""
    global _generator
    if _generator is None:
        logger.debug("Creating shared Generator for widget sessions")
        _generator = Generator()
    return _generator


def get_session(state: SessionState) -> VisualizationSession:
    """Return the session stored in state, creating it on first use."""
    if "session" not in state:
        logger.debug("Creating VisualizationSession for new browser session")
        state["session"] = VisualizationSession(get_generator())
        state["last_seen"] = 0
        state["inbox_origin"] = None
        state["command_nonce"] = 0
    return state["session"]


def cleanup(state: gr.State) -> None:
    """Clean up resources associated with a session."""
    logger.debug("Cleaning up session resources")
    session_state: SessionState = state.value if isinstance(state, gr.State) else state
    if not session_state or "session" not in session_state:
        logger.debug("No 'session' in session state to clean up")
        return
    session_state["session"].close()
    session_state.pop("session", None)
    logger.debug("Session cleanup complete.")


def spacer(h: int = 24) -> None:
    """Create a vertical spacer of given height."""
    gr.HTML(f"<div style='height:{h}px'></div>")


def validate_form_input(
    algorithm: str, input_data: Optional[str], extra_arguments: Optional[str]
) -> Optional[str]:
    """Check form lengths. Returns an error message or None."""
    if len(algorithm or "") > MAX_ALGORITHM_LENGTH:
        return f"Algorithm name is too long. Max chars: {MAX_ALGORITHM_LENGTH}"
    for label, value in (
        ("Input data", input_data),
        ("Additional arguments", extra_arguments),
    ):
        if len(value or "") > MAX_INPUT_LENGTH:
            return f"{label} is too long. Max chars: {MAX_INPUT_LENGTH}"
    return None


def _panel(title: str, text: str, css_class: str = "") -> str:
    return (
        f'<div class="viz-panel {css_class}">'
        f"<p style='font-size:1.1rem;font-weight:600'>{html.escape(title)}</p>"
        f"<p style='font-size:0.9rem'>{html.escape(text)}</p></div>"
    )


def status_panel_html(session: VisualizationSession) -> str:
    """Loading / error / empty panel shown in place of the viewer."""
    if session.is_loading:
        return _panel(LOADING_TITLE, LOADING_TEXT)
    message = session.error_message
    if message:
        return _panel(ERROR_TITLE, message, "error")
    if session.document is None:
        return _panel(EMPTY_TITLE, EMPTY_TEXT)
    return ""


def viewer_html(session: VisualizationSession) -> str:
    """Sandboxed iframe for the loaded document, or nothing."""
    controller = session.controller
    if session.document is None or controller.context_id is None:
        return ""
    title = session.request.algorithm_name if session.request else ""
    return render_iframe(
        session.document.html, controller.context_id, title=title, frame_id=FRAME_ID
    )


def progress_html(session: VisualizationSession) -> str:
    """Progress bar derived from playback state."""
    pct = session.controller.state.progress_percent
    return f'<div class="viz-progress"><div style="width:{pct:.1f}%"></div></div>'


def render_panels(session: VisualizationSession) -> Tuple[Dict[str, Any], ...]:
    """Updates for (status panel, viewer, controls group)."""
    panel = status_panel_html(session)
    # a context dropped by the ready timeout hides the viewer too
    has_document = (
        session.document is not None
        and not session.is_loading
        and session.controller.context_id is not None
    )
    return (
        gr.update(value=panel, visible=bool(panel)),
        gr.update(value=viewer_html(session), visible=has_document),
        gr.update(visible=has_document),
    )


def render_transport(session: VisualizationSession) -> Tuple[Dict[str, Any], ...]:
    """Updates for (status line, progress bar, previous, play/pause, next)."""
    controller = session.controller
    state = controller.state
    play_label = "⏸ Pause" if state.is_playing else "▶ Play"
    return (
        gr.update(value=state.status_text),
        gr.update(value=progress_html(session)),
        gr.update(interactive=controller.can_previous),
        gr.update(value=play_label, interactive=controller.can_play),
        gr.update(interactive=controller.can_next),
    )


def outbox_value(state: SessionState, commands: List[Command]) -> str:
    """Serialize commands for the browser-side dispatcher.

    The nonce makes every write a change, so repeating a command still fires.
    """
    session = get_session(state)
    state["command_nonce"] = state.get("command_nonce", 0) + 1
    return json.dumps(
        {
            "context": session.controller.context_id,
            "commands": [c.value for c in commands],
            "nonce": state["command_nonce"],
        }
    )


def new_inbox_messages(state: SessionState, raw: str) -> Tuple[Optional[str], List[Any]]:
    """Decode the inbox and return (origin, messages not yet applied).

    The inbox replays the full message log for one origin; a new origin
    restarts the count.
    """
    if not raw:
        return None, []
    try:
        inbox = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Ignoring undecodable inbox payload")
        return None, []
    if not isinstance(inbox, dict) or not isinstance(inbox.get("messages"), list):
        logger.warning("Ignoring malformed inbox payload")
        return None, []
    origin = inbox.get("origin")
    if origin != state.get("inbox_origin"):
        state["inbox_origin"] = origin
        state["last_seen"] = 0
    messages = inbox["messages"]
    start = state.get("last_seen", 0)
    state["last_seen"] = len(messages)
    return origin, messages[start:]
