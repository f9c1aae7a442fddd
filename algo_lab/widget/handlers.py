"""Web handlers for the Gradio interface to Algo Lab.

Submit → loading panel → generate → iframe posts VIZ_READY → inbox handler
mirrors state → transport buttons write commands to the outbox → iframe.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import gradio as gr
from loguru import logger

from algo_lab.core.errors import GenerationError, PlayerError, ValidationError
from algo_lab.core.models import VisualizationRequest
from algo_lab.core.playback import PlayerPhase
from algo_lab.core.session import UNKNOWN_ERROR_MSG
from algo_lab.widget.constants import USER_FRIENDLY_EXC
from algo_lab.widget.helpers import (
    get_session,
    new_inbox_messages,
    outbox_value,
    render_panels,
    render_transport,
    validate_form_input,
)
from algo_lab.widget.session_state import SessionState

Update = Dict[str, Any]


def _submit_button(loading: bool) -> Update:
    if loading:
        return gr.update(value="Generating...", interactive=False)
    return gr.update(value="Visualize", interactive=True)


def _timer(active: bool) -> Update:
    return gr.update(active=active)


def on_submit_start(
    state: SessionState,
    algorithm: str,
    input_data: Optional[str],
    extra_arguments: Optional[str],
) -> Tuple[Any, ...]:
    """First submit stage: validate and show the loading indicator.

    Returns (state, submit button, status panel, viewer, controls group,
    *transport).
    """
    session = get_session(state)
    state["pending_seq"] = None
    request = VisualizationRequest(
        algorithm_name=algorithm,
        input_data=input_data,
        extra_arguments=extra_arguments,
    )
    problem = validate_form_input(algorithm, input_data, extra_arguments)
    if problem is None and not request.is_valid:
        problem = "Please provide an algorithm name."
    if problem is not None:
        logger.debug(f"Rejected form input: {problem}")
        session.reject(ValidationError(problem))
        return (
            state,
            _submit_button(loading=False),
            *render_panels(session),
            *render_transport(session),
        )

    state["pending_seq"] = session.begin(request)
    state["last_seen"] = 0
    state["inbox_origin"] = None
    return (
        state,
        _submit_button(loading=True),
        *render_panels(session),
        *render_transport(session),
    )


def on_generate(state: SessionState) -> Tuple[Any, ...]:
    """Second submit stage: call the generation service and load the result.

    Returns (state, submit button, status panel, viewer, controls group,
    *transport, timer).
    """
    session = get_session(state)
    seq = state.get("pending_seq")
    state["pending_seq"] = None
    if seq is not None:
        try:
            document = session.generator.generate(session.request)  # type: ignore[arg-type]
            session.complete(seq, document)
        except GenerationError as e:
            logger.warning(f"Generation failed for request #{seq}: {e.message}")
            session.fail(seq, e)
        except Exception:
            logger.exception(f"Unexpected error while generating request #{seq}")
            session.fail(seq, GenerationError(UNKNOWN_ERROR_MSG))
    loading = session.controller.phase is PlayerPhase.LOADING
    return (
        state,
        _submit_button(loading=False),
        *render_panels(session),
        *render_transport(session),
        _timer(active=loading),
    )


def on_viz_message(state: SessionState, raw_inbox: str) -> Tuple[Any, ...]:
    """Apply new messages relayed from the viewer iframe, in arrival order.

    Returns (state, *transport, timer).
    """
    session = get_session(state)
    origin, messages = new_inbox_messages(state, raw_inbox)
    for data in messages:
        session.handle_message(origin, data)
    loading = session.controller.phase is PlayerPhase.LOADING
    return (state, *render_transport(session), _timer(active=loading))


def on_poll_ready(state: SessionState) -> Tuple[Any, ...]:
    """Enforce the readiness timeout while a document is loading.

    Returns (state, status panel, viewer, controls group, *transport, timer).
    """
    session = get_session(state)
    if session.check_ready_timeout():
        return (
            state,
            *render_panels(session),
            *render_transport(session),
            _timer(active=False),
        )
    loading = session.controller.phase is PlayerPhase.LOADING
    unchanged = tuple(gr.update() for _ in range(8))
    return (state, *unchanged, _timer(active=loading))


def _transport(state: SessionState, action: str) -> Tuple[Any, ...]:
    session = get_session(state)
    try:
        commands = session.command(action)
    except PlayerError as e:
        logger.debug(f"Ignoring {action}: {e}")
        gr.Warning("The visualization is not ready yet.")
        return (state, gr.update(), *render_transport(session))
    except Exception:
        logger.exception(f"Transport action '{action}' failed")
        raise gr.Error(USER_FRIENDLY_EXC)
    return (state, outbox_value(state, commands), *render_transport(session))


def on_play_pause(state: SessionState) -> Tuple[Any, ...]:
    """Handle the play/pause button. Returns (state, outbox, *transport)."""
    return _transport(state, "toggle")


def on_next(state: SessionState) -> Tuple[Any, ...]:
    """Handle the next-step button. Returns (state, outbox, *transport)."""
    return _transport(state, "next")


def on_previous(state: SessionState) -> Tuple[Any, ...]:
    """Handle the previous-step button. Returns (state, outbox, *transport)."""
    return _transport(state, "previous")
