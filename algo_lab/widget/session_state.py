"""Session state definition for the Gradio UI."""

from typing import Optional, TypedDict

from algo_lab.core.session import VisualizationSession


class SessionState(TypedDict, total=False):
    """Custom state for the Gradio app, one per browser session."""

    session: VisualizationSession

    # Sequence number of the request started by the first submit stage and
    # finished by the second; None when the first stage rejected the input.
    pending_seq: Optional[int]

    # Bridge bookkeeping: the inbox replays every message from one origin, so
    # only messages past last_seen are new.
    inbox_origin: Optional[str]
    last_seen: int
    command_nonce: int
