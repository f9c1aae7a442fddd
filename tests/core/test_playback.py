"""Tests for the PlayerController and PlaybackState."""

from typing import List, Tuple

import pytest
from pydantic import ValidationError as PydanticValidationError

from algo_lab.core.errors import PlayerNotReadyError, ReadyTimeoutError
from algo_lab.core.messages import Command
from algo_lab.core.models import GeneratedDocument
from algo_lab.core.playback import (
    WAITING_TEXT,
    PlaybackState,
    PlayerController,
    PlayerPhase,
)
from tests.helpers import SAMPLE_HTML, FakeClock, ready_message, step_message


@pytest.fixture
def sent() -> List[Tuple[str, Command]]:
    """Commands captured by the dispatch callback."""
    return []


@pytest.fixture
def controller(sent: List[Tuple[str, Command]]) -> PlayerController:
    """Controller with a recording dispatch callback and no timeout."""
    return PlayerController(dispatch=lambda ctx, cmd: sent.append((ctx, cmd)))


def _ready(controller: PlayerController, total: int = 5) -> str:
    ctx = controller.load(GeneratedDocument(html=SAMPLE_HTML))
    assert controller.handle_message(ctx, ready_message(total))
    return ctx


@pytest.mark.unit
def test_initial_state(controller: PlayerController) -> None:
    """Should start uninitialized with transport disabled."""
    assert controller.phase is PlayerPhase.UNINITIALIZED
    assert controller.state == PlaybackState()
    assert controller.state.status_text == WAITING_TEXT
    assert not controller.can_play
    assert not controller.can_next
    assert not controller.can_previous


@pytest.mark.unit
def test_load_then_ready(controller: PlayerController) -> None:
    """Should go LOADING on load and READY on VIZ_READY."""
    ctx = controller.load(GeneratedDocument(html=SAMPLE_HTML))
    assert controller.phase is PlayerPhase.LOADING
    assert controller.context_id == ctx
    assert not controller.can_play

    assert controller.handle_message(ctx, ready_message(5))
    state = controller.state
    assert controller.phase is PlayerPhase.READY
    assert state.is_ready and not state.is_playing
    assert state.current_step_index == 0
    assert state.total_steps == 5
    assert state.status_text == "Step 1 of 5"
    assert state.progress_percent == pytest.approx(20.0)
    assert controller.can_play and controller.can_next
    assert not controller.can_previous


@pytest.mark.unit
def test_five_step_playthrough(
    controller: PlayerController, sent: List[Tuple[str, Command]]
) -> None:
    """Should play through to the end and stop on the last step."""
    ctx = _ready(controller)

    assert controller.play() == [Command.PLAY]
    assert sent == [(ctx, Command.PLAY)]
    assert controller.state.is_playing
    assert controller.phase is PlayerPhase.PLAYING
    # index only moves when the document reports it
    assert controller.state.current_step_index == 0

    for i in range(1, 4):
        controller.handle_message(ctx, step_message(i, 5, f"step {i}"))
        assert controller.state.current_step_index == i
        assert controller.state.is_playing
        assert controller.state.explanation == f"step {i}"

    controller.handle_message(ctx, step_message(4, 5, "done"))
    state = controller.state
    assert state.current_step_index == 4
    assert state.at_last_step
    assert not state.is_playing
    assert controller.phase is PlayerPhase.READY
    assert state.progress_percent == pytest.approx(100.0)
    assert not controller.can_next
    assert controller.can_previous


@pytest.mark.unit
def test_play_at_last_step_restarts(
    controller: PlayerController, sent: List[Tuple[str, Command]]
) -> None:
    """Should rewind before playing when parked on the last step."""
    ctx = _ready(controller)
    controller.handle_message(ctx, step_message(4, 5))
    sent.clear()

    assert controller.play() == [Command.RESTART, Command.PLAY]
    assert [cmd for _, cmd in sent] == [Command.RESTART, Command.PLAY]
    assert controller.state.is_playing

    controller.handle_message(ctx, step_message(0, 5))
    assert controller.state.current_step_index == 0
    assert controller.state.is_playing


@pytest.mark.unit
def test_toggle(controller: PlayerController) -> None:
    """Should alternate between play and pause."""
    _ready(controller)
    assert controller.toggle() == [Command.PLAY]
    assert controller.state.is_playing
    assert controller.toggle() == [Command.PAUSE]
    assert not controller.state.is_playing


@pytest.mark.unit
def test_next_and_previous_pause_first(controller: PlayerController) -> None:
    """Should stop playback and then step, leaving the index to the document."""
    ctx = _ready(controller)
    controller.play()
    controller.handle_message(ctx, step_message(2, 5))

    assert controller.next() == [Command.PAUSE, Command.NEXT_STEP]
    assert not controller.state.is_playing
    assert controller.state.current_step_index == 2

    assert controller.previous() == [Command.PAUSE, Command.PREV_STEP]
    assert not controller.state.is_playing


@pytest.mark.unit
def test_restart(controller: PlayerController) -> None:
    """Should pause and rewind without playing."""
    ctx = _ready(controller)
    controller.play()
    controller.handle_message(ctx, step_message(3, 5))
    assert controller.restart() == [Command.PAUSE, Command.RESTART]
    assert not controller.state.is_playing


@pytest.mark.unit
def test_step_update_is_idempotent(controller: PlayerController) -> None:
    """Should yield the same state when a message is applied twice."""
    ctx = _ready(controller)
    controller.handle_message(ctx, step_message(2, 5, "x"))
    first = controller.state
    controller.handle_message(ctx, step_message(2, 5, "x"))
    assert controller.state == first


@pytest.mark.unit
def test_out_of_range_index_is_clamped(controller: PlayerController) -> None:
    """Should keep the index within the reported step count."""
    ctx = _ready(controller)
    controller.handle_message(ctx, step_message(9, 5))
    assert controller.state.current_step_index == 4


@pytest.mark.unit
def test_foreign_and_stale_origins_dropped(controller: PlayerController) -> None:
    """Should ignore messages not tagged with the current context."""
    old_ctx = _ready(controller)
    assert not controller.handle_message("someone-else", step_message(1, 5))
    assert not controller.handle_message(None, step_message(1, 5))

    new_ctx = controller.load(GeneratedDocument(html=SAMPLE_HTML))
    assert new_ctx != old_ctx
    assert not controller.handle_message(old_ctx, ready_message(5))
    assert controller.phase is PlayerPhase.LOADING
    assert not controller.state.is_ready


@pytest.mark.unit
def test_step_before_ready_ignored(controller: PlayerController) -> None:
    """Should not apply STEP_UPDATE until VIZ_READY arrives."""
    ctx = controller.load(GeneratedDocument(html=SAMPLE_HTML))
    assert not controller.handle_message(ctx, step_message(2, 5))
    assert controller.state == PlaybackState()


@pytest.mark.unit
def test_malformed_message_ignored(controller: PlayerController) -> None:
    """Should leave state untouched for invalid messages."""
    ctx = _ready(controller)
    before = controller.state
    assert not controller.handle_message(ctx, {"type": "STEP_UPDATE"})
    assert not controller.handle_message(ctx, "garbage")
    assert controller.state == before


@pytest.mark.unit
def test_negative_step_index_rejected(controller: PlayerController) -> None:
    """Should reject a STEP_UPDATE below zero instead of clamping it."""
    ctx = _ready(controller)
    controller.handle_message(ctx, step_message(2, 5, "Swap"))
    before = controller.state
    assert not controller.handle_message(ctx, step_message(-1, 5, "Back"))
    assert controller.state == before
    assert controller.state.explanation == "Swap"


@pytest.mark.unit
@pytest.mark.parametrize("bad_type", [[], {"x": 1}, ["STEP_UPDATE"]])
def test_unhashable_type_ignored(controller: PlayerController, bad_type) -> None:
    """Should drop messages whose type is a list or object."""
    ctx = _ready(controller)
    before = controller.state
    data = {"type": bad_type, "payload": {"current": 1, "total": 5}}
    assert not controller.handle_message(ctx, data)
    assert controller.state == before


@pytest.mark.unit
def test_second_ready_resets(controller: PlayerController) -> None:
    """Should reset to step 0 when the document re-announces itself."""
    ctx = _ready(controller)
    controller.play()
    controller.handle_message(ctx, step_message(3, 5))
    controller.handle_message(ctx, ready_message(8))
    state = controller.state
    assert state.current_step_index == 0
    assert state.total_steps == 8
    assert not state.is_playing


@pytest.mark.unit
def test_zero_steps_disables_transport(controller: PlayerController) -> None:
    """Should keep transport disabled when the document has no steps."""
    _ready(controller, total=0)
    assert controller.is_ready
    assert not controller.can_play
    with pytest.raises(PlayerNotReadyError):
        controller.play()


@pytest.mark.unit
def test_commands_before_ready_raise(
    controller: PlayerController, sent: List[Tuple[str, Command]]
) -> None:
    """Should refuse transport actions until the document is ready."""
    for action in (controller.play, controller.next, controller.restart):
        with pytest.raises(PlayerNotReadyError):
            action()
    controller.load(GeneratedDocument(html=SAMPLE_HTML))
    with pytest.raises(PlayerNotReadyError):
        controller.toggle()
    assert sent == []


@pytest.mark.unit
def test_ready_timeout() -> None:
    """Should drop a context that never reports ready."""
    clock = FakeClock()
    controller = PlayerController(ready_timeout=30, clock=clock)
    ctx = controller.load(GeneratedDocument(html=SAMPLE_HTML))

    clock.advance(29)
    assert not controller.check_ready_timeout()
    assert controller.phase is PlayerPhase.LOADING

    clock.advance(1)
    assert controller.check_ready_timeout()
    assert controller.phase is PlayerPhase.UNINITIALIZED
    assert isinstance(controller.error, ReadyTimeoutError)
    assert controller.context_id is None
    # late messages from the dropped context are ignored
    assert not controller.handle_message(ctx, ready_message(5))

    # loading again clears the error
    controller.load(GeneratedDocument(html=SAMPLE_HTML))
    assert controller.error is None


@pytest.mark.unit
def test_ready_timeout_not_applied_once_ready() -> None:
    """Should never time out a context that reported ready."""
    clock = FakeClock()
    controller = PlayerController(ready_timeout=5, clock=clock)
    _ready(controller)
    clock.advance(3600)
    assert not controller.check_ready_timeout()
    assert controller.is_ready


@pytest.mark.unit
def test_ready_timeout_disabled() -> None:
    """Should wait forever when the timeout is 0."""
    clock = FakeClock()
    controller = PlayerController(ready_timeout=0, clock=clock)
    controller.load(GeneratedDocument(html=SAMPLE_HTML))
    clock.advance(10_000)
    assert not controller.check_ready_timeout()
    assert controller.phase is PlayerPhase.LOADING


@pytest.mark.unit
def test_ready_timeout_without_load_time() -> None:
    """Should not time out a loading context with no recorded load time."""
    clock = FakeClock()
    controller = PlayerController(ready_timeout=5, clock=clock)
    controller.load(GeneratedDocument(html=SAMPLE_HTML))
    controller.loaded_at = None
    clock.advance(3600)
    assert not controller.check_ready_timeout()
    assert controller.phase is PlayerPhase.LOADING


@pytest.mark.unit
def test_send_without_context_raises(
    controller: PlayerController, sent: List[Tuple[str, Command]]
) -> None:
    """Should raise PlayerNotReadyError rather than dispatch to no context."""
    _ready(controller)
    controller.context_id = None
    with pytest.raises(PlayerNotReadyError):
        controller.play()
    assert sent == []


@pytest.mark.unit
def test_playback_state_invariants() -> None:
    """Should reject out-of-range indexes and playing without ready."""
    with pytest.raises(PydanticValidationError):
        PlaybackState(current_step_index=5, total_steps=5, is_ready=True)
    with pytest.raises(PydanticValidationError):
        PlaybackState(total_steps=5, is_ready=False, is_playing=True)
    with pytest.raises(PydanticValidationError):
        PlaybackState(current_step_index=-1, total_steps=5)

    state = PlaybackState(current_step_index=2, total_steps=5, is_ready=True)
    assert state.progress_percent == pytest.approx(60.0)
    assert not state.at_first_step and not state.at_last_step
    assert PlaybackState().progress_percent == 0.0
