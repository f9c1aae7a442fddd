"""Tests for the VisualizationSession module."""

from typing import Callable, List

import httpx
import pytest

from algo_lab.core.document import BRIDGE_MARKER
from algo_lab.core.errors import (
    GenerationError,
    ParseError,
    PlayerNotReadyError,
    UpstreamError,
    ValidationError,
)
from algo_lab.core.generator import Generator
from algo_lab.core.messages import Command
from algo_lab.core.models import GeneratedDocument, VisualizationRequest
from algo_lab.core.playback import PlaybackState, PlayerController, PlayerPhase
from algo_lab.core.session import UNKNOWN_ERROR_MSG, VisualizationSession
from tests.helpers import SAMPLE_HTML, FakeClock, ready_message, step_message


def _request(name: str = "Bubble Sort") -> VisualizationRequest:
    return VisualizationRequest(algorithm_name=name)


@pytest.mark.unit
def test_submit_success(ok_generator: Generator) -> None:
    """Should store the document and load it into the controller."""
    session = VisualizationSession(ok_generator)
    doc = session.submit(_request())

    assert doc is not None
    assert session.document == doc
    assert session.error is None
    assert not session.is_loading
    assert session.controller.phase is PlayerPhase.LOADING
    assert session.controller.document == doc
    # ready timeout comes from the generator settings
    assert session.controller.ready_timeout == 30


@pytest.mark.unit
def test_submit_failure(failing_generator: Generator) -> None:
    """Should record the error and leave no document."""
    session = VisualizationSession(failing_generator)
    assert session.submit(_request()) is None
    assert isinstance(session.error, UpstreamError)
    assert session.error_message is not None
    assert session.error_message.startswith("API Error: 429")
    assert session.document is None
    assert not session.is_loading


@pytest.mark.unit
def test_submit_invalid_keeps_document(ok_generator: Generator) -> None:
    """Should reject blank input without touching the current document."""
    session = VisualizationSession(ok_generator)
    doc = session.submit(_request())
    calls = len(ok_generator.requests)  # type: ignore[attr-defined]

    assert session.submit(_request("   ")) is None
    assert isinstance(session.error, ValidationError)
    assert session.document == doc
    assert len(ok_generator.requests) == calls  # type: ignore[attr-defined]


@pytest.mark.unit
def test_new_request_resets_playback(ok_generator: Generator) -> None:
    """Should reset playback before the new document loads."""
    session = VisualizationSession(ok_generator)
    session.submit(_request())
    ctx = session.controller.context_id
    session.controller.handle_message(ctx, ready_message(5))
    session.controller.play()
    session.controller.handle_message(ctx, step_message(3, 5))

    session.begin(_request("Quick Sort"))
    assert session.is_loading
    assert session.document is None
    assert session.error is None
    assert session.controller.state == PlaybackState()
    assert session.controller.context_id is None
    # messages from the old context no longer apply
    assert not session.controller.handle_message(ctx, step_message(4, 5))


@pytest.mark.unit
def test_stale_result_discarded(ok_generator: Generator) -> None:
    """Should keep the newest request's result when an older one finishes late."""
    session = VisualizationSession(ok_generator)
    first = session.begin(_request("Bubble Sort"))
    second = session.begin(_request("Quick Sort"))

    newer = GeneratedDocument(html="<html><body>quick</body></html>")
    older = GeneratedDocument(html="<html><body>bubble</body></html>")

    assert session.complete(second, newer)
    assert not session.complete(first, older)
    assert not session.fail(first, ParseError("late"))
    assert session.document == newer
    assert session.error is None


@pytest.mark.unit
def test_stale_result_discarded_while_loading(ok_generator: Generator) -> None:
    """Should keep loading when only the superseded request finishes."""
    session = VisualizationSession(ok_generator)
    first = session.begin(_request("Bubble Sort"))
    session.begin(_request("Quick Sort"))
    assert not session.complete(first, GeneratedDocument(html="<html></html>"))
    assert session.is_loading
    assert session.document is None


@pytest.mark.unit
def test_parse_error_keeps_defaults(make_generator: Callable[..., Generator]) -> None:
    """Should report a malformed response and leave playback at defaults."""
    generator = make_generator(lambda request: httpx.Response(200, json={"foo": 1}))
    session = VisualizationSession(generator)
    assert session.submit(_request()) is None
    assert isinstance(session.error, ParseError)
    assert session.controller.state == PlaybackState()
    assert session.controller.phase is PlayerPhase.UNINITIALIZED


@pytest.mark.unit
def test_unexpected_exception_is_reported(ok_generator: Generator, monkeypatch) -> None:
    """Should convert unexpected exceptions into a generic error."""

    def _boom(request: VisualizationRequest) -> GeneratedDocument:
        raise RuntimeError("boom")

    monkeypatch.setattr(ok_generator, "generate", _boom)
    session = VisualizationSession(ok_generator)
    assert session.submit(_request()) is None
    assert isinstance(session.error, GenerationError)
    assert session.error_message == UNKNOWN_ERROR_MSG
    assert not session.is_loading


@pytest.mark.unit
def test_ready_timeout_surfaces_as_error(ok_generator: Generator) -> None:
    """Should expose a readiness timeout through the session error."""
    clock_now = [0.0]
    session = VisualizationSession(ok_generator)
    session.controller._clock = lambda: clock_now[0]
    session.submit(_request())
    clock_now[0] = 31.0
    assert session.controller.check_ready_timeout()
    assert session.error_message is not None
    assert "did not start" in session.error_message


@pytest.mark.unit
def test_iframe_document(ok_generator: Generator) -> None:
    """Should inject the command bridge into the served document."""
    session = VisualizationSession(ok_generator)
    assert session.iframe_document() is None
    session.submit(_request())
    served = session.iframe_document()
    assert served is not None
    assert BRIDGE_MARKER in served
    assert served.startswith(SAMPLE_HTML[:15])


@pytest.mark.unit
def test_ready_timeout_drops_document(ok_generator: Generator) -> None:
    """Should forget the document once the readiness timeout fires."""
    clock = FakeClock()
    session = VisualizationSession(ok_generator)
    session.controller._clock = clock
    session.submit(_request())

    clock.advance(29)
    assert not session.check_ready_timeout()
    assert session.document is not None

    clock.advance(1)
    assert session.check_ready_timeout()
    assert session.document is None
    assert session.iframe_document() is None
    assert "did not start" in (session.error_message or "")
    assert not session.check_ready_timeout()


@pytest.mark.unit
def test_controller_calls_hold_the_lock(ok_generator: Generator) -> None:
    """Should apply messages and transport actions under the session lock."""
    held: List[bool] = []
    session = VisualizationSession(
        ok_generator,
        controller=PlayerController(
            dispatch=lambda ctx, cmd: held.append(session._lock.locked())
        ),
    )
    session.submit(_request())
    ctx = session.controller.context_id
    assert session.handle_message(ctx, ready_message(5))
    assert not session.handle_message(ctx, {"type": {"x": 1}})

    assert session.command("play") == [Command.PLAY]
    assert session.command("next") == [Command.PAUSE, Command.NEXT_STEP]
    assert held == [True, True, True]
    assert not session._lock.locked()


@pytest.mark.unit
def test_command_rejects_unknown_action(ok_generator: Generator) -> None:
    """Should refuse names outside the transport actions."""
    session = VisualizationSession(ok_generator)
    with pytest.raises(ValueError):
        session.command("unload")
    with pytest.raises(PlayerNotReadyError):
        session.command("play")
    assert not session._lock.locked()


@pytest.mark.unit
def test_close(ok_generator: Generator) -> None:
    """Should drop the document and unload the controller."""
    session = VisualizationSession(ok_generator)
    session.submit(_request())
    session.close()
    assert session.document is None
    assert session.controller.context_id is None
    assert session.controller.phase is PlayerPhase.UNINITIALIZED
