"""Helpers tests."""

import json
from typing import Any, List

SAMPLE_HTML = """<!DOCTYPE html>
<html>
<head><title>Bubble Sort</title></head>
<body>
<div id="explanation-box"></div>
<script>
window.parent.postMessage({type: 'VIZ_READY', payload: {stepInfo: {current: 0, total: 5}}}, '*');
</script>
</body>
</html>"""


def gemini_body(text: str) -> dict:
    """A successful generateContent response body carrying `text`."""
    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": text}]}, "index": 0}
        ]
    }


def ready_message(total: int) -> dict[str, Any]:
    """Raw VIZ_READY message as posted by a document."""
    return {"type": "VIZ_READY", "payload": {"stepInfo": {"current": 0, "total": total}}}


def step_message(current: int, total: int, explanation: str = "") -> dict[str, Any]:
    """Raw STEP_UPDATE message as posted by a document."""
    return {
        "type": "STEP_UPDATE",
        "payload": {"current": current, "total": total, "explanation": explanation},
    }


def inbox(origin: str, messages: List[dict]) -> str:
    """Serialized inbox value as written by the host bridge script."""
    return json.dumps({"origin": origin, "messages": messages})


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
