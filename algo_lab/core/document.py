"""Preparing generated documents for the sandboxed viewer.

The viewer iframe runs with ``sandbox="allow-scripts"`` only, so the host
cannot reach into it. Control goes through a small listener injected into the
document that accepts VIZ_COMMAND messages from the parent window and calls
one of the whitelisted entry points.
"""

from __future__ import annotations

import html
import json
import re

from algo_lab.core.messages import COMMAND_TYPE, Command

IFRAME_SANDBOX = "allow-scripts"
BRIDGE_MARKER = "data-algo-lab-bridge"

_BODY_CLOSE = re.compile(r"</body\s*>", re.IGNORECASE)

_COMMAND_BRIDGE_TEMPLATE = """<script {marker}>
(function () {{
  var allowed = {allowed};
  window.addEventListener('message', function (event) {{
    if (event.source !== window.parent) return;
    var msg = event.data || {{}};
    if (msg.type !== {command_type}) return;
    if (allowed.indexOf(msg.command) === -1) return;
    var fn = window[msg.command];
    if (typeof fn === 'function') fn();
  }});
}})();
</script>
"""


def command_bridge_script() -> str:
    """Return the script tag that relays host commands into the document."""
    return _COMMAND_BRIDGE_TEMPLATE.format(
        marker=BRIDGE_MARKER,
        allowed=json.dumps([c.value for c in Command]),
        command_type=json.dumps(COMMAND_TYPE),
    )


def inject_command_bridge(document_html: str) -> str:
    """Insert the command bridge before the last ``</body>``.

    Appends it when the document has no closing body tag. Documents that
    already carry the bridge are returned unchanged.
    """
    if BRIDGE_MARKER in document_html:
        return document_html
    script = command_bridge_script()
    matches = list(_BODY_CLOSE.finditer(document_html))
    if not matches:
        return document_html + "\n" + script
    pos = matches[-1].start()
    return document_html[:pos] + script + document_html[pos:]


def render_iframe(
    document_html: str,
    context_id: str,
    title: str = "",
    frame_id: str = "viz-frame",
) -> str:
    """Render the sandboxed iframe element hosting a document.

    The context id travels with the element so the host bridge can tag every
    message with the origin it came from.
    """
    srcdoc = html.escape(inject_command_bridge(document_html), quote=True)
    return (
        f'<iframe id="{html.escape(frame_id)}"'
        f' data-context-id="{html.escape(context_id)}"'
        f' title="{html.escape(title or "Algorithm Visualization")}"'
        f' sandbox="{IFRAME_SANDBOX}" srcdoc="{srcdoc}"'
        ' style="width:100%;height:640px;border:0;border-radius:8px;'
        'background:#111827"></iframe>'
    )
