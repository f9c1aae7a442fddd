"""Constants for the widget package."""

import json

from algo_lab.core.messages import COMMAND_TYPE

# Tunables
POLL_INTERVAL = 1  # seconds between readiness-timeout checks while loading
MAX_ALGORITHM_LENGTH = 200  # max chars in the algorithm name
MAX_INPUT_LENGTH = 5000  # max chars in input data / extra arguments
MAX_TTL_SECONDS = 24 * 3600  # 24 hours

# Element ids shared between Python and the browser-side bridge
FRAME_ID = "viz-frame"
INBOX_ID = "viz-inbox"
OUTBOX_ID = "viz-outbox"

INTRO_MD = (
    "Describe an algorithm and Algo Lab will generate a step-by-step animated"
    " visualization you can play, pause and step through."
)

EMPTY_TITLE = "Ready to Visualize"
EMPTY_TEXT = "Describe an algorithm on the left to generate a custom animation."
LOADING_TITLE = "Generating Custom Visualization..."
LOADING_TEXT = "The AI is building a D3.js visualization for you."
ERROR_TITLE = "An Error Occurred"

USER_FRIENDLY_EXC = (
    "Whoa...something went sideways."
    " The error has been logged. Please try generating again."
)

# Hidden bridge components must stay in the DOM, so they are hidden with css
# rather than visible=False.
BRIDGE_CSS = f"""
#{INBOX_ID}, #{OUTBOX_ID} {{ display: none !important; }}
.viz-panel {{
  min-height: 640px; display: flex; flex-direction: column;
  align-items: center; justify-content: center; text-align: center;
  border: 2px dashed #d1d5db; border-radius: 8px; padding: 16px;
}}
.viz-panel.error {{ border-color: #fca5a5; background: #fef2f2; color: #b91c1c; }}
.viz-progress {{ width: 100%; background: #e5e7eb; border-radius: 9999px; height: 10px; }}
.viz-progress > div {{
  background: #4f46e5; height: 10px; border-radius: 9999px;
  transition: width 0.3s ease-in-out;
}}
"""

# Relays postMessage traffic from the viewer iframe into the hidden inbox.
# The inbox holds every message received from the current context so the
# Python side can apply them in order without losing any.
HOST_BRIDGE_JS = f"""
<script>
(function () {{
  var inbox = {{ origin: null, messages: [] }};
  window.addEventListener('message', function (event) {{
    var frame = document.getElementById('{FRAME_ID}');
    if (!frame || event.source !== frame.contentWindow) return;
    var origin = frame.getAttribute('data-context-id');
    if (inbox.origin !== origin) inbox = {{ origin: origin, messages: [] }};
    inbox.messages.push(event.data);
    var box = document.querySelector('#{INBOX_ID} textarea');
    if (!box) return;
    box.value = JSON.stringify(inbox);
    box.dispatchEvent(new Event('input', {{ bubbles: true }}));
  }});
}})();
</script>
"""

# Posts commands from the hidden outbox into the viewer iframe.
DISPATCH_COMMANDS_JS = f"""
(raw) => {{
  if (!raw) return;
  var out;
  try {{ out = JSON.parse(raw); }} catch (e) {{ return; }}
  var frame = document.getElementById('{FRAME_ID}');
  if (!frame || !frame.contentWindow) return;
  if (frame.getAttribute('data-context-id') !== out.context) return;
  (out.commands || []).forEach(function (name) {{
    frame.contentWindow.postMessage(
      {{ type: {json.dumps(COMMAND_TYPE)}, command: name }}, '*');
  }});
}}
"""
