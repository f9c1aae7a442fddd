"""Constants for core module."""

from pathlib import Path

# --- Generation service --- #
GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL: str = "gemini-2.5-flash-preview-05-20"
API_KEY_HEADER: str = "x-goog-api-key"

DEFAULT_REQUEST_TIMEOUT: float = 120.0  # seconds; generation is slow
DEFAULT_READY_TIMEOUT: float = 30.0  # seconds to wait for VIZ_READY

# --- I/O --- #
OUTPUT_FPATH: Path = Path("output")
LOGS_FPATH: Path = Path("logs")

# --- Form defaults --- #
DEFAULT_ALGORITHM: str = "Dijkstra's Algorithm"
NOT_PROVIDED: str = "Not provided"

# --- Document contract --- #
D3_CDN_URL: str = "https://d3js.org/d3.v7.min.js"
STEP_DELAY_SECONDS: int = 3

PROMPT_TEMPLATE: str = """
You are an expert D3.js and algorithm visualization developer. Your task is to \
generate a complete, self-contained HTML document that visualizes a given \
algorithm, making it exceptionally user-friendly and robust.

**Algorithm:** {algorithm}
**User-provided Input Data:** {input_data}
**User-provided Additional Arguments:** {extra_arguments}

**INTELLIGENT DATA HANDLING:**
1.  **If user provides valid data and arguments:** Use them directly.
2.  **If user data is missing, incomplete, or invalid for the algorithm:** You \
MUST generate a classic, simple, and clear example dataset.
3.  **Acknowledge Generated Data:** If you generate data, you MUST add a note in \
the explanation of the *first step* saying so. E.g., "Step 1: Initial state. A \
sample array was generated as no input was provided."

**Your output MUST be a single, complete HTML file and nothing else.** This file \
must not have any external dependencies except for the D3.js library, which you \
MUST include from the CDN: <script src="{d3_url}"></script>.

**CRITICAL REQUIREMENTS for the generated HTML:**

1.  **Structure:** A standard HTML5 document. The body should have a dark \
background (`#111827`) and light text.
2.  **Layout:**
    * Create a main container for the visualization SVG.
    * Create a separate `div` with `id="explanation-box"` for the step-by-step \
text. It should be styled to be highly readable.
    * **Visual Timer:** You MUST create an SVG element with `id="timer-svg"` \
next to the explanation text. This SVG will contain a circle that acts as a \
progress bar for the automatic playback.
3.  **Visualization:** Use an SVG element for the D3 visualization. It must be \
centered, responsive, and resize with the window.
4.  **Styling:** All CSS must be inside a `<style>` tag. Use modern styling \
(flexbox, clean fonts, etc.).
5.  **JavaScript Logic:** All JavaScript MUST be inside a single `<script>` tag.
6.  **Step-by-Step Data:** Your script must generate a series of "steps" as a \
JavaScript array (`const steps = [...]`). Each object must contain the state for \
that step AND an `explanation` string.
7.  **Communication with Parent:** The script MUST communicate with the parent \
window using `window.parent.postMessage`.
    * On load: `window.parent.postMessage({{ type: 'VIZ_READY', payload: \
{{ stepInfo: {{ current: 0, total: steps.length }} }} }}, '*');`
    * On step change: `window.parent.postMessage({{ type: 'STEP_UPDATE', \
payload: {{ current: currentStep, total: steps.length, explanation: \
steps[currentStep].explanation }} }}, '*');`
8.  **Control Functions:** You MUST expose these global functions:
    * `play()`: Starts/resumes the animation. It MUST use a \
**{step_delay}-second delay** between steps. It will control the visual timer \
animation.
    * `pause()`: Pauses the animation and the visual timer.
    * `nextStep()`: Manually advances to the next step. Must reset the timer.
    * `prevStep()`: Manually goes to the previous step. Must reset the timer.
    * `restart()`: Resets the visualization to the first step.
    * `updateVisualization(stepIndex)`: Core function to render the \
visualization for a given `stepIndex`.
9.  **Timer Logic & Scope:**
    * **Declare `timerTransition` in the global scope** of the script (e.g., \
`let timerTransition;`). This variable will hold the active D3 timer transition.
    * The `play()` function should assign the new D3 transition to this global \
`timerTransition` variable.
    * The `pause()` function must robustly stop the animation. It should check \
if `timerTransition` exists, and then wrap the interrupt call in a try-catch \
block to prevent errors from finished transitions. After interrupting, it must \
set `timerTransition = null;`. Example: `if (timerTransition) {{ try {{ \
timerTransition.interrupt(); }} catch(e) {{}} timerTransition = null; }}`
    * The `.on("end", ...)` callback for the timer transition in the `play()` \
function must also set `timerTransition = null;` before it calls `nextStep()`.
    * This robust approach ensures that `.interrupt()` is never called on a \
stale or completed transition object.

Generate the complete HTML code now. Do not include any markdown formatting \
like ```html.
"""
