"""Gradio widget for Algo Lab.

Exposes a Gradio-based interface with a request form, a sandboxed iframe
hosting the generated visualization and transport controls that drive it.

NOTE: The iframe runs with scripts only (no same-origin access). Everything the
host knows about playback arrives through postMessage, relayed into Python by
a small head script; see `widget.constants` and `core.document`.
"""
