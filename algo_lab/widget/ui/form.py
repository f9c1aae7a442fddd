"""Request form UI components."""

from __future__ import annotations

from typing import List, NamedTuple

import gradio as gr

from algo_lab.core.constants import DEFAULT_ALGORITHM
from algo_lab.widget.constants import MAX_ALGORITHM_LENGTH, MAX_INPUT_LENGTH
from algo_lab.widget.helpers import spacer


class FormUI(NamedTuple):
    """Holds references to request form components."""

    form_group: gr.Group
    algorithm: gr.Textbox
    input_data: gr.Textbox
    extra_arguments: gr.Textbox
    submit_btn: gr.Button

    @property
    def fields(self) -> List[gr.Component]:
        """Inputs in the order handlers expect them."""
        return [self.algorithm, self.input_data, self.extra_arguments]


def build_form(default_algorithm: str = DEFAULT_ALGORITHM) -> FormUI:
    """Build the algorithm / input data / arguments form."""
    with gr.Group() as form_group:
        algorithm = gr.Textbox(
            label="Algorithm",
            value=default_algorithm,
            placeholder="e.g., A* Search",
            lines=1,
            max_length=MAX_ALGORITHM_LENGTH,
        )
        input_data = gr.Textbox(
            label="Input Data (Optional)",
            placeholder="e.g., a graph, a grid, or an array.",
            lines=4,
            max_length=MAX_INPUT_LENGTH,
        )
        extra_arguments = gr.Textbox(
            label="Additional Arguments (Optional)",
            placeholder="e.g., Start Node, End Node",
            lines=1,
            max_length=MAX_INPUT_LENGTH,
        )
    spacer(8)
    submit_btn = gr.Button("Visualize", variant="primary")

    return FormUI(
        form_group=form_group,
        algorithm=algorithm,
        input_data=input_data,
        extra_arguments=extra_arguments,
        submit_btn=submit_btn,
    )
