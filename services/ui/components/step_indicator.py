from __future__ import annotations

from html import escape
from typing import Sequence

import streamlit as st

from services.core.planner import PLANNER_STEPS


def step_status(step_id: int, current_step: int) -> str:
    if step_id < current_step:
        return "completed"
    if step_id == current_step:
        return "active"
    return "upcoming"


def render_step_indicator(current_step: int, steps: Sequence[dict] = PLANNER_STEPS) -> None:
    cells = []
    for step in steps:
        status = step_status(step["id"], current_step)
        number = "✓" if status == "completed" else str(step["id"])
        cells.append(
            f'<div class="poc-step {status}"><span class="num">{number}</span>'
            f'<strong>{escape(step["label"])}</strong>'
            f'<span class="desc">{escape(step["description"])}</span></div>'
        )
    st.markdown(f'<div class="poc-steps">{"".join(cells)}</div>', unsafe_allow_html=True)
