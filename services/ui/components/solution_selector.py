from __future__ import annotations

from html import escape
from typing import Sequence

import streamlit as st

from services.core.aggregation import AggregatedSolution
from services.core.planner import PlannerState


def render_solution_selector(state: PlannerState, solutions: Sequence[AggregatedSolution], columns: int = 3) -> None:
    """Card grid; clicking a card's button toggles it in the planner selection."""
    st.markdown("#### 1 · Select solutions")
    if not solutions:
        st.info("No solutions in the catalog yet. Add some on the Solutions page or seed the starter data.")
        return

    for start in range(0, len(solutions), columns):
        row = solutions[start : start + columns]
        cols = st.columns(columns)
        for col, solution in zip(cols, row):
            selected = state.is_selected(solution.id)
            with col:
                st.markdown(
                    f"""
                    <div class="poc-card{' selected' if selected else ''}">
                        <span class="icon">{escape(solution.icon)}</span>
                        <h4>{escape(solution.name)}</h4>
                        <p>{escape(solution.description)}</p>
                        <p><small>{len(solution.use_cases)} use cases · {len(solution.prerequisites)} prerequisites</small></p>
                    </div>
                    """,
                    unsafe_allow_html=True,
                )
                st.button(
                    "✓ Selected" if selected else "Select",
                    key=f"planner_pick_{solution.id}",
                    type="primary" if selected else "secondary",
                    width="stretch",
                    on_click=state.toggle_solution,
                    args=(solution,),
                )
