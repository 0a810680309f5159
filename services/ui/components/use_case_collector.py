from __future__ import annotations

import streamlit as st

from services.core.planner import PlannerState


def _use_case_key(solution_id: str, use_case_id: str) -> str:
    return f"planner_uc_{solution_id}_{use_case_id}"


def _custom_key(solution_id: str) -> str:
    return f"planner_custom_{solution_id}"


def _on_use_case(state: PlannerState, solution_id: str, use_case_id: str):
    state.set_use_case(solution_id, use_case_id, bool(st.session_state.get(_use_case_key(solution_id, use_case_id))))


def _on_custom(state: PlannerState, solution_id: str):
    state.set_custom_use_case(solution_id, st.session_state.get(_custom_key(solution_id), ""))


def render_use_case_collector(state: PlannerState) -> None:
    st.markdown("#### 2 · Define use cases")
    if not state.selected_solutions:
        st.caption("Select at least one solution to pick its success criteria.")
        return

    for solution in state.selected_solutions:
        chosen = set(state.selected_use_cases.get(solution.id, []))
        with st.container(border=True):
            st.markdown(f"**{solution.icon} {solution.name}**")
            if not solution.use_cases:
                st.caption("No predefined use cases for this solution.")
            for uc in solution.use_cases:
                key = _use_case_key(solution.id, uc.id)
                st.checkbox(
                    uc.text,
                    value=uc.id in chosen,
                    key=key,
                    on_change=_on_use_case,
                    args=(state, solution.id, uc.id),
                )
                if uc.id in chosen and uc.prerequisites:
                    st.caption("Prerequisites: " + "; ".join(uc.prerequisites))
            st.text_area(
                "Custom use case",
                value=state.custom_use_cases.get(solution.id, ""),
                key=_custom_key(solution.id),
                placeholder="Describe an additional success criterion for this solution…",
                height=80,
                on_change=_on_custom,
                args=(state, solution.id),
            )
