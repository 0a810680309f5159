#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""🎯 Use Cases: predefined success criteria per solution."""
import streamlit as st

from services.core.search import use_case_matches
from services.ui.components.page_header import render_page_header
from services.ui.components.status_message import render_flash, report_result
from services.ui.theme_manager import apply_theme, get_theme
from services.ui.utils.session import ensure_keys, get_catalog, render_nav_bar

st.set_page_config(page_title="Use Cases", layout="wide")
ss = st.session_state
ensure_keys()
apply_theme(get_theme())
render_nav_bar("use_cases")

PAGE = "use_cases"
ALL = "__all__"

catalog = get_catalog()
solutions_res = catalog.get_all_solutions()
use_cases_res = catalog.get_all_use_cases()
solutions = solutions_res.items if solutions_res.success else []
use_cases = use_cases_res.items if use_cases_res.success else []
solution_by_id = {s.id: s for s in solutions}

render_page_header(
    icon="🎯",
    title="Use Cases",
    summary="Success criteria offered in the planner, each with its own prerequisites.",
    metrics=[{"label": "Use cases", "value": len(use_cases)}],
)
render_flash(PAGE)
for r in (solutions_res, use_cases_res):
    if not r.success:
        st.error(r.error)


def _solution_label(solution_id: str) -> str:
    if solution_id == ALL:
        return "All solutions"
    solution = solution_by_id.get(solution_id)
    return f"{solution.icon} {solution.name}" if solution else "Unknown"


def _prereq_lines(text: str):
    return text.splitlines()


if not solutions:
    st.info("Add a solution first; every use case belongs to one.")
    st.stop()

# ─────────────────────────────────────────────
# Add
# ─────────────────────────────────────────────
with st.expander("➕ Add use case"):
    with st.form("use_case_add", clear_on_submit=True):
        solution_id = st.selectbox("Solution *", list(solution_by_id), format_func=_solution_label)
        text = st.text_input("Use case *")
        prereqs = st.text_area("Prerequisites (one per line)", height=100)
        submitted = st.form_submit_button("Add use case", type="primary")
    if submitted:
        report_result(PAGE, catalog.add_use_case(solution_id, text, _prereq_lines(prereqs)), "Use case added!")

# ─────────────────────────────────────────────
# Filter + list
# ─────────────────────────────────────────────
f1, f2 = st.columns([1, 2])
with f1:
    filter_id = st.selectbox("Solution", [ALL, *solution_by_id], format_func=_solution_label, key="use_case_filter")
with f2:
    term = st.text_input("🔍 Search", key="use_case_search", placeholder="Search use cases or prerequisites…")

visible = [uc for uc in use_cases if filter_id == ALL or uc.solution_id == filter_id]
if term.strip():
    visible = [uc for uc in visible if use_case_matches(uc, term.strip().lower())]
st.caption(f"Showing {len(visible)} of {len(use_cases)} use cases")

for uc in visible:
    with st.container(border=True):
        st.markdown(f"**{uc.text}**  \n<small>{_solution_label(uc.solution_id)}</small>", unsafe_allow_html=True)
        for prereq in uc.prerequisites:
            st.markdown(f"- {prereq}")

        with st.expander("✏️ Edit"):
            with st.form(f"use_case_edit_{uc.id}"):
                ids = list(solution_by_id)
                new_solution = st.selectbox(
                    "Solution *", ids, format_func=_solution_label,
                    index=ids.index(uc.solution_id) if uc.solution_id in ids else 0, key=f"use_case_solution_{uc.id}",
                )
                new_text = st.text_input("Use case *", value=uc.text, key=f"use_case_text_{uc.id}")
                new_prereqs = st.text_area("Prerequisites (one per line)", value="\n".join(uc.prerequisites),
                                           key=f"use_case_prereqs_{uc.id}")
                saved = st.form_submit_button("💾 Save")
            if saved:
                report_result(
                    PAGE,
                    catalog.update_use_case(uc.id, new_solution, new_text, _prereq_lines(new_prereqs)),
                    "Use case updated!",
                )

        confirm = st.checkbox("Confirm delete", key=f"use_case_confirm_{uc.id}")
        if st.button("🗑️ Delete", key=f"use_case_delete_{uc.id}", disabled=not confirm):
            report_result(PAGE, catalog.delete_use_case(uc.id), "Use case deleted")
