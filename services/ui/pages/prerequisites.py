#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""📋 Prerequisites: attached to a whole solution or to one use case."""
import streamlit as st

from services.common.models import SolutionPrerequisite
from services.ui.components.page_header import render_page_header
from services.ui.components.status_message import render_flash, report_result
from services.ui.theme_manager import apply_theme, get_theme
from services.ui.utils.session import ensure_keys, get_catalog, render_nav_bar

st.set_page_config(page_title="Prerequisites", layout="wide")
ss = st.session_state
ensure_keys()
apply_theme(get_theme())
render_nav_bar("prerequisites")

PAGE = "prerequisites"
SCOPES = {"solution": "Solution", "use_case": "Use case"}

catalog = get_catalog()
results = [catalog.get_all_solutions(), catalog.get_all_use_cases(), catalog.get_all_prerequisites()]
solutions, use_cases, prerequisites = [r.items if r.success else [] for r in results]
solution_by_id = {s.id: s for s in solutions}
use_case_by_id = {uc.id: uc for uc in use_cases}

render_page_header(
    icon="📋",
    title="Prerequisites",
    summary="Technical requirements that must be in place before the POC starts.",
    metrics=[
        {"label": "Solution-level", "value": sum(1 for p in prerequisites if p.scope == "solution")},
        {"label": "Use-case-level", "value": sum(1 for p in prerequisites if p.scope == "use_case")},
    ],
)
render_flash(PAGE)
for r in results:
    if not r.success:
        st.error(r.error)


def _solution_label(solution_id: str) -> str:
    solution = solution_by_id.get(solution_id)
    return f"{solution.icon} {solution.name}" if solution else "Unknown"


def _use_case_label(use_case_id: str) -> str:
    uc = use_case_by_id.get(use_case_id)
    if uc is None:
        return "Unknown"
    return f"{uc.text} ({_solution_label(uc.solution_id)})"


def _owner_label(prereq) -> str:
    if isinstance(prereq, SolutionPrerequisite):
        return f"Solution: {_solution_label(prereq.solution_id)}"
    return f"Use case: {_use_case_label(prereq.use_case_id)}"


def _target_inputs(prefix: str, scope: str = "solution", current: str = ""):
    """Scope radio + target select; returns (solution_id, use_case_id)."""
    scope = st.radio("Attach to", list(SCOPES), format_func=SCOPES.get, horizontal=True,
                     index=list(SCOPES).index(scope), key=f"{prefix}_scope")
    if scope == "solution":
        ids = list(solution_by_id)
        if not ids:
            st.caption("No solutions yet.")
            return None, None
        chosen = st.selectbox("Solution *", ids, format_func=_solution_label,
                              index=ids.index(current) if current in ids else 0, key=f"{prefix}_solution")
        return chosen, None
    ids = list(use_case_by_id)
    if not ids:
        st.caption("No use cases yet.")
        return None, None
    chosen = st.selectbox("Use case *", ids, format_func=_use_case_label,
                          index=ids.index(current) if current in ids else 0, key=f"{prefix}_use_case")
    return None, chosen


# ─────────────────────────────────────────────
# Add (not a form: the scope radio must re-render the target select)
# ─────────────────────────────────────────────
with st.expander("➕ Add prerequisite"):
    new_text = st.text_input("Prerequisite *", key="prereq_add_text")
    sol_id, uc_id = _target_inputs("prereq_add")
    if st.button("Add prerequisite", key="prereq_add_submit", type="primary"):
        report_result(PAGE, catalog.add_prerequisite(new_text, solution_id=sol_id, use_case_id=uc_id),
                      "Prerequisite added!")

# ─────────────────────────────────────────────
# List
# ─────────────────────────────────────────────
term = st.text_input("🔍 Search", key="prereq_search", placeholder="Search prerequisites…").strip().lower()
visible = [p for p in prerequisites if not term or term in p.text.lower()]
st.caption(f"Showing {len(visible)} of {len(prerequisites)} prerequisites")

for prereq in visible:
    with st.container(border=True):
        st.markdown(f"**{prereq.text}**  \n<small>{_owner_label(prereq)}</small>", unsafe_allow_html=True)
        with st.expander("✏️ Edit"):
            text = st.text_input("Prerequisite *", value=prereq.text, key=f"prereq_edit_text_{prereq.id}")
            current = prereq.solution_id if prereq.scope == "solution" else prereq.use_case_id
            sol_id, uc_id = _target_inputs(f"prereq_edit_{prereq.id}", prereq.scope, current)
            if st.button("💾 Save", key=f"prereq_save_{prereq.id}"):
                report_result(
                    PAGE,
                    catalog.update_prerequisite(prereq.id, text, solution_id=sol_id, use_case_id=uc_id),
                    "Prerequisite updated!",
                )
        confirm = st.checkbox("Confirm delete", key=f"prereq_confirm_{prereq.id}")
        if st.button("🗑️ Delete", key=f"prereq_delete_{prereq.id}", disabled=not confirm):
            report_result(PAGE, catalog.delete_prerequisite(prereq.id), "Prerequisite deleted")
