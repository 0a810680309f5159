#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""📦 Solutions: add, edit and delete catalog solutions."""
import streamlit as st

from services.ui.components.page_header import render_page_header
from services.ui.components.status_message import render_flash, report_result
from services.ui.theme_manager import apply_theme, get_theme
from services.ui.utils.session import ensure_keys, get_catalog, render_nav_bar

st.set_page_config(page_title="Solutions", layout="wide")
ss = st.session_state
ensure_keys()
apply_theme(get_theme())
render_nav_bar("solutions")

PAGE = "solutions"
ICONS = ["📦", "🔐", "🛡️", "💻", "🍎", "🔑", "🔍", "☁️", "🖥️", "⚙️"]

catalog = get_catalog()
res = catalog.get_all_solutions()
solutions = res.items if res.success else []

render_page_header(
    icon="📦",
    title="Solutions",
    summary="Products that can be in scope for a POC.",
    metrics=[{"label": "Solutions", "value": len(solutions)}],
)
render_flash(PAGE)
if not res.success:
    st.error(res.error)


def _icon_index(icon: str) -> int:
    return ICONS.index(icon) if icon in ICONS else 0


# ─────────────────────────────────────────────
# Add
# ─────────────────────────────────────────────
with st.expander("➕ Add solution", expanded=not solutions):
    with st.form("solution_add", clear_on_submit=True):
        name = st.text_input("Name *")
        description = st.text_area("Description", height=80)
        icon = st.selectbox("Icon", ICONS)
        submitted = st.form_submit_button("Add solution", type="primary")
    if submitted:
        report_result(PAGE, catalog.add_solution(name, description, icon), "Solution added!")

# ─────────────────────────────────────────────
# List / edit / delete
# ─────────────────────────────────────────────
for solution in solutions:
    with st.container(border=True):
        st.markdown(f"### {solution.icon} {solution.name}")
        if solution.description:
            st.caption(solution.description)

        with st.expander("✏️ Edit"):
            with st.form(f"solution_edit_{solution.id}"):
                new_name = st.text_input("Name *", value=solution.name, key=f"solution_name_{solution.id}")
                new_description = st.text_area("Description", value=solution.description, height=80,
                                               key=f"solution_description_{solution.id}")
                new_icon = st.selectbox("Icon", ICONS, index=_icon_index(solution.icon), key=f"solution_icon_{solution.id}")
                saved = st.form_submit_button("💾 Save")
            if saved:
                report_result(
                    PAGE,
                    catalog.update_solution(solution.id, new_name, new_description, new_icon),
                    "Solution updated!",
                )

        with st.expander("🗑️ Delete"):
            st.warning("Deleting a solution also deletes its use cases and prerequisites.")
            confirm = st.checkbox("I understand", key=f"solution_confirm_{solution.id}")
            if st.button("Delete solution", key=f"solution_delete_{solution.id}", disabled=not confirm):
                report_result(PAGE, catalog.delete_solution(solution.id), f"Deleted {solution.name}")
