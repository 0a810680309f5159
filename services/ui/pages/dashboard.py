#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
📊 Dashboard: every use case and prerequisite across the catalog

- Solution checkbox filter (default: all) + toggle all
- Case-insensitive search over names, use cases and prerequisites
- View mode: all / use cases only / prerequisites only
- Counts chart, flat table, inline edit/delete of use cases
"""
import plotly.express as px
import streamlit as st

from services.core.search import (
    VIEW_MODES,
    default_selection,
    filter_solutions,
    flatten_items,
    items_frame,
    solution_counts_frame,
    summarize,
    toggle_all,
    toggle_selection,
)
from services.ui.components.page_header import render_page_header
from services.ui.components.status_message import render_flash, report_result
from services.ui.theme_manager import apply_theme, get_theme
from services.ui.utils.session import ensure_keys, get_catalog, render_nav_bar

# ─────────────────────────────────────────────
# PAGE CONFIG: must be the first Streamlit call
# ─────────────────────────────────────────────
st.set_page_config(page_title="Dashboard", layout="wide")
ss = st.session_state
ensure_keys()
apply_theme(get_theme())
render_nav_bar("dashboard")

PAGE = "dashboard"
VIEW_LABELS = {"all": "All items", "usecases": "Use cases", "prereqs": "Prerequisites"}

ss.setdefault("dashboard_selected", None)
ss.setdefault("dashboard_filter_version", 0)

catalog = get_catalog()

# Re-fetched on every run; the other pages write to the same store.
res = catalog.get_full_solutions_data()
if not res.success:
    render_flash(PAGE)
    st.error(res.error)
    if st.button("🔄 Retry", key="dashboard_retry"):
        st.rerun()
    st.stop()

solutions = res.items
all_ids = [s.id for s in solutions]
if ss["dashboard_selected"] is None:
    ss["dashboard_selected"] = default_selection(solutions)
# Drop ids of solutions deleted elsewhere since the selection was made.
ss["dashboard_selected"] = [sid for sid in ss["dashboard_selected"] if sid in all_ids]


def _on_toggle(solution_id: str):
    ss["dashboard_selected"] = toggle_selection(ss["dashboard_selected"], solution_id)


def _on_toggle_all():
    ss["dashboard_selected"] = toggle_all(ss["dashboard_selected"], all_ids)
    ss["dashboard_filter_version"] += 1


# ─────────────────────────────────────────────
# Filters
# ─────────────────────────────────────────────
with st.sidebar:
    st.markdown("#### Solutions")
    st.button("Toggle all", key="dashboard_toggle_all", on_click=_on_toggle_all, width="stretch")
    version = ss["dashboard_filter_version"]
    for solution in solutions:
        st.checkbox(
            f"{solution.icon} {solution.name}",
            value=solution.id in ss["dashboard_selected"],
            key=f"dashboard_sel_{solution.id}_{version}",
            on_change=_on_toggle,
            args=(solution.id,),
        )

search_col, mode_col, refresh_col = st.columns([3, 2, 1])
with search_col:
    search_term = st.text_input("🔍 Search", key="dashboard_search",
                                placeholder="Search solutions, use cases, prerequisites…")
with mode_col:
    view_mode = st.radio("View", VIEW_MODES, format_func=VIEW_LABELS.get, horizontal=True, key="dashboard_view")
with refresh_col:
    st.write("")
    if st.button("🔄 Refresh", key="dashboard_refresh", width="stretch"):
        st.rerun()

visible = filter_solutions(solutions, ss["dashboard_selected"], search_term)
items = flatten_items(visible, view_mode)
totals = summarize(items, ss["dashboard_selected"])

render_page_header(
    icon="📊",
    title="Dashboard",
    summary="All use cases and prerequisites for the selected solutions.",
    metrics=[
        {"label": "Use cases", "value": totals["use_cases"]},
        {"label": "Prerequisites", "value": totals["prereqs"]},
        {"label": "Solutions", "value": totals["solutions"]},
    ],
)
render_flash(PAGE)

if not items:
    st.info("No items match the current filters.")
    st.stop()

# ─────────────────────────────────────────────
# Chart + table
# ─────────────────────────────────────────────
counts = solution_counts_frame(visible)
fig = px.bar(
    counts,
    x="solution",
    y=["use_cases", "prerequisites"],
    barmode="group",
    labels={"value": "Count", "solution": "", "variable": ""},
    title="Items per solution",
)
fig.update_layout(height=320, margin=dict(l=10, r=10, t=40, b=10))
st.plotly_chart(fig, width="stretch")

st.dataframe(items_frame(items), width="stretch", hide_index=True)

# ─────────────────────────────────────────────
# Inline edit (use cases only)
# ─────────────────────────────────────────────
use_case_items = [item for item in items if item.type == "usecase"]
if use_case_items:
    st.markdown("#### ✏️ Edit a use case")
    by_id = {item.id: item for item in use_case_items}
    edit_id = st.selectbox(
        "Use case",
        options=list(by_id),
        format_func=lambda uid: f"{by_id[uid].solution_icon} {by_id[uid].solution} · {by_id[uid].text}",
        key="dashboard_edit_id",
    )
    item = by_id[edit_id]
    with st.form(f"dashboard_edit_{edit_id}"):
        text = st.text_input("Use case", value=item.text)
        prereqs = st.text_area("Prerequisites (one per line)", value="\n".join(item.prerequisites))
        saved = st.form_submit_button("💾 Save changes", type="primary")
    if saved:
        report_result(PAGE, catalog.update_use_case(edit_id, item.solution_id, text, prereqs.splitlines()),
                      "Use case updated")

    confirm = st.checkbox("Confirm delete", key=f"dashboard_confirm_{edit_id}")
    if st.button("🗑️ Delete use case", key="dashboard_delete", disabled=not confirm):
        report_result(PAGE, catalog.delete_use_case(edit_id), "Use case deleted")
