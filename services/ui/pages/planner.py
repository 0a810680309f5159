#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
🧭 POC Planner: Select Solutions → Define Use Cases → Review & Export

- Stage 1: solution cards (toggle select)
- Stage 2: predefined use cases per selected solution + one custom entry each
- Stage 3: customer info, pre-requisites / success plan documents, print view, save
- Saved plans panel: re-resolves stored snapshots against the live catalog
"""
import streamlit as st

from services.core.planner import PlannerState
from services.ui.components.document_generator import render_document_generator
from services.ui.components.page_header import render_page_header
from services.ui.components.saved_plans import FLASH_KEY as SAVED_PLANS_FLASH, render_saved_plans
from services.ui.components.solution_selector import render_solution_selector
from services.ui.components.status_message import render_flash
from services.ui.components.step_indicator import render_step_indicator
from services.ui.components.use_case_collector import render_use_case_collector
from services.ui.theme_manager import apply_theme, get_theme
from services.ui.utils.session import ensure_keys, get_catalog, get_plans, render_nav_bar

# ─────────────────────────────────────────────
# PAGE CONFIG: must be the first Streamlit call
# ─────────────────────────────────────────────
st.set_page_config(page_title="POC Planner", layout="wide")
ss = st.session_state
ensure_keys()
apply_theme(get_theme())
render_nav_bar("planner")

ss.setdefault("planner_state", PlannerState())

catalog = get_catalog()
plans = get_plans()
state: PlannerState = ss["planner_state"]

# Re-fetched on every run; the management pages write to the same store.
loaded = catalog.get_full_solutions_data()
if not loaded.success:
    render_flash(SAVED_PLANS_FLASH)
    st.error(loaded.error)
    if st.button("🔄 Retry", key="planner_retry"):
        st.rerun()
    st.stop()

solutions = loaded.items
state.refresh(solutions)

render_page_header(
    icon="🧭",
    title="POC Planner",
    summary="Pick the solutions in scope, choose their success criteria and export the mutual plan.",
    metrics=[
        {"label": "Solutions", "value": len(state.selected_solutions)},
        {"label": "Use cases", "value": sum(len(v) for v in state.selected_use_cases.values())},
    ],
)

_, c2 = st.columns([4, 1])
with c2:
    if st.button("🔄 Refresh catalog", key="planner_refresh", width="stretch"):
        st.rerun()
    if st.button("↺ Start over", key="planner_reset", width="stretch"):
        ss["planner_state"] = PlannerState()
        st.rerun()

render_step_indicator(state.current_step)

render_solution_selector(state, solutions)
st.markdown("---")
render_use_case_collector(state)
st.markdown("---")
render_document_generator(state, plans)
st.markdown("---")
render_saved_plans(plans, catalog)
