"""Review & export step: customer details, the two documents, save."""
from __future__ import annotations

import logging
from datetime import date

import streamlit as st
import streamlit.components.v1 as components

from services.core.documents import (
    build_plan_document,
    document_stats,
    render_prerequisites_text,
    render_print_html,
    render_success_plan_text,
)
from services.core.planner import PlannerState
from services.core.plans import PlanService, format_plan_for_save

logger = logging.getLogger(__name__)

PRINT_BUTTON = (
    '<div class="no-print" style="text-align:right;margin-bottom:1rem;">'
    '<button onclick="window.print()" style="padding:6px 14px;border-radius:8px;'
    'border:1px solid #0051b8;background:#007aff;color:#fff;font-weight:600;cursor:pointer;">'
    "🖨️ Print</button></div>"
)


def _with_print_button(html: str) -> str:
    return html.replace("<body>", f"<body>{PRINT_BUTTON}", 1)


def _parse_date(value: str):
    try:
        return date.fromisoformat(value) if value else None
    except ValueError:
        return None


def render_customer_form(state: PlannerState) -> None:
    info = state.customer_info
    c1, c2 = st.columns(2)
    with c1:
        info.company_name = st.text_input("Company Name", value=info.company_name, key="planner_company")
        info.contact_name = st.text_input("Contact Name", value=info.contact_name, key="planner_contact")
        info.contact_email = st.text_input("Contact Email", value=info.contact_email, key="planner_email")
    with c2:
        info.se_name = st.text_input("SE Name", value=info.se_name, key="planner_se")
        start = st.date_input("POC Start Date", value=_parse_date(info.poc_start_date) or date.today(),
                              key="planner_start")
        end = st.date_input("POC End Date", value=_parse_date(info.poc_end_date), key="planner_end")
        info.poc_start_date = start.isoformat() if start else ""
        info.poc_end_date = end.isoformat() if end else ""


def render_document_generator(state: PlannerState, plans: PlanService) -> None:
    st.markdown("#### 3 · Review & export")
    if not state.selected_solutions:
        st.caption("Documents appear once solutions are selected.")
        return

    with st.expander("Customer information", expanded=True):
        render_customer_form(state)

    document = build_plan_document(
        state.selected_solutions,
        state.selected_use_cases,
        state.custom_use_cases,
        state.customer_info,
    )
    stats = document_stats(document)
    st.caption(
        f"{stats['solutions']} solutions · {stats['criteria']} success criteria · "
        f"{stats['prerequisites']} prerequisites"
    )
    if stats["empty_sections"]:
        st.warning(f"{stats['empty_sections']} solution(s) have no success criteria yet.")

    prereq_tab, plan_tab = st.tabs(["📋 Pre-requisites", "🎯 Success Plan"])
    with prereq_tab:
        st.code(render_prerequisites_text(document), language="text")
        with st.expander("Print view"):
            components.html(_with_print_button(render_print_html(document, include_criteria=False)),
                            height=600, scrolling=True)
    with plan_tab:
        st.code(render_success_plan_text(document), language="text")
        with st.expander("Print view"):
            components.html(_with_print_button(render_print_html(document)), height=600, scrolling=True)

    if st.button("💾 Save POC Plan", key="planner_save", type="primary"):
        res = plans.save_poc_plan(
            format_plan_for_save(
                state.customer_info,
                state.selected_solutions,
                state.selected_use_cases,
                state.custom_use_cases,
            )
        )
        if res.success:
            logger.info("Saved POC plan %s", res.id)
            st.success(f"Saved! Plan ID: {res.id}")
        else:
            st.error(f"Failed to save: {res.error}")
