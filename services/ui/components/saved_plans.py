from __future__ import annotations

import streamlit as st

from services.core.catalog import CatalogService
from services.core.plans import PlanService, ResolvedPlan, load_resolved_plan
from services.ui.components.status_message import render_flash, report_result

FLASH_KEY = "saved_plans"


def _plan_label(plan) -> str:
    company = plan.customer_info.company_name or "Unnamed customer"
    names = ", ".join(ref.name for ref in plan.solutions) or "no solutions"
    return f"{company} · {plan.customer_info.poc_start_date} · {names}"


def _render_resolved(resolved: ResolvedPlan) -> None:
    info = resolved.customer_info
    st.markdown(
        f"**{info.company_name or 'Unnamed customer'}** · status `{resolved.status}`  \n"
        f"Contact: {info.contact_name or '—'} ({info.contact_email or '—'}) · SE: {info.se_name or '—'}  \n"
        f"POC: {info.poc_start_date or '—'} → {info.poc_end_date or '—'}"
    )
    if resolved.has_missing_references:
        st.warning("This plan references solutions or use cases that were deleted since it was saved.")
    for solution in resolved.solutions:
        title = f"{solution.icon} {solution.name}".strip()
        if solution.missing and solution.saved_name:
            title += f" (saved as “{solution.saved_name}”)"
        st.markdown(f"- **{title}**")
        for uc in solution.use_cases:
            st.markdown(f"    - {'⚠️ ' if uc.missing else ''}{uc.text}")
        if solution.custom_use_case.strip():
            st.markdown(f"    - _{solution.custom_use_case.strip()}_ (custom)")


def render_saved_plans(plans: PlanService, catalog: CatalogService) -> None:
    with st.expander("🗂️ Saved plans"):
        render_flash(FLASH_KEY)
        res = plans.get_all_poc_plans()
        if not res.success:
            st.error(res.error)
            return
        if not res.items:
            st.caption("No plans saved yet.")
            return

        by_id = {p.id: p for p in res.items}
        plan_id = st.selectbox(
            "Plan",
            options=list(by_id),
            format_func=lambda pid: _plan_label(by_id[pid]),
            key="saved_plan_id",
        )
        loaded = load_resolved_plan(plans, catalog, plan_id)
        if not loaded.success:
            st.error(loaded.error)
            return
        _render_resolved(loaded.item)

        confirm = st.checkbox("Confirm delete", key=f"saved_plan_confirm_{plan_id}")
        if st.button("🗑️ Delete plan", key="saved_plan_delete", disabled=not confirm):
            report_result(FLASH_KEY, plans.delete_poc_plan(plan_id), "Plan deleted")
