#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""🏠 POC Planner: landing page."""
import logging

import streamlit as st

from services.common import config
from services.ui.components.page_header import render_page_header
from services.ui.components.status_message import render_flash, report_result
from services.ui.theme_manager import apply_theme, get_theme
from services.ui.utils.session import NAV_PAGES, ensure_keys, get_catalog, go_to, render_nav_bar

st.set_page_config(page_title=config.APP_NAME, page_icon="🧭", layout="wide")
config.configure_logging()
logger = logging.getLogger(__name__)

ss = st.session_state
ensure_keys()
apply_theme(get_theme())
render_nav_bar("app")

PAGE = "home"
DESCRIPTIONS = {
    "pages/planner.py": "Build a POC plan: solutions → success criteria → documents.",
    "pages/dashboard.py": "Search and filter every use case and prerequisite.",
    "pages/solutions.py": "Manage the products in the catalog.",
    "pages/use_cases.py": "Manage predefined success criteria.",
    "pages/prerequisites.py": "Manage solution- and use-case-level prerequisites.",
}

catalog = get_catalog()
solutions_res = catalog.get_all_solutions()

render_page_header(
    icon="🧭",
    title=config.APP_NAME,
    summary="Plan proofs-of-concept: pick solutions, agree on success criteria, export the mutual plan.",
    metrics=[{"label": "Solutions", "value": len(solutions_res.items)}] if solutions_res.success else None,
)
render_flash(PAGE)

if not solutions_res.success:
    st.error(solutions_res.error)
elif not solutions_res.items:
    st.info("The catalog is empty. Load the starter solutions to get going.")
    if st.button("🌱 Seed starter data", key="home_seed", type="primary"):
        res = catalog.seed_initial_data()
        logger.info("Seed from UI: %s", res.message or res.error)
        report_result(PAGE, res, res.message or "Data seeded")

cols = st.columns(len(NAV_PAGES))
for col, (label, target) in zip(cols, NAV_PAGES):
    with col:
        with st.container(border=True):
            st.markdown(f"#### {label}")
            st.caption(DESCRIPTIONS[target])
            if st.button("Open", key=f"home_open_{target}", width="stretch"):
                go_to(target)
