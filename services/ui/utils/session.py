# services/ui/utils/session.py
from __future__ import annotations

import logging

import streamlit as st

from services.common import config
from services.common.factory import build_store
from services.common.store import DocumentStore
from services.core.catalog import CatalogService
from services.core.plans import PlanService
from services.ui.theme_manager import render_theme_toggle

logger = logging.getLogger(__name__)

NAV_PAGES = [
    ("🧭 Planner", "pages/planner.py"),
    ("📊 Dashboard", "pages/dashboard.py"),
    ("📦 Solutions", "pages/solutions.py"),
    ("🎯 Use Cases", "pages/use_cases.py"),
    ("📋 Prerequisites", "pages/prerequisites.py"),
]


@st.cache_resource(show_spinner=False)
def _cached_store(backend: str, store_dir: str) -> DocumentStore:
    config.configure_logging()
    return build_store(backend, store_dir=store_dir or None)


def get_store() -> DocumentStore:
    """One store per (backend, dir) for the whole server process."""
    ss = st.session_state
    backend = ss.get("store_backend") or config.STORE_BACKEND
    store_dir = ss.get("store_dir") or str(config.LOCAL_STORE_DIR)
    return _cached_store(backend, store_dir)


def get_catalog() -> CatalogService:
    return CatalogService(get_store())


def get_plans() -> PlanService:
    return PlanService(get_store())


def ensure_keys():
    ss = st.session_state
    ss.setdefault("ui_theme", config.UI_THEME)
    ss.setdefault("flash", {})


# -------------- Flash messages --------------
def set_flash(page: str, kind: str, text: str):
    """Queue a message that survives the next st.rerun()."""
    st.session_state.setdefault("flash", {})[page] = (kind, text)


def pop_flash(page: str):
    return st.session_state.setdefault("flash", {}).pop(page, None)


# -------------- Navigation --------------
def go_to(target: str):
    try:
        st.switch_page(target)
    except Exception:
        logger.debug("switch_page(%s) unavailable, rerunning", target)
        st.rerun()


def render_nav_bar(current: str):
    """Page buttons in the sidebar plus the theme toggle."""
    with st.sidebar:
        st.markdown(f"### {config.APP_NAME}")
        st.caption(f"v{config.APP_VERSION} · store: {st.session_state.get('store_backend') or config.STORE_BACKEND}")
        if st.button("🏠 Home", key=f"nav_home_{current}", width="stretch"):
            go_to("app.py")
        for label, target in NAV_PAGES:
            if st.button(label, key=f"nav_{target}_{current}", width="stretch",
                         disabled=target.endswith(f"{current}.py")):
                go_to(target)
        st.markdown("---")
        render_theme_toggle(help="Switch theme")
