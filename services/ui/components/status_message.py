from __future__ import annotations

import streamlit as st

from services.common.store import Result
from services.ui.utils.session import pop_flash, set_flash

_RENDERERS = {
    "success": st.success,
    "error": st.error,
    "warning": st.warning,
    "info": st.info,
}


def render_status_message(kind: str, text: str) -> None:
    _RENDERERS.get(kind, st.info)(text)


def render_flash(page: str) -> None:
    """Show (once) the message queued for ``page`` before the last rerun."""
    message = pop_flash(page)
    if message:
        render_status_message(*message)


def report_result(page: str, res: Result, success_text: str, rerun: bool = True) -> bool:
    """Queue the outcome of a store call and rerun so lists re-fetch."""
    if res.success:
        set_flash(page, "success", success_text)
    else:
        set_flash(page, "error", res.error or "Unknown error")
    if rerun:
        st.rerun()
    return res.success
