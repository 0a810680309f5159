#
# add this top of your page
#from services.ui.theme_manager import apply_theme, get_theme
#apply_theme(get_theme())

from __future__ import annotations

from typing import Dict

import streamlit as st

from services.common.config import UI_THEME

PALETTES: Dict[str, Dict[str, str]] = {
    "dark": {
        "bg": "#0b0f16",
        "text": "#f8fafc",
        "subtext": "#cbd5e1",
        "card": "#0f172a",
        "border": "#1e3a8a",
        "accent": "#007aff",
        "accent2": "#22c55e",
        "muted": "#94a3b8",
        "shadow": "0 4px 16px rgba(0,0,0,0.4)",
    },
    "light": {
        "bg": "#f8fafc",
        "text": "#0f172a",
        "subtext": "#334155",
        "card": "#ffffff",
        "border": "#e2e8f0",
        "accent": "#007aff",
        "accent2": "#16a34a",
        "muted": "#64748b",
        "shadow": "0 4px 16px rgba(15,23,42,0.08)",
    },
}


def get_theme() -> str:
    theme = st.session_state.setdefault("ui_theme", UI_THEME)
    return theme if theme in PALETTES else "dark"


def get_palette(theme: str | None = None) -> Dict[str, str]:
    return PALETTES.get(theme or get_theme(), PALETTES["dark"])


def apply_theme(theme: str | None = None):
    """Apply the shared dark/light theme plus the planner card styles."""
    pal = get_palette(theme)

    st.markdown(f"""
    <style>
    html, body, [data-testid="stAppViewContainer"] {{
        background: {pal['bg']} !important;
        color: {pal['text']} !important;
        font-family: "Inter","SF Pro Display","Segoe UI",system-ui,sans-serif !important;
    }}
    h1,h2,h3,h4,h5,h6 {{
        color: {pal['text']} !important;
        font-weight: 700 !important;
        letter-spacing: -0.02em !important;
    }}
    p, li, label {{ color: {pal['subtext']} !important; }}
    small, .stCaption {{ color: {pal['muted']} !important; }}
    hr {{ border: none !important; height: 1px !important;
         background: linear-gradient(90deg,transparent,{pal['accent']},transparent) !important; }}

    /* buttons */
    button[kind="primary"], .stButton>button, .stFormSubmitButton>button {{
        border-radius: 8px !important;
        font-weight: 600 !important;
    }}
    button[kind="primary"] {{
        background: linear-gradient(180deg,#007aff,#005ecb) !important;
        color: #ffffff !important;
        border: 1px solid #0051b8 !important;
    }}

    /* solution cards / sections */
    .poc-card {{
        background: {pal['card']};
        border: 1px solid {pal['border']};
        border-radius: 14px;
        padding: 1rem 1.2rem;
        box-shadow: {pal['shadow']};
        min-height: 150px;
    }}
    .poc-card.selected {{ border: 2px solid {pal['accent2']}; }}
    .poc-card .icon {{ font-size: 1.8rem; }}
    .poc-card h4 {{ margin: 0.3rem 0; font-size: 1.02rem; }}
    .poc-card p {{ font-size: 0.85rem; margin: 0; }}

    /* step indicator */
    .poc-steps {{ display: flex; gap: 0.6rem; margin: 0.4rem 0 1.2rem; }}
    .poc-step {{
        flex: 1; padding: 0.6rem 0.8rem; border-radius: 12px;
        border: 1px solid {pal['border']}; background: {pal['card']};
    }}
    .poc-step .num {{
        display: inline-flex; width: 1.6rem; height: 1.6rem; border-radius: 999px;
        align-items: center; justify-content: center; margin-right: 0.4rem;
        background: {pal['border']}; color: #fff; font-weight: 700;
    }}
    .poc-step.active {{ border-color: {pal['accent']}; }}
    .poc-step.active .num {{ background: {pal['accent']}; }}
    .poc-step.completed .num {{ background: {pal['accent2']}; }}
    .poc-step .desc {{ display: block; font-size: 0.78rem; color: {pal['muted']}; }}

    [data-testid="stDataFrame"] {{
        border: 1px solid {pal['border']} !important;
        border-radius: 12px !important;
    }}
    [data-testid="stSidebar"] {{
        border-right: 1px solid {pal['border']} !important;
    }}
    </style>
    """, unsafe_allow_html=True)


def render_theme_toggle(label: str = "🌙 Dark mode", key: str = "ui_theme_toggle", help: str | None = None) -> None:
    is_dark = get_theme() == "dark"
    new_is_dark = st.toggle(label, value=is_dark, key=key, help=help)
    new_theme = "dark" if new_is_dark else "light"
    if new_theme != st.session_state.get("ui_theme"):
        st.session_state["ui_theme"] = new_theme
        st.rerun()
