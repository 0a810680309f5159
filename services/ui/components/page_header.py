from __future__ import annotations

from html import escape
from typing import Iterable, Sequence

import streamlit as st

from services.ui.theme_manager import get_palette


def _chunk(seq: Sequence, size: int) -> Iterable[Sequence]:
    for idx in range(0, len(seq), size):
        yield seq[idx : idx + size]


def render_page_header(
    *,
    title: str,
    summary: str,
    icon: str = "📦",
    metrics: Sequence[dict] | None = None,
) -> None:
    """Render the page hero plus simple metric cards."""
    pal = get_palette()

    st.markdown(
        f"""
        <style>
        .page-hero {{
            background: radial-gradient(circle at 15% 20%, {pal['card']}, {pal['bg']});
            border: 1px solid {pal['border']};
            border-radius: 18px;
            padding: 1.2rem 1.6rem;
            box-shadow: {pal['shadow']};
            color: {pal['text']};
            margin-bottom: 0.8rem;
        }}
        .page-hero h2 {{ margin: 0 0 0.3rem; font-size: 1.4rem; }}
        </style>
        """,
        unsafe_allow_html=True,
    )

    metrics = list(metrics or [])
    hero_col, metrics_col = st.columns([1.6, 1], gap="large") if metrics else (st.container(), None)

    with hero_col:
        st.markdown(
            f"""
            <div class="page-hero">
                <h2>{escape(icon)} {escape(title)}</h2>
                <p style="color:{pal['subtext']}; margin:0;">{escape(summary)}</p>
            </div>
            """,
            unsafe_allow_html=True,
        )

    if metrics_col is None:
        return
    with metrics_col:
        for row in _chunk(metrics, 3):
            cols = st.columns(len(row))
            for col, metric in zip(cols, row):
                with col:
                    st.metric(metric.get("label", "Metric"), metric.get("value", "—"))
                    if metric.get("context"):
                        st.caption(metric["context"])
