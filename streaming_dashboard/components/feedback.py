from __future__ import annotations

import streamlit as st


def render_message(content: str, severity: str = "error") -> None:
    """Inline alert; ``severity`` is one of error, warning, info."""
    if severity == "warning":
        st.warning(content)
    elif severity == "info":
        st.info(content)
    else:
        st.error(content)


def render_no_data() -> None:
    st.info("No data. The cluster reported no actors for this snapshot.")
