from __future__ import annotations

import streamlit as st
from dotenv import load_dotenv

from streaming_dashboard import config
from streaming_dashboard.state.session import enter_page

load_dotenv()
config.configure_logging()

st.set_page_config(
    page_title="Streaming Cluster Dashboard",
    layout="wide",
)


def _render_source() -> None:
    st.sidebar.markdown("### Topology Source")
    source = config.topology_source()
    if source == config.SOURCE_LIVE:
        st.sidebar.write(f"**Live**: `{config.meta_api_url()}`")
    else:
        st.sidebar.write(f"**Static snapshot**: `{config.static_snapshot_dir()}`")


def main() -> None:
    enter_page("home")
    st.sidebar.title("Streaming Cluster Dashboard")
    _render_source()

    st.title("Streaming Cluster Dashboard")
    st.markdown(
        "Open **Streaming** in the sidebar to inspect actors, fragments and "
        "materialized views."
    )


if __name__ == "__main__":
    main()
