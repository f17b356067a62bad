from __future__ import annotations

import asyncio

import streamlit as st
from dotenv import load_dotenv

from streaming_dashboard.components.charts import actor_frame, parallelism_bar
from streaming_dashboard.components.feedback import render_message, render_no_data
from streaming_dashboard.components.streaming_view import render_streaming_view
from streaming_dashboard.config import configure_logging
from streaming_dashboard.state.session import STREAMING_PAGE, enter_page, get_controller
from streaming_dashboard.state.streaming import (
    BodyKind,
    StreamingPageController,
    render_view,
)

load_dotenv()
configure_logging()

st.set_page_config(page_title="Streaming", layout="wide")


def _render_details(controller: StreamingPageController) -> None:
    snapshot = controller.snapshot
    if snapshot is None:
        return

    if snapshot.warnings:
        with st.expander(f"Data quality warnings ({len(snapshot.warnings)})"):
            for warning in snapshot.warnings:
                st.write(f"`{warning.code}` {warning.message}")

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Worker Nodes", len(snapshot.actor_groups))
    col2.metric("Actors", snapshot.actor_count)
    col3.metric("Fragments", len(snapshot.fragments))
    col4.metric("Materialized Views", len(snapshot.materialized_views))

    st.plotly_chart(parallelism_bar(snapshot.fragments), use_container_width=True)
    st.dataframe(actor_frame(snapshot.actor_groups), use_container_width=True, hide_index=True)


def main() -> None:
    entered = enter_page(STREAMING_PAGE)
    controller = get_controller()

    st.title("Streaming")
    st.caption("Actors, fragments and materialized views of the streaming cluster.")
    reload_clicked = st.button("Reload snapshot")

    if entered or not controller.mounted or reload_clicked:
        asyncio.run(controller.load(reset_message=reload_clicked))

    view = controller.view()
    render_view(
        view,
        visualize=render_streaming_view,
        show_error=render_message,
        show_empty=render_no_data,
    )
    if view.body is BodyKind.VISUALIZATION:
        st.divider()
        _render_details(controller)


main()
