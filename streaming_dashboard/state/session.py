from __future__ import annotations

import logging
from typing import Callable, MutableMapping, Optional

from streaming_dashboard.queries.topology import TopologyLoader, make_loader
from streaming_dashboard.state.streaming import StreamingPageController

logger = logging.getLogger("StreamingPage")

CONTROLLER_KEY = "streaming_controller"
ACTIVE_PAGE_KEY = "active_page"
STREAMING_PAGE = "streaming"


def _session(session: Optional[MutableMapping]) -> MutableMapping:
    if session is not None:
        return session
    import streamlit as st

    return st.session_state


def get_controller(
    session: Optional[MutableMapping] = None,
    loader_factory: Callable[[], TopologyLoader] = make_loader,
) -> StreamingPageController:
    """Return the session's streaming controller, creating it on first use."""
    state = _session(session)
    if CONTROLLER_KEY not in state:
        state[CONTROLLER_KEY] = StreamingPageController(loader_factory())
    return state[CONTROLLER_KEY]


def enter_page(name: str, session: Optional[MutableMapping] = None) -> bool:
    """
    Record that page ``name`` is rendering. Leaving the streaming page unmounts
    its controller. Returns True when ``name`` was just entered.
    """
    state = _session(session)
    previous = state.get(ACTIVE_PAGE_KEY)
    state[ACTIVE_PAGE_KEY] = name
    if previous == name:
        return False

    if previous == STREAMING_PAGE:
        controller = state.get(CONTROLLER_KEY)
        if controller is not None:
            logger.info("Leaving streaming page, tearing down controller")
            controller.unmount()
    return True
