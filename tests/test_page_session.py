from unittest.mock import MagicMock

from streaming_dashboard.state import session
from streaming_dashboard.state.streaming import StreamingPageController


def test_controller_is_created_once_per_session(fixed_loader):
    state = {}
    factory = MagicMock(side_effect=lambda: fixed_loader())

    first = session.get_controller(state, loader_factory=factory)
    second = session.get_controller(state, loader_factory=factory)

    assert isinstance(first, StreamingPageController)
    assert first is second
    factory.assert_called_once_with()


def test_entering_a_page_reports_first_render():
    state = {}
    assert session.enter_page(session.STREAMING_PAGE, state) is True
    assert session.enter_page(session.STREAMING_PAGE, state) is False
    assert state[session.ACTIVE_PAGE_KEY] == session.STREAMING_PAGE


def test_leaving_streaming_page_unmounts_controller():
    controller = MagicMock()
    state = {session.CONTROLLER_KEY: controller}

    session.enter_page(session.STREAMING_PAGE, state)
    controller.unmount.assert_not_called()

    assert session.enter_page("home", state) is True
    controller.unmount.assert_called_once_with()


def test_leaving_other_pages_does_not_touch_controller():
    controller = MagicMock()
    state = {session.CONTROLLER_KEY: controller}

    session.enter_page("home", state)
    session.enter_page("settings", state)
    session.enter_page(session.STREAMING_PAGE, state)

    controller.unmount.assert_not_called()


def test_leaving_before_controller_exists():
    state = {}
    session.enter_page(session.STREAMING_PAGE, state)
    assert session.enter_page("home", state) is True
