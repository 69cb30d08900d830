# SPDX-License-Identifier: Apache-2.0
"""Tests for the shell router state machine."""

import pytest

from config.constants import LAST_VISITED_PAGE_KEY, SHELL_PREFERENCE_NAMESPACE
from core.content.store import ContentDocument
from core.shell.events import FrameInspection, TimerFired, TimerKind
from core.shell.state import ShellPhase
from utils.error_handler import (
    ContentNotFoundError,
    LoadFailedError,
    LoadTimeoutError,
    UnknownRouteError,
)


def _loaded_router(make_router, frame_loader, page_id="hello"):
    router = make_router()
    router.navigate_to(page_id)
    frame_loader.succeed()
    return router


def test_navigation_success_before_indicator_delay(make_router, scheduler, frame_loader, recorder):
    router = make_router()
    indicator = recorder(router.loading_indicator_changed)
    titles = recorder(router.title_changed)
    active = recorder(router.active_page_changed)

    assert router.navigate_to("languages") is True
    assert frame_loader.requests == [(1, "../languages/languages.html")]
    assert router.state.phase is ShellPhase.NAVIGATING
    assert router.state.is_loading is True

    scheduler.advance(50)
    frame_loader.succeed()
    scheduler.advance(20000)

    state = router.state
    assert state.phase is ShellPhase.LOADED
    assert state.is_loading is False
    assert state.loading_indicator_visible is False
    assert indicator.count == 0
    assert titles.last == ("Multi-Language - Hello Apps",)
    assert active.last == ("languages",)
    assert scheduler.pending_count == 0


def test_navigation_timeout_shows_error(make_router, scheduler, recorder):
    router = make_router()
    indicator = recorder(router.loading_indicator_changed)
    errors = recorder(router.error_shown)

    router.navigate_to("languages")
    scheduler.advance(300)
    assert router.state.loading_indicator_visible is True

    scheduler.advance(9699)
    assert router.state.phase is ShellPhase.NAVIGATING

    scheduler.advance(1)
    state = router.state
    assert state.phase is ShellPhase.ERRORED
    assert state.is_loading is False
    assert state.loading_indicator_visible is False
    assert isinstance(state.error, LoadTimeoutError)
    assert str(state.error) == "The application took too long to load."
    assert indicator.calls == [(True,), (False,)]
    error, retry_possible = errors.last
    assert error is state.error
    assert retry_possible is True
    assert scheduler.pending_count == 0


def test_late_load_after_timeout_is_ignored(make_router, scheduler, frame_loader):
    router = make_router()
    router.navigate_to("hello")
    scheduler.advance(10000)

    frame_loader.succeed()

    assert router.state.phase is ShellPhase.ERRORED
    assert isinstance(router.state.error, LoadTimeoutError)


def test_every_navigation_resolves_within_timeout(make_router, scheduler):
    router = make_router()
    for page_id in router.routes:
        router.navigate_to(page_id)
        scheduler.advance(router.frame_timeout_ms)
        assert router.state.is_loading is False
        assert router.state.phase in (ShellPhase.LOADED, ShellPhase.ERRORED)


def test_same_page_navigation_is_noop(make_router, scheduler, frame_loader, preferences):
    router = _loaded_router(make_router, frame_loader)
    writes = len(preferences.writes)
    requests = len(frame_loader.requests)

    assert router.navigate_to("hello") is True

    assert scheduler.pending_count == 0
    assert len(preferences.writes) == writes
    assert len(frame_loader.requests) == requests
    assert router.state.phase is ShellPhase.LOADED


def test_superseding_navigation_keeps_only_latest_timers(make_router, scheduler, frame_loader):
    router = make_router()
    router.navigate_to("hello")
    first_token = frame_loader.last_token
    scheduler.advance(100)
    router.navigate_to("languages")

    assert scheduler.pending_count == 2
    assert router.state.navigation_token == first_token + 1

    # The first navigation's timeout would have fired at 10000 ms
    scheduler.advance(9900)
    assert router.state.phase is ShellPhase.NAVIGATING
    assert router.state.current_page_id == "languages"

    frame_loader.succeed(token=first_token)
    assert router.state.phase is ShellPhase.NAVIGATING

    scheduler.advance(100)
    assert router.state.phase is ShellPhase.ERRORED
    assert router.state.error.page_id == "languages"


def test_stale_timer_event_is_dropped(make_router, scheduler):
    router = make_router()
    router.navigate_to("hello")
    router.navigate_to("languages")

    router.dispatch(TimerFired(TimerKind.LOAD_TIMEOUT, 1))

    assert router.state.phase is ShellPhase.NAVIGATING


def test_unknown_route_keeps_current_page(make_router, frame_loader, recorder):
    router = _loaded_router(make_router, frame_loader)
    errors = recorder(router.error_shown)

    assert router.navigate_to("missing") is False

    state = router.state
    assert state.current_page_id == "hello"
    assert isinstance(state.error, UnknownRouteError)
    assert str(state.error) == "Unknown application: missing"
    assert errors.count == 1


def test_unknown_route_during_navigation_keeps_loading(make_router, scheduler, frame_loader):
    router = make_router()
    router.navigate_to("hello")

    router.navigate_to("missing")
    assert router.state.is_loading is True
    assert router.state.current_page_id == "hello"

    frame_loader.succeed()
    assert router.state.phase is ShellPhase.LOADED
    assert router.state.error is None


def test_not_found_inspection_is_an_error(make_router, frame_loader):
    router = make_router()
    router.navigate_to("hello")
    frame_loader.succeed(inspection=FrameInspection.NOT_FOUND)

    assert router.state.phase is ShellPhase.ERRORED
    assert isinstance(router.state.error, ContentNotFoundError)
    assert router.state.is_loading is False


def test_opaque_inspection_counts_as_success(make_router, frame_loader):
    router = make_router()
    router.navigate_to("hello")
    frame_loader.succeed(inspection=FrameInspection.OPAQUE)

    assert router.state.phase is ShellPhase.LOADED


def test_load_failure(make_router, scheduler, frame_loader):
    router = make_router()
    router.navigate_to("languages")
    scheduler.advance(400)
    frame_loader.fail(reason="No such file")

    state = router.state
    assert state.phase is ShellPhase.ERRORED
    assert isinstance(state.error, LoadFailedError)
    assert state.error.reason == "No such file"
    assert state.loading_indicator_visible is False
    assert scheduler.pending_count == 0


def test_retry_after_error_reloads(make_router, scheduler, frame_loader, recorder):
    router = make_router()
    hidden = recorder(router.error_hidden)
    router.navigate_to("hello")
    scheduler.advance(10000)

    assert router.retry_current_navigation() is True

    assert frame_loader.requests[-1] == (2, "../hello/hello.html")
    assert router.state.error is None
    assert hidden.count == 1
    frame_loader.succeed()
    assert router.state.phase is ShellPhase.LOADED


def test_retry_reloads_loaded_page(make_router, frame_loader):
    router = _loaded_router(make_router, frame_loader)

    assert router.retry_current_navigation() is True
    assert len(frame_loader.requests) == 2
    assert router.state.phase is ShellPhase.NAVIGATING


def test_retry_without_navigation_is_noop(make_router, frame_loader):
    router = make_router()

    assert router.retry_current_navigation() is False
    assert frame_loader.requests == []


def test_start_uses_default_page(make_router, frame_loader, preferences):
    router = make_router()

    router.start()

    assert router.state.current_page_id == "hello"
    assert preferences.get(LAST_VISITED_PAGE_KEY, namespace=SHELL_PREFERENCE_NAMESPACE) == "hello"


def test_start_restores_last_visited_page(make_router, preferences):
    preferences.set(LAST_VISITED_PAGE_KEY, "languages", namespace=SHELL_PREFERENCE_NAMESPACE)
    router = make_router()

    router.start()

    assert router.state.current_page_id == "languages"


def test_start_ignores_stale_last_visited_page(make_router, preferences):
    preferences.set(LAST_VISITED_PAGE_KEY, "removed", namespace=SHELL_PREFERENCE_NAMESPACE)
    router = make_router()

    router.start()

    assert router.state.current_page_id == "hello"


def test_start_prefers_explicit_initial_page(make_router, preferences):
    preferences.set(LAST_VISITED_PAGE_KEY, "hello", namespace=SHELL_PREFERENCE_NAMESPACE)
    router = make_router()

    router.start("languages")

    assert router.state.current_page_id == "languages"


def test_default_page_falls_back_to_first_route(scheduler, frame_loader, make_router):
    content = ContentDocument(
        "shell",
        {
            "content": {
                "navigation": [
                    {"id": "b", "path": "b.html", "title": "B"},
                    {"id": "a", "path": "a.html", "title": "A"},
                ]
            },
            "settings": {"defaultPage": "zzz"},
        },
    )
    router = make_router(content)

    assert router.default_page == "b"


@pytest.mark.parametrize("width, mobile", [(320, True), (768, True), (769, False), (1280, False)])
def test_breakpoint(make_router, width, mobile):
    router = make_router()
    router.set_viewport_width(width)
    assert router.state.is_mobile_layout is mobile


def test_leaving_mobile_layout_closes_sidebar(make_router, recorder):
    router = make_router()
    sidebar = recorder(router.sidebar_changed)
    focus = recorder(router.focus_first_link_requested)

    router.set_viewport_width(500)
    router.open_sidebar()
    assert router.state.sidebar_open is True
    assert focus.count == 1

    router.set_viewport_width(1200)

    assert router.state.sidebar_open is False
    assert sidebar.calls == [(True,), (False,)]


def test_sidebar_toggle_on_desktop(make_router):
    router = make_router()
    router.set_viewport_width(1200)

    router.toggle_sidebar()
    assert router.state.sidebar_open is True
    router.toggle_sidebar()
    assert router.state.sidebar_open is False


def test_resize_is_debounced(make_router, scheduler, recorder):
    router = make_router()
    layout = recorder(router.layout_changed)

    router.notify_viewport_resized(500)
    scheduler.advance(100)
    router.notify_viewport_resized(600)
    scheduler.advance(249)
    assert router.state.is_mobile_layout is False
    assert scheduler.pending_count == 1

    scheduler.advance(1)
    assert router.state.is_mobile_layout is True
    assert layout.calls == [(True,)]


def test_resize_burst_applies_last_width(make_router, scheduler, recorder):
    router = make_router()
    layout = recorder(router.layout_changed)

    router.notify_viewport_resized(500)
    scheduler.advance(100)
    router.notify_viewport_resized(1000)
    scheduler.advance(1000)

    assert router.state.is_mobile_layout is False
    assert layout.count == 0


def test_escape_closes_sidebar_on_mobile(make_router):
    router = make_router()
    router.set_viewport_width(400)
    router.open_sidebar()

    assert router.handle_key("Escape") is True
    assert router.state.sidebar_open is False
    assert router.handle_key("Escape") is False


def test_escape_ignored_on_desktop(make_router):
    router = make_router()
    router.set_viewport_width(1200)
    router.open_sidebar()

    assert router.handle_key("Escape") is False
    assert router.state.sidebar_open is True


def test_link_selection_closes_mobile_sidebar(make_router, frame_loader):
    router = make_router()
    router.set_viewport_width(400)
    router.open_sidebar()

    router.select_navigation_link("languages")

    assert router.state.sidebar_open is False
    assert frame_loader.requests[-1][1] == "../languages/languages.html"


def test_history_back_and_forward(make_router, frame_loader):
    router = _loaded_router(make_router, frame_loader, "hello")
    router.navigate_to("languages")
    frame_loader.succeed()
    assert router.history.entries == ["hello", "languages"]

    assert router.go_back() is True
    assert router.state.current_page_id == "hello"
    frame_loader.succeed()
    assert router.history.entries == ["hello", "languages"]

    assert router.go_forward() is True
    assert router.state.current_page_id == "languages"
    assert router.go_forward() is False


def test_history_change_to_current_page_is_ignored(make_router, frame_loader):
    router = _loaded_router(make_router, frame_loader)

    assert router.handle_history_change("hello") is True
    assert len(frame_loader.requests) == 1


def test_alt_left_moves_back(make_router, frame_loader):
    router = _loaded_router(make_router, frame_loader, "hello")
    router.navigate_to("languages")

    assert router.handle_key("Left", "Alt") is True
    assert router.state.current_page_id == "hello"


def test_shutdown_cancels_all_timers(make_router, scheduler, frame_loader):
    router = make_router()
    router.navigate_to("hello")
    router.notify_viewport_resized(500)
    assert scheduler.pending_count == 3

    router.shutdown()

    assert scheduler.pending_count == 0
    assert router.has_pending_timers() is False
    assert router.navigate_to("languages") is False
    assert len(frame_loader.requests) == 1
