# SPDX-License-Identifier: Apache-2.0
#
# Copyright (c) 2024-2025 HelloShell Contributors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
Shell router.

Coordinates navigation, frame loading, loading-indicator timing, error
display, sidebar visibility and navigation history for the application
shell. Every mutation of the shell state goes through ``dispatch`` so that
stale timer fires and load signals can be recognised and dropped by their
navigation token.
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from PySide6.QtCore import QObject, Signal

from config.constants import (
    APP_NAME,
    DEFAULT_FRAME_TIMEOUT_MS,
    DEFAULT_LOADING_DELAY_MS,
    DEFAULT_MOBILE_BREAKPOINT_PX,
    LAST_VISITED_PAGE_KEY,
    RESIZE_DEBOUNCE_MS,
    SHELL_PREFERENCE_NAMESPACE,
)
from core.content.models import NavigationEntry, Route, RouteTable
from core.content.store import ContentDocument, format_template
from core.preferences.store import PreferenceStore
from core.shell.events import (
    FrameInspection,
    HistoryChanged,
    KeyPressed,
    NavigationRequested,
    ResourceFailed,
    ResourceLoaded,
    RetryRequested,
    SidebarAction,
    SidebarRequested,
    TimerFired,
    TimerKind,
    ViewportChanged,
)
from core.shell.history import NavigationHistory
from core.shell.loader import FrameLoader
from core.shell.state import ShellPhase, ShellState
from core.timers import TimerHandle, TimerScheduler, cancel_timer
from utils.error_handler import (
    ContentNotFoundError,
    ErrorHandler,
    HelloShellError,
    LoadFailedError,
    LoadTimeoutError,
    UnknownRouteError,
)

logger = logging.getLogger("helloshell.shell.router")


class ShellRouter(QObject):
    """
    Navigation and loading state machine of the application shell.

    The router never touches widgets. Views connect to its signals and feed
    user input back through the public operations, which are thin wrappers
    around ``dispatch``.
    """

    # ShellState snapshot after every handled event
    state_changed = Signal(object)
    loading_indicator_changed = Signal(bool)
    # HelloShellError, retry possible
    error_shown = Signal(object, bool)
    error_hidden = Signal()
    active_page_changed = Signal(str)
    title_changed = Signal(str)
    sidebar_changed = Signal(bool)
    layout_changed = Signal(bool)
    focus_first_link_requested = Signal()

    def __init__(
        self,
        content: ContentDocument,
        scheduler: TimerScheduler,
        loader: FrameLoader,
        preferences: Optional[PreferenceStore] = None,
        default_page: Optional[str] = None,
        resize_debounce_ms: int = RESIZE_DEBOUNCE_MS,
        parent: Optional[QObject] = None,
    ):
        """
        Initialize the router.

        Args:
            content: Shell content document (navigation, labels, settings)
            scheduler: Timer scheduler for the indicator, timeout and
                resize debounce timers
            loader: Frame loader that reports load outcomes by token
            preferences: Preference store for the last visited page
            default_page: Fallback when the document has no ``defaultPage``
            resize_debounce_ms: Quiet period before a resize is applied
            parent: Parent QObject

        Raises:
            InitializationError: If the navigation entries are malformed
        """
        super().__init__(parent)
        self.content = content
        self.scheduler = scheduler
        self.loader = loader
        self.preferences = preferences or PreferenceStore()

        self._entries: Tuple[NavigationEntry, ...] = content.navigation_entries()
        self.routes: RouteTable = content.route_table()
        self.history = NavigationHistory()

        self.loading_delay_ms = int(
            content.number_setting("loadingDelay", DEFAULT_LOADING_DELAY_MS)
        )
        self.frame_timeout_ms = int(
            content.number_setting("iframeTimeout", DEFAULT_FRAME_TIMEOUT_MS)
        )
        self.mobile_breakpoint_px = int(
            content.number_setting("mobileBreakpoint", DEFAULT_MOBILE_BREAKPOINT_PX)
        )
        self.resize_debounce_ms = resize_debounce_ms
        self.default_page = self._resolve_default_page(default_page)

        self._state = ShellState()
        self._resize_timer: Optional[TimerHandle] = None
        self._resize_token = 0
        self._pending_width: Optional[int] = None
        self._shut_down = False

        self._handlers: Dict[type, Callable[[Any], Any]] = {
            NavigationRequested: self._on_navigation_requested,
            HistoryChanged: self._on_history_changed,
            RetryRequested: self._on_retry_requested,
            TimerFired: self._on_timer_fired,
            ResourceLoaded: self._on_resource_loaded,
            ResourceFailed: self._on_resource_failed,
            ViewportChanged: self._on_viewport_changed,
            SidebarRequested: self._on_sidebar_requested,
            KeyPressed: self._on_key_pressed,
        }

        loader.load_finished.connect(self._on_loader_finished)
        loader.load_failed.connect(self._on_loader_failed)

        logger.info(
            f"Shell router ready with {len(self.routes)} route(s), "
            f"default page '{self.default_page}'"
        )

    def _resolve_default_page(self, fallback: Optional[str]) -> str:
        for candidate in (self.content.setting("defaultPage"), fallback):
            if isinstance(candidate, str) and candidate in self.routes:
                return candidate
        if not self.routes:
            return ""
        first = self.routes.page_ids[0]
        logger.warning(f"Default page not in route table, using '{first}'")
        return first

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> ShellState:
        """Snapshot of the current state."""
        return self._state.snapshot()

    @property
    def navigation_entries(self) -> Tuple[NavigationEntry, ...]:
        return self._entries

    @property
    def current_route(self) -> Optional[Route]:
        return self.routes.lookup(self._state.current_page_id)

    @property
    def sidebar_title(self) -> str:
        return self.content.text("content.sidebar.title", fallback=self.content.title or APP_NAME)

    def page_title(self, page_id: str) -> str:
        route = self.routes.lookup(page_id)
        if route is None:
            return self.sidebar_title
        return f"{route.title} - {self.sidebar_title}"

    def has_pending_timers(self) -> bool:
        resize_pending = self._resize_timer is not None and self._resize_timer.active
        return bool(self._state.pending_timers()) or resize_pending

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def start(self, initial_page: Optional[str] = None) -> bool:
        """
        Perform the initial navigation.

        The explicit ``initial_page`` wins, then the last visited page if it
        is still routable, then the default page.
        """
        page_id = None
        if initial_page:
            if initial_page in self.routes:
                page_id = initial_page
            else:
                logger.warning(f"Ignoring unknown initial page '{initial_page}'")

        if page_id is None:
            stored = self.preferences.get(
                LAST_VISITED_PAGE_KEY, namespace=SHELL_PREFERENCE_NAMESPACE
            )
            if isinstance(stored, str) and stored in self.routes:
                page_id = stored
            elif stored is not None:
                logger.info(f"Last visited page '{stored}' is no longer available")

        return self.navigate_to(page_id or self.default_page)

    def navigate_to(self, page_id: str) -> bool:
        return self.dispatch(NavigationRequested(page_id))

    def handle_history_change(self, page_id: str) -> bool:
        return self.dispatch(HistoryChanged(page_id))

    def retry_current_navigation(self) -> bool:
        return self.dispatch(RetryRequested())

    def set_viewport_width(self, width: int) -> None:
        self.dispatch(ViewportChanged(width, debounced=False))

    def notify_viewport_resized(self, width: int) -> None:
        self.dispatch(ViewportChanged(width, debounced=True))

    def toggle_sidebar(self) -> None:
        self.dispatch(SidebarRequested(SidebarAction.TOGGLE))

    def open_sidebar(self) -> None:
        self.dispatch(SidebarRequested(SidebarAction.OPEN))

    def close_sidebar(self) -> None:
        self.dispatch(SidebarRequested(SidebarAction.CLOSE))

    def handle_key(self, key: str, modifiers: Optional[str] = None) -> bool:
        return self.dispatch(KeyPressed(key, modifiers))

    def select_navigation_link(self, page_id: str) -> bool:
        """Navigate from a sidebar link; closes the sidebar on mobile layout."""
        result = self.navigate_to(page_id)
        if self._state.is_mobile_layout and self._state.sidebar_open:
            self.close_sidebar()
        return result

    def go_back(self) -> bool:
        page_id = self.history.back()
        if page_id is None:
            return False
        return self.handle_history_change(page_id)

    def go_forward(self) -> bool:
        page_id = self.history.forward()
        if page_id is None:
            return False
        return self.handle_history_change(page_id)

    def shutdown(self) -> None:
        """Cancel every outstanding timer; later events are ignored."""
        self._state.cancel_navigation_timers()
        cancel_timer(self._resize_timer)
        self._resize_timer = None
        self._shut_down = True
        logger.info("Shell router shut down")

    # ------------------------------------------------------------------
    # Dispatcher
    # ------------------------------------------------------------------

    def dispatch(self, event: Any) -> Any:
        """Apply ``event`` to the shell state and publish the new state."""
        if self._shut_down:
            logger.debug(f"Ignoring {type(event).__name__} after shutdown")
            return False

        handler = self._handlers.get(type(event))
        if handler is None:
            logger.warning(f"Unhandled shell event: {event!r}")
            return False

        result = handler(event)
        self.state_changed.emit(self._state.snapshot())
        return result

    def _on_loader_finished(self, token: int, inspection: Any) -> None:
        if not isinstance(inspection, FrameInspection):
            inspection = FrameInspection.OPAQUE
        self.dispatch(ResourceLoaded(token, inspection))

    def _on_loader_failed(self, token: int, reason: str) -> None:
        self.dispatch(ResourceFailed(token, reason))

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_navigation_requested(self, event: NavigationRequested) -> bool:
        return self._request_page(event.page_id, push_history=event.push_history)

    def _on_history_changed(self, event: HistoryChanged) -> bool:
        if event.page_id == self._state.current_page_id:
            return True
        return self._request_page(event.page_id, push_history=False)

    def _on_retry_requested(self, event: RetryRequested) -> bool:
        state = self._state
        retryable_phases = (ShellPhase.LOADED, ShellPhase.ERRORED)
        if state.current_page_id is None or state.phase not in retryable_phases:
            logger.debug("Nothing to retry")
            return False

        route = self.routes.lookup(state.current_page_id)
        if route is None:
            return False
        logger.info(f"Retrying navigation to '{state.current_page_id}'")
        self._begin_navigation(state.current_page_id, route, push_history=False)
        return True

    def _request_page(self, page_id: str, push_history: bool) -> bool:
        state = self._state
        route = self.routes.lookup(page_id)
        if route is None:
            error = UnknownRouteError(page_id, message=self._error_message("unknown", app=page_id))
            if not state.is_loading:
                state.phase = ShellPhase.ERRORED
            self._show_error(error)
            return False

        if page_id == state.current_page_id and state.error is None:
            logger.debug(f"Already on page '{page_id}'")
            return True

        self._begin_navigation(page_id, route, push_history)
        return True

    def _begin_navigation(self, page_id: str, route: Route, push_history: bool) -> None:
        state = self._state
        state.cancel_navigation_timers()
        state.navigation_token += 1
        token = state.navigation_token

        state.current_page_id = page_id
        state.is_loading = True
        state.phase = ShellPhase.NAVIGATING
        logger.info(f"Navigating to '{page_id}' ({route.path}) #{token}")

        self.preferences.set(LAST_VISITED_PAGE_KEY, page_id, namespace=SHELL_PREFERENCE_NAMESPACE)
        self._hide_error()

        state.loading_indicator_timer = self.scheduler.call_later(
            self.loading_delay_ms,
            lambda: self.dispatch(TimerFired(TimerKind.LOADING_INDICATOR, token)),
        )
        state.timeout_timer = self.scheduler.call_later(
            self.frame_timeout_ms,
            lambda: self.dispatch(TimerFired(TimerKind.LOAD_TIMEOUT, token)),
        )

        if push_history:
            self.history.push(page_id)

        self.loader.load(token, route.path)

    def _on_timer_fired(self, event: TimerFired) -> None:
        if event.kind is TimerKind.RESIZE_DEBOUNCE:
            self._on_resize_settled(event.token)
            return

        state = self._state
        if event.token != state.navigation_token:
            logger.debug(f"Dropping stale {event.kind.value} timer #{event.token}")
            return

        if event.kind is TimerKind.LOADING_INDICATOR:
            state.loading_indicator_timer = None
            if state.is_loading:
                self._set_indicator(True)
        elif event.kind is TimerKind.LOAD_TIMEOUT:
            state.timeout_timer = None
            if state.is_loading:
                page_id = state.current_page_id or ""
                logger.warning(f"Loading '{page_id}' timed out after {self.frame_timeout_ms} ms")
                self._fail_navigation(
                    LoadTimeoutError(
                        page_id, self.frame_timeout_ms, message=self._error_message("timeout")
                    )
                )

    def _on_resource_loaded(self, event: ResourceLoaded) -> None:
        state = self._state
        if not self._is_current_load(event.token):
            return

        page_id = state.current_page_id or ""
        if event.inspection is FrameInspection.NOT_FOUND:
            logger.warning(f"Content for '{page_id}' is an error page")
            self._fail_navigation(
                ContentNotFoundError(page_id, message=self._error_message("notFound"))
            )
            return

        self._settle_loading()
        state.phase = ShellPhase.LOADED
        self._hide_error()
        logger.info(f"Loaded '{page_id}' #{event.token}")
        self.active_page_changed.emit(page_id)
        self.title_changed.emit(self.page_title(page_id))

    def _on_resource_failed(self, event: ResourceFailed) -> None:
        if not self._is_current_load(event.token):
            return

        page_id = self._state.current_page_id or ""
        logger.warning(f"Loading '{page_id}' failed: {event.reason}")
        self._fail_navigation(
            LoadFailedError(page_id, reason=event.reason, message=self._error_message("loadFailed"))
        )

    def _on_viewport_changed(self, event: ViewportChanged) -> None:
        if event.debounced:
            cancel_timer(self._resize_timer)
            self._resize_token += 1
            token = self._resize_token
            self._pending_width = event.width
            self._resize_timer = self.scheduler.call_later(
                self.resize_debounce_ms,
                lambda: self.dispatch(TimerFired(TimerKind.RESIZE_DEBOUNCE, token)),
            )
            return

        self._apply_viewport_width(event.width)

    def _on_resize_settled(self, token: int) -> None:
        if token != self._resize_token or self._pending_width is None:
            return
        self._resize_timer = None
        width, self._pending_width = self._pending_width, None
        self._apply_viewport_width(width)

    def _apply_viewport_width(self, width: int) -> None:
        state = self._state
        was_mobile = state.is_mobile_layout
        state.is_mobile_layout = width <= self.mobile_breakpoint_px
        if was_mobile == state.is_mobile_layout:
            return

        layout = "mobile" if state.is_mobile_layout else "desktop"
        logger.debug(f"Layout is now {layout} ({width}px)")
        self.layout_changed.emit(state.is_mobile_layout)
        if was_mobile and state.sidebar_open:
            self._set_sidebar(False)

    def _on_sidebar_requested(self, event: SidebarRequested) -> None:
        if event.action is SidebarAction.TOGGLE:
            self._set_sidebar(not self._state.sidebar_open)
        else:
            self._set_sidebar(event.action is SidebarAction.OPEN)

    def _on_key_pressed(self, event: KeyPressed) -> bool:
        state = self._state
        if event.key == "Escape" and not event.modifiers:
            if state.is_mobile_layout and state.sidebar_open:
                self._set_sidebar(False)
                return True
            return False

        if event.modifiers == "Alt" and event.key in ("Left", "Right"):
            page_id = self.history.back() if event.key == "Left" else self.history.forward()
            if page_id is not None:
                self._on_history_changed(HistoryChanged(page_id))
                return True
        return False

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _is_current_load(self, token: int) -> bool:
        state = self._state
        if token != state.navigation_token:
            logger.debug(f"Dropping load signal for superseded navigation #{token}")
            return False
        if not state.is_loading:
            logger.debug(f"Dropping late load signal for navigation #{token}")
            return False
        return True

    def _settle_loading(self) -> None:
        state = self._state
        state.cancel_navigation_timers()
        state.is_loading = False
        self._set_indicator(False)

    def _fail_navigation(self, error: HelloShellError) -> None:
        self._settle_loading()
        self._state.phase = ShellPhase.ERRORED
        self._show_error(error)

    def _set_indicator(self, visible: bool) -> None:
        if self._state.loading_indicator_visible == visible:
            return
        self._state.loading_indicator_visible = visible
        self.loading_indicator_changed.emit(visible)

    def _set_sidebar(self, is_open: bool) -> None:
        if self._state.sidebar_open == is_open:
            if is_open:
                self.focus_first_link_requested.emit()
            return
        self._state.sidebar_open = is_open
        self.sidebar_changed.emit(is_open)
        if is_open:
            self.focus_first_link_requested.emit()

    def _show_error(self, error: HelloShellError) -> None:
        info = ErrorHandler.handle_error(error, {"page": self._state.current_page_id})
        self._state.error = error
        self.error_shown.emit(error, ErrorHandler.is_retryable(info))

    def _hide_error(self) -> None:
        if self._state.error is None:
            return
        self._state.error = None
        self.error_hidden.emit()

    def _error_message(self, name: str, **params: Any) -> Optional[str]:
        template = self.content.get(f"content.error.messages.{name}")
        if not isinstance(template, str):
            return None
        return format_template(template, params) if params else template
