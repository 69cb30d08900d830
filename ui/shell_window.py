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
Main window of the application shell.

Hosts the sidebar, the content frame, the loading indicator and the error
panel. The window only renders what the shell router reports and forwards
user input back to it.
"""

import logging
from typing import List, Optional, Tuple

from core.shell.loader import FileFrameLoader
from core.shell.router import ShellRouter
from ui.constants import (
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    ERROR_ICON_FONT_SIZE,
    SIDEBAR_TOGGLE_SIZE,
    WINDOW_MIN_HEIGHT,
    WINDOW_MIN_WIDTH,
    ZERO_MARGINS,
)
from ui.page_loader import PageFrameLoader
from ui.qt_imports import (
    QCloseEvent,
    QFont,
    QHBoxLayout,
    QKeyEvent,
    QKeySequence,
    QLabel,
    QMainWindow,
    QPushButton,
    QResizeEvent,
    QSettings,
    QShortcut,
    QShowEvent,
    QStackedWidget,
    Qt,
    QTextBrowser,
    QUrl,
    QVBoxLayout,
    QWidget,
    Signal,
)
from ui.sidebar import Sidebar

logger = logging.getLogger("helloshell.ui.shell_window")


class ContentFrame(QStackedWidget):
    """
    Isolated area showing the current page.

    Holds either a live page widget or, for routes without one, a browser
    rendering the route's HTML document. Replaced page widgets are deleted.
    """

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setObjectName("content_frame")
        self.browser = QTextBrowser()
        self.browser.setOpenLinks(False)
        self.addWidget(self.browser)
        self.page: Optional[QWidget] = None
        self.current_path: Optional[str] = None

    def show_document(self, html: str, path: str):
        """Render ``html``; relative resources resolve against ``path``."""
        self._discard_page()
        self.browser.document().setBaseUrl(QUrl.fromLocalFile(path))
        self.browser.setHtml(html)
        self.current_path = path
        self.setCurrentWidget(self.browser)

    def show_page(self, page: QWidget):
        self._discard_page()
        self.page = page
        self.current_path = None
        self.addWidget(page)
        self.setCurrentWidget(page)

    def _discard_page(self):
        if self.page is None:
            return
        self.removeWidget(self.page)
        self.page.deleteLater()
        self.page = None


class ErrorPanel(QWidget):
    """Error message with an optional retry button."""

    retry_requested = Signal()

    def __init__(self, icon: str, title: str, retry_text: str, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setObjectName("error_panel")

        layout = QVBoxLayout(self)
        layout.addStretch()

        self.icon_label = QLabel(icon)
        font = QFont()
        font.setPointSize(ERROR_ICON_FONT_SIZE)
        self.icon_label.setFont(font)
        self.icon_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.icon_label)

        self.title_label = QLabel(title)
        self.title_label.setObjectName("error_title")
        self.title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.title_label)

        self.message_label = QLabel()
        self.message_label.setObjectName("error_message")
        self.message_label.setWordWrap(True)
        self.message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.message_label)

        self.retry_button = QPushButton(retry_text)
        self.retry_button.setObjectName("retry_button")
        self.retry_button.clicked.connect(self.retry_requested.emit)
        layout.addWidget(self.retry_button, alignment=Qt.AlignmentFlag.AlignCenter)

        layout.addStretch()

    def show_error(self, message: str, retry_possible: bool):
        self.message_label.setText(message)
        self.retry_button.setVisible(retry_possible)


class ShellWindow(QMainWindow):
    """
    Application shell window with sidebar navigation and content frame.

    Persists its geometry with QSettings and shuts the router down when
    closed so no timer outlives the window.
    """

    def __init__(
        self,
        router: ShellRouter,
        loader: Optional[FileFrameLoader] = None,
        settings: Optional[QSettings] = None,
        default_size: Tuple[int, int] = (DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT),
        parent: Optional[QWidget] = None,
    ):
        """
        Initialize the shell window.

        Args:
            router: Shell router driving the window
            loader: File loader publishing documents (and page widgets) for the
                content frame
            settings: Window state storage (defaults to the app QSettings)
            default_size: Window size used when no geometry was saved
            parent: Parent widget
        """
        super().__init__(parent)

        self.router = router
        self.content = router.content
        self.settings = settings or QSettings("HelloShell", "HelloShell")
        self.default_size = default_size
        self._shortcuts: List[QShortcut] = []
        self._viewport_initialized = False

        self.setup_ui()
        self._connect_router()
        self.loader = loader
        if loader is not None:
            loader.document_ready.connect(self.frame.show_document)
            if isinstance(loader, PageFrameLoader):
                loader.page_ready.connect(self.frame.show_page)

        self._setup_keyboard_shortcuts()
        self.restore_window_state()

        logger.info("Shell window initialized")

    def setup_ui(self):
        """Set up the shell layout."""
        self.setWindowTitle(self.router.sidebar_title)
        self.setMinimumSize(WINDOW_MIN_WIDTH, WINDOW_MIN_HEIGHT)

        central_widget = QWidget()
        central_widget.setObjectName("app_shell")
        self.setCentralWidget(central_widget)

        main_layout = QHBoxLayout(central_widget)
        main_layout.setContentsMargins(*ZERO_MARGINS)
        main_layout.setSpacing(0)

        self.sidebar = Sidebar(
            self.router.navigation_entries,
            title=self.router.sidebar_title,
            version=self.content.text("content.sidebar.version", fallback=""),
        )
        self.sidebar.page_changed.connect(self.router.select_navigation_link)
        main_layout.addWidget(self.sidebar)

        content_area = QWidget()
        content_area.setObjectName("content_area")
        content_layout = QVBoxLayout(content_area)
        content_layout.setContentsMargins(*ZERO_MARGINS)
        content_layout.setSpacing(0)

        self.toggle_button = QPushButton("☰")
        self.toggle_button.setObjectName("sidebar_toggle")
        self.toggle_button.setFixedSize(SIDEBAR_TOGGLE_SIZE, SIDEBAR_TOGGLE_SIZE)
        self.toggle_button.setAccessibleName(
            self.content.text("content.sidebar.toggleAriaLabel", fallback="Toggle navigation")
        )
        self.toggle_button.clicked.connect(self.router.toggle_sidebar)
        self.toggle_button.hide()
        content_layout.addWidget(self.toggle_button)

        loading_text = self.content.text("content.loading.text", fallback="Loading...")
        self.loading_label = QLabel(loading_text)
        self.loading_label.setObjectName("loading_indicator")
        self.loading_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.loading_label.hide()
        content_layout.addWidget(self.loading_label)

        self.stack = QStackedWidget()
        self.frame = ContentFrame()
        self.error_panel = ErrorPanel(
            icon=self.content.text("content.error.icon", fallback="⚠️"),
            title=self.content.text("content.error.title", fallback="Something went wrong"),
            retry_text=self.content.text("content.error.retryButton", fallback="Retry"),
        )
        self.error_panel.retry_requested.connect(self.router.retry_current_navigation)
        self.stack.addWidget(self.frame)
        self.stack.addWidget(self.error_panel)
        content_layout.addWidget(self.stack, stretch=1)

        main_layout.addWidget(content_area, stretch=1)

    def _connect_router(self):
        router = self.router
        router.loading_indicator_changed.connect(self.loading_label.setVisible)
        router.error_shown.connect(self._on_error_shown)
        router.error_hidden.connect(self._on_error_hidden)
        router.active_page_changed.connect(self.sidebar.set_active_page)
        router.title_changed.connect(self.setWindowTitle)
        router.sidebar_changed.connect(self._update_sidebar_visibility)
        router.layout_changed.connect(self._update_sidebar_visibility)
        router.focus_first_link_requested.connect(self.sidebar.focus_first_link)

    def _setup_keyboard_shortcuts(self):
        """Bind history, retry and page shortcuts."""
        self._bind_shortcut("Alt+Left", self.router.go_back)
        self._bind_shortcut("Alt+Right", self.router.go_forward)
        self._bind_shortcut("F5", self.router.retry_current_navigation)
        self._bind_shortcut("Ctrl+Q", self.close)

        for index, entry in enumerate(self.router.navigation_entries[:9], start=1):
            self._bind_shortcut(
                f"Ctrl+{index}",
                lambda page_id=entry.id: self.router.select_navigation_link(page_id),
            )

    def _bind_shortcut(self, sequence: str, callback):
        """Create and retain a QShortcut binding."""
        shortcut = QShortcut(QKeySequence(sequence), self)
        shortcut.activated.connect(callback)
        self._shortcuts.append(shortcut)
        return shortcut

    def _on_error_shown(self, error, retry_possible: bool):
        self.error_panel.show_error(str(error), retry_possible)
        self.stack.setCurrentWidget(self.error_panel)

    def _on_error_hidden(self):
        self.stack.setCurrentWidget(self.frame)

    def _update_sidebar_visibility(self, *_args):
        state = self.router.state
        self.toggle_button.setVisible(state.is_mobile_layout)
        self.sidebar.setVisible(not state.is_mobile_layout or state.sidebar_open)

    def showEvent(self, event: QShowEvent):
        super().showEvent(event)
        if not self._viewport_initialized:
            self._viewport_initialized = True
            self.router.set_viewport_width(self.width())

    def resizeEvent(self, event: QResizeEvent):
        super().resizeEvent(event)
        self.router.notify_viewport_resized(event.size().width())

    def keyPressEvent(self, event: QKeyEvent):
        if event.key() == Qt.Key.Key_Escape and self.router.handle_key("Escape"):
            event.accept()
            return
        super().keyPressEvent(event)

    def save_window_state(self):
        """Save window geometry to settings."""
        try:
            self.settings.setValue("window/geometry", self.saveGeometry())
            self.settings.setValue("window/maximized", self.isMaximized())
            logger.debug("Window state saved")
        except Exception as e:
            logger.error(f"Error saving window state: {e}")

    def restore_window_state(self):
        """Restore window geometry from settings."""
        try:
            geometry = self.settings.value("window/geometry")
            if geometry:
                self.restoreGeometry(geometry)
            else:
                self.resize(*self.default_size)
            logger.debug("Window state restored")
        except Exception as e:
            logger.error(f"Error restoring window state: {e}")
            self.resize(*self.default_size)

    def closeEvent(self, event: QCloseEvent):
        """Save window state and stop the router's timers."""
        self.save_window_state()
        self.router.shutdown()
        if isinstance(self.loader, PageFrameLoader):
            self.loader.release_page()
        event.accept()
        logger.info("Shell window closed")
