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
Sidebar navigation for the application shell.

Provides one navigation button per route and reflects the page the router
reports as loaded.
"""

import logging
from typing import Dict, Iterable, Optional

from core.content.models import NavigationEntry
from ui.constants import SIDEBAR_BUTTON_MIN_HEIGHT, SIDEBAR_WIDTH, ZERO_MARGINS
from ui.qt_imports import QLabel, QPushButton, QSizePolicy, QVBoxLayout, QWidget, Signal

logger = logging.getLogger("helloshell.ui.sidebar")


class Sidebar(QWidget):
    """
    Sidebar navigation widget with buttons for the shell pages.

    Emits page_changed signal when a navigation button is clicked. The
    active button only changes through ``set_active_page`` so the sidebar
    follows completed loads rather than clicks.
    """

    # Signal emitted when a navigation button is clicked
    page_changed = Signal(str)

    def __init__(
        self,
        entries: Iterable[NavigationEntry],
        title: str = "",
        version: str = "",
        parent: Optional[QWidget] = None,
    ):
        """
        Initialize sidebar.

        Args:
            entries: Navigation entries in display order
            title: Sidebar heading
            version: Version caption shown below the buttons
            parent: Parent widget
        """
        super().__init__(parent)

        self.entries = tuple(entries)

        # Dictionary to store navigation buttons
        self.nav_buttons: Dict[str, QPushButton] = {}

        # Current active page
        self.current_page: Optional[str] = None

        self.setup_ui(title, version)

        logger.debug("Sidebar initialized")

    def setup_ui(self, title: str, version: str):
        """Set up the sidebar UI."""
        self.setFixedWidth(SIDEBAR_WIDTH)
        self.setObjectName("sidebar")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(*ZERO_MARGINS)
        layout.setSpacing(0)

        self.title_label = QLabel(title)
        self.title_label.setObjectName("sidebar_title")
        layout.addWidget(self.title_label)
        layout.addSpacing(12)

        for entry in self.entries:
            button = self._create_nav_button(entry)
            layout.addWidget(button)
            self.nav_buttons[entry.id] = button

        logger.debug(f"Created {len(self.nav_buttons)} navigation buttons")

        # Add stretch to push buttons to top
        layout.addStretch()

        self.version_label = QLabel(version)
        self.version_label.setObjectName("sidebar_version")
        self.version_label.setVisible(bool(version))
        layout.addWidget(self.version_label)

    def _create_nav_button(self, entry: NavigationEntry) -> QPushButton:
        """
        Create a single navigation button.

        Args:
            entry: Navigation entry the button opens

        Returns:
            Navigation button
        """
        button = QPushButton()
        button.setObjectName(f"nav_button_{entry.id}")
        button.setCheckable(True)
        button.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        button.setMinimumHeight(SIDEBAR_BUTTON_MIN_HEIGHT)

        label = entry.label or entry.title
        button.setText(f"{entry.icon}  {label}" if entry.icon else label)
        button.setToolTip(entry.title)
        button.setAccessibleName(label)

        button.clicked.connect(lambda: self._on_button_clicked(entry.id))
        return button

    def _on_button_clicked(self, page_id: str):
        """
        Handle navigation button click.

        Args:
            page_id: Page to navigate to
        """
        # Checkable buttons toggle on click; keep them in sync with the loaded page
        self._sync_checked_state()
        self.page_changed.emit(page_id)
        logger.debug(f"Navigation button clicked: {page_id}")

    def set_active_page(self, page_id: str):
        """
        Set the active page and update button states.

        Args:
            page_id: Page reported as loaded
        """
        if page_id not in self.nav_buttons:
            logger.warning(f"Page '{page_id}' not found in navigation buttons")
            return

        self.current_page = page_id
        self._sync_checked_state()
        logger.debug(f"Active page set to: {page_id}")

    def _sync_checked_state(self):
        for name, button in self.nav_buttons.items():
            active = name == self.current_page
            button.setChecked(active)
            button.setProperty("active", active)

            # Force style update
            button.style().unpolish(button)
            button.style().polish(button)

    def focus_first_link(self):
        """Move keyboard focus to the first navigation button."""
        if not self.entries:
            return
        self.nav_buttons[self.entries[0].id].setFocus()
