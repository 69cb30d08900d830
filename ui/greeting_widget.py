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
Multi-language greeting page.

Renders the greeting cycler: the current greeting, a language selector, an
interval slider and a status line. User input goes to the cycler; the
widgets only reflect what the cycler reports.
"""

import logging
from typing import Optional

from core.content.store import ContentDocument
from core.greeting.cycler import GreetingCycler
from ui.constants import DEFAULT_SPACING, GREETING_FONT_SIZE, HEADING_FONT_SIZE, PAGE_MARGINS
from ui.qt_imports import QComboBox, QFont, QHBoxLayout, QLabel, QSlider, Qt, QVBoxLayout, QWidget

logger = logging.getLogger("helloshell.ui.greeting_widget")


class GreetingWidget(QWidget):
    """Greeting page driven by a ``GreetingCycler``."""

    def __init__(
        self,
        cycler: GreetingCycler,
        content: Optional[ContentDocument] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.cycler = cycler
        self.content = content or cycler.content
        self._slider_steps = max(
            1, round((cycler.max_interval - cycler.min_interval) / cycler.interval_step)
        )

        self.setup_ui()
        self._connect_cycler()

    @property
    def window_title(self) -> str:
        return self.content.title or "Multi-Language Hello"

    def setup_ui(self):
        self.setObjectName("greeting_page")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(*PAGE_MARGINS)
        layout.setSpacing(DEFAULT_SPACING)
        layout.addStretch()

        self.heading_label = QLabel(self.content.text("content.heading", fallback=""))
        heading_font = QFont()
        heading_font.setPointSize(HEADING_FONT_SIZE)
        self.heading_label.setFont(heading_font)
        self.heading_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.heading_label)

        self.greeting_label = QLabel()
        self.greeting_label.setObjectName("greeting")
        greeting_font = QFont()
        greeting_font.setPointSize(GREETING_FONT_SIZE)
        greeting_font.setBold(True)
        self.greeting_label.setFont(greeting_font)
        self.greeting_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.greeting_label)

        selector_row = QHBoxLayout()
        self.language_label = QLabel(
            self.content.text("content.labels.languageSelect", fallback="Language")
        )
        selector_row.addWidget(self.language_label)
        self.language_combo = QComboBox()
        self.language_combo.setObjectName("language_select")
        for entry in self.cycler.languages:
            self.language_combo.addItem(entry.display_name, entry.code)
        self.language_combo.activated.connect(self._on_language_activated)
        self.language_label.setBuddy(self.language_combo)
        selector_row.addWidget(self.language_combo, stretch=1)
        layout.addLayout(selector_row)

        speed_row = QHBoxLayout()
        self.speed_label = QLabel(
            self.content.text("content.labels.speedSlider", fallback="Cycle speed")
        )
        speed_row.addWidget(self.speed_label)
        self.speed_slider = QSlider(Qt.Orientation.Horizontal)
        self.speed_slider.setObjectName("speed_slider")
        self.speed_slider.setRange(0, self._slider_steps)
        self.speed_slider.setSingleStep(1)
        self.speed_slider.setPageStep(1)
        self.speed_slider.valueChanged.connect(self._on_slider_moved)
        self.speed_label.setBuddy(self.speed_slider)
        speed_row.addWidget(self.speed_slider, stretch=1)
        self.speed_value_label = QLabel()
        speed_row.addWidget(self.speed_value_label)
        layout.addLayout(speed_row)

        self.status_label = QLabel()
        self.status_label.setObjectName("status")
        self.status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.status_label)

        layout.addStretch()

    def _connect_cycler(self):
        self.cycler.greeting_changed.connect(self._on_greeting_changed)
        self.cycler.language_changed.connect(self._on_language_changed)
        self.cycler.interval_changed.connect(self._on_interval_changed)
        self.cycler.status_changed.connect(self._on_status_changed)

    def initialize(self):
        """Restore persisted choices and start cycling."""
        self.cycler.initialize()

    def shutdown(self):
        self.cycler.shutdown()

    def seconds_for_position(self, position: int) -> float:
        seconds = self.cycler.min_interval + position * self.cycler.interval_step
        return self.cycler.clamp_interval(seconds)

    def position_for_seconds(self, seconds: float) -> int:
        position = round((seconds - self.cycler.min_interval) / self.cycler.interval_step)
        return min(max(position, 0), self._slider_steps)

    def _on_language_activated(self, index: int):
        code = self.language_combo.itemData(index)
        logger.debug(f"Language selected: {code}")
        self.cycler.select_language(code)

    def _on_slider_moved(self, position: int):
        self.cycler.set_interval_seconds(self.seconds_for_position(position))

    def _on_greeting_changed(self, text: str, rtl: bool):
        self.greeting_label.setText(text)
        direction = Qt.LayoutDirection.RightToLeft if rtl else Qt.LayoutDirection.LeftToRight
        self.greeting_label.setLayoutDirection(direction)
        self.greeting_label.setProperty("rtl", rtl)

    def _on_language_changed(self, code: str):
        index = self.language_combo.findData(code)
        if index >= 0:
            self.language_combo.setCurrentIndex(index)

    def _on_interval_changed(self, seconds: float):
        unit = self.content.text("content.labels.speedUnit", fallback="s")
        self.speed_value_label.setText(f"{seconds:.1f}{unit}")
        self.speed_slider.blockSignals(True)
        self.speed_slider.setValue(self.position_for_seconds(seconds))
        self.speed_slider.blockSignals(False)

    def _on_status_changed(self, cycling: bool, text: str):
        self.status_label.setText(text)
        self.status_label.setProperty("cycling", cycling)
