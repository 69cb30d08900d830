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
"""Simple greeting page."""

import logging
from typing import Optional

from core.content.store import ContentDocument
from ui.constants import (
    DEFAULT_SPACING,
    EMOJI_FONT_SIZE,
    HEADING_FONT_SIZE,
    PAGE_MARGINS,
    WAVE_DURATION_MS,
    WAVE_OFFSET_PX,
)
from ui.qt_imports import (
    QEasingCurve,
    QFont,
    QLabel,
    QPushButton,
    Qt,
    QVariantAnimation,
    QVBoxLayout,
    QWidget,
    Signal,
)

logger = logging.getLogger("helloshell.ui.hello_widget")


class HelloWidget(QWidget):
    """Shows the greeting from the hello content document."""

    waved = Signal()

    def __init__(self, content: ContentDocument, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.content = content
        self.setup_ui()

        self._wave = QVariantAnimation(self)
        self._wave.setDuration(int(content.number_setting("waveDuration", WAVE_DURATION_MS)))
        self._wave.setStartValue(0)
        self._wave.setKeyValueAt(0.25, WAVE_OFFSET_PX)
        self._wave.setKeyValueAt(0.75, -WAVE_OFFSET_PX)
        self._wave.setEndValue(0)
        self._wave.setEasingCurve(QEasingCurve.Type.InOutSine)
        self._wave.valueChanged.connect(self._apply_wave_offset)

    @property
    def window_title(self) -> str:
        return self.content.title or "Hello World"

    def setup_ui(self):
        self.setObjectName("hello_page")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(*PAGE_MARGINS)
        layout.setSpacing(DEFAULT_SPACING)
        layout.addStretch()

        self.emoji_button = QPushButton(self.content.text("content.emoji", fallback="👋"))
        self.emoji_button.setObjectName("emoji")
        self.emoji_button.setFlat(True)
        emoji_font = QFont()
        emoji_font.setPointSize(EMOJI_FONT_SIZE)
        self.emoji_button.setFont(emoji_font)
        self.emoji_button.clicked.connect(self.wave)
        layout.addWidget(self.emoji_button, alignment=Qt.AlignmentFlag.AlignCenter)

        self.heading_label = QLabel(self.content.text("content.heading", fallback="Hello World!"))
        self.heading_label.setObjectName("heading")
        heading_font = QFont()
        heading_font.setPointSize(HEADING_FONT_SIZE)
        self.heading_label.setFont(heading_font)
        self.heading_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.heading_label)

        self.description_label = QLabel(self.content.text("content.description", fallback=""))
        self.description_label.setObjectName("description")
        self.description_label.setWordWrap(True)
        self.description_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.description_label)

        layout.addStretch()

    def initialize(self):
        pass

    def wave(self):
        """Replay the wave animation from the start."""
        logger.debug("Wave animation triggered")
        self._wave.stop()
        self._wave.start()
        self.waved.emit()

    def _apply_wave_offset(self, offset):
        offset = int(offset)
        self.emoji_button.setStyleSheet(
            f"padding-left: {max(offset, 0)}px; padding-right: {max(-offset, 0)}px;"
        )

    def shutdown(self):
        self._wave.stop()
