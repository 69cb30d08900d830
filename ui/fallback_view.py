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
"""Minimal view shown when a page cannot initialize."""

from typing import Optional

from ui.constants import ERROR_ICON_FONT_SIZE, PAGE_MARGINS
from ui.qt_imports import QFont, QLabel, Qt, QVBoxLayout, QWidget
from utils.error_handler import ErrorHandler, HelloShellError


class FallbackView(QWidget):
    """Static error message without retry."""

    def __init__(self, error: HelloShellError, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.error = error
        self.error_info = ErrorHandler.handle_error(error)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(*PAGE_MARGINS)
        layout.addStretch()

        icon = QLabel("⚠️")
        font = QFont()
        font.setPointSize(ERROR_ICON_FONT_SIZE)
        icon.setFont(font)
        icon.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(icon)

        self.message_label = QLabel(self.error_info["user_message"])
        self.message_label.setObjectName("fallback_message")
        self.message_label.setWordWrap(True)
        self.message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.message_label)

        layout.addStretch()

    @property
    def window_title(self) -> str:
        return self.error.category.get_display_name() + " Error"

    def initialize(self):
        pass

    def shutdown(self):
        pass
