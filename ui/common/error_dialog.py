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
Error dialog for uncaught exceptions.

Shows the user-facing message produced by ``ErrorHandler`` and keeps the
traceback one click away for bug reports.
"""

import logging
from typing import Any, Dict, Optional

from ui.constants import (
    COPY_FEEDBACK_RESET_MS,
    ERROR_DIALOG_DETAILS_MAX_HEIGHT,
    ERROR_DIALOG_MIN_WIDTH,
)
from ui.qt_imports import (
    QApplication,
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QTextEdit,
    QTimer,
    QVBoxLayout,
    QWidget,
)

logger = logging.getLogger("helloshell.ui.error_dialog")


class ErrorDialog(QDialog):
    """Modal error message with optional collapsible details."""

    def __init__(
        self,
        title: str,
        message: str,
        details: Optional[str] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setMinimumWidth(ERROR_DIALOG_MIN_WIDTH)
        self.setModal(True)

        self.report = f"{title}\n\n{message}"
        if details:
            self.report += f"\n\nDetails:\n{details}"

        layout = QVBoxLayout(self)
        self.message_label = QLabel(message)
        self.message_label.setObjectName("error_message")
        self.message_label.setWordWrap(True)
        layout.addWidget(self.message_label)

        buttons = QHBoxLayout()
        buttons.addStretch()
        if details:
            self._add_details(layout, buttons, details)

        self.ok_button = QPushButton("OK")
        self.ok_button.setDefault(True)
        self.ok_button.clicked.connect(self.accept)
        buttons.addWidget(self.ok_button)
        layout.addLayout(buttons)

    @classmethod
    def from_error_info(
        cls, title: str, error_info: Dict[str, Any], parent: Optional[QWidget] = None
    ) -> "ErrorDialog":
        """Build a dialog from an ``ErrorHandler.handle_error`` result."""
        return cls(
            title,
            error_info.get("user_message", ""),
            error_info.get("technical_details"),
            parent,
        )

    def _add_details(self, layout: QVBoxLayout, buttons: QHBoxLayout, details: str):
        self.details_button = QPushButton("Show Details")
        self.details_button.clicked.connect(self._toggle_details)
        layout.addWidget(self.details_button)

        self.details_text = QTextEdit()
        self.details_text.setObjectName("error_details")
        self.details_text.setReadOnly(True)
        self.details_text.setPlainText(details)
        self.details_text.setMaximumHeight(ERROR_DIALOG_DETAILS_MAX_HEIGHT)
        self.details_text.hide()
        layout.addWidget(self.details_text)

        self.copy_button = QPushButton("Copy")
        self.copy_button.clicked.connect(self._copy_report)
        buttons.addWidget(self.copy_button)

    def _toggle_details(self):
        expand = self.details_text.isHidden()
        self.details_text.setVisible(expand)
        self.details_button.setText("Hide Details" if expand else "Show Details")

    def _copy_report(self):
        QApplication.clipboard().setText(self.report)
        self.copy_button.setText("Copied")
        QTimer.singleShot(COPY_FEEDBACK_RESET_MS, self, lambda: self.copy_button.setText("Copy"))
        logger.debug("Error report copied to clipboard")


def show_error_dialog(
    title: str,
    message: str,
    details: Optional[str] = None,
    parent: Optional[QWidget] = None,
) -> int:
    """Show a modal error dialog and return its result code."""
    return ErrorDialog(title, message, details, parent).exec()
