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
"""Top-level window hosting a single standalone page."""

import logging
from typing import Optional

from ui.constants import DEFAULT_WINDOW_HEIGHT, DEFAULT_WINDOW_WIDTH
from ui.qt_imports import QCloseEvent, QMainWindow, QWidget

logger = logging.getLogger("helloshell.ui.page_window")


class PageWindow(QMainWindow):
    """
    Hosts the hello page, the languages page or a fallback view.

    The page widget must provide ``window_title`` and ``shutdown()``; the
    latter runs before the window is discarded.
    """

    def __init__(self, page: QWidget, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.page = page
        self.setCentralWidget(page)
        self.setWindowTitle(page.window_title)
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

    def closeEvent(self, event: QCloseEvent):
        self.page.shutdown()
        event.accept()
        logger.info(f"Closed page window: {self.windowTitle()}")
