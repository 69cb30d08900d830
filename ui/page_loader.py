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
Content frame loader hosting the native page widgets.

Routes with a registered page factory are loaded as live widgets built from
the page's content document; any other route falls back to rendering its
HTML document. The loader owns the page it created and shuts it down as
soon as the shell navigates elsewhere.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Union

from config.constants import PAGE_HELLO, PAGE_LANGUAGES
from core.content.models import RouteTable
from core.content.store import ContentDocument, ContentStore
from core.greeting.cycler import GreetingCycler
from core.preferences.store import PreferenceStore
from core.shell.events import FrameInspection
from core.shell.loader import FileFrameLoader
from core.timers import TimerScheduler
from ui.greeting_widget import GreetingWidget
from ui.hello_widget import HelloWidget
from ui.qt_imports import QObject, QWidget, Signal
from utils.error_handler import InitializationError

logger = logging.getLogger("helloshell.ui.page_loader")

# Builds a page widget from its content document. The widget provides
# ``initialize()`` and ``shutdown()``.
PageFactory = Callable[[ContentDocument], QWidget]


def default_page_factories(
    scheduler: TimerScheduler, preferences: Optional[PreferenceStore] = None
) -> Dict[str, PageFactory]:
    """Return the factories for the hello and languages pages."""

    def build_languages(document: ContentDocument) -> QWidget:
        cycler = GreetingCycler(document, scheduler, preferences)
        widget = GreetingWidget(cycler)
        cycler.setParent(widget)
        return widget

    return {PAGE_HELLO: HelloWidget, PAGE_LANGUAGES: build_languages}


class PageFrameLoader(FileFrameLoader):
    """Loads shell routes as page widgets, or as HTML when no factory exists."""

    # Page widget to place in the content frame
    page_ready = Signal(object)

    def __init__(
        self,
        store: ContentStore,
        routes: RouteTable,
        factories: Mapping[str, PageFactory],
        base_dir: Union[str, Path],
        site_root: Optional[Union[str, Path]] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(base_dir, site_root, parent)
        self.store = store
        self.factories = dict(factories)
        self._page_ids = {route.path: page_id for page_id, route in routes.items()}
        self._latest_token: Optional[int] = None
        self.current_page: Optional[QWidget] = None

    def load(self, token: int, path: str) -> None:
        self._latest_token = token
        self.release_page()
        super().load(token, path)

    def release_page(self) -> None:
        """Shut down the page created by the last load."""
        if self.current_page is None:
            return
        logger.debug(f"Releasing page {type(self.current_page).__name__}")
        self.current_page.shutdown()
        self.current_page = None

    def _load_now(self, token: int, path: str) -> None:
        if token != self._latest_token:
            logger.debug(f"Skipping superseded frame load #{token}")
            return

        page_id = self._page_ids.get(path)
        factory = self.factories.get(page_id) if page_id else None
        if factory is None:
            super()._load_now(token, path)
            return

        try:
            page = factory(self.store.load_content(page_id))
        except InitializationError as e:
            logger.warning(f"Frame load #{token} failed for page '{page_id}': {e}")
            self.load_failed.emit(token, str(e))
            return

        self.current_page = page
        self.page_ready.emit(page)
        page.initialize()
        logger.debug(f"Frame load #{token} finished: page '{page_id}'")
        self.load_finished.emit(token, FrameInspection.OK)
