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
Content frame loaders.

A loader receives ``load(token, path)`` from the shell router and answers
with exactly one of ``load_finished(token, inspection)`` or
``load_failed(token, reason)`` on a later event loop turn. Inspection of the
loaded document is advisory: when content cannot be inspected the loader
reports ``FrameInspection.OPAQUE`` and the router treats it as success.
"""

import logging
from html.parser import HTMLParser
from pathlib import Path
from typing import List, Optional, Union

from PySide6.QtCore import QObject, QTimer, Signal

from config.constants import NOT_FOUND_BODY_MARKER, NOT_FOUND_TITLES
from core.shell.events import FrameInspection

logger = logging.getLogger("helloshell.shell.loader")


class FrameLoader(QObject):
    """Base class for content frame loaders."""

    # (token, FrameInspection)
    load_finished = Signal(int, object)
    # (token, reason)
    load_failed = Signal(int, str)

    def load(self, token: int, path: str) -> None:
        """Start loading ``path``; the outcome is reported through signals."""
        raise NotImplementedError


class _DocumentInspector(HTMLParser):
    """Collects the title and visible body text of an HTML document."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.title_parts: List[str] = []
        self.body_parts: List[str] = []
        self._in_title = False
        self._in_body = False
        self._skip_depth = 0

    def handle_starttag(self, tag, attrs):
        if tag == "title":
            self._in_title = True
        elif tag == "body":
            self._in_body = True
        elif tag in ("script", "style"):
            self._skip_depth += 1

    def handle_endtag(self, tag):
        if tag == "title":
            self._in_title = False
        elif tag == "body":
            self._in_body = False
        elif tag in ("script", "style") and self._skip_depth:
            self._skip_depth -= 1

    def handle_data(self, data):
        if self._in_title:
            self.title_parts.append(data)
        elif self._in_body and not self._skip_depth:
            self.body_parts.append(data)

    @property
    def title(self) -> str:
        return "".join(self.title_parts).strip()

    @property
    def body_text(self) -> str:
        return " ".join(part.strip() for part in self.body_parts if part.strip())


def inspect_document(html: str) -> FrameInspection:
    """
    Classify a loaded HTML document.

    A document titled "Error" or whose body mentions "404" is an error page.
    """
    inspector = _DocumentInspector()
    try:
        inspector.feed(html)
        inspector.close()
    except Exception as e:  # noqa: BLE001 - malformed markup is opaque, not fatal
        logger.debug(f"Could not inspect document: {e}")
        return FrameInspection.OPAQUE

    if inspector.title in NOT_FOUND_TITLES or NOT_FOUND_BODY_MARKER in inspector.body_text:
        return FrameInspection.NOT_FOUND
    return FrameInspection.OK


class FileFrameLoader(FrameLoader):
    """
    Loads route paths from the local site tree.

    Paths are resolved relative to ``base_dir`` (the shell page directory)
    and must stay inside ``site_root``.
    """

    # (html, absolute file path) for the frame widget
    document_ready = Signal(str, str)

    def __init__(
        self,
        base_dir: Union[str, Path],
        site_root: Optional[Union[str, Path]] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self.base_dir = Path(base_dir).resolve()
        self.site_root = Path(site_root).resolve() if site_root else self.base_dir.parent

    def load(self, token: int, path: str) -> None:
        logger.debug(f"Queueing frame load #{token}: {path}")
        QTimer.singleShot(0, self, lambda: self._load_now(token, path))

    def resolve(self, path: str) -> Path:
        target = (self.base_dir / path).resolve()
        try:
            target.relative_to(self.site_root)
        except ValueError:
            raise FileNotFoundError(f"{path} is outside the site root") from None
        return target

    def _load_now(self, token: int, path: str) -> None:
        try:
            target = self.resolve(path)
            html = target.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Frame load #{token} failed for {path}: {e}")
            self.load_failed.emit(token, str(e))
            return

        self.document_ready.emit(html, str(target))
        inspection = inspect_document(html)
        logger.debug(f"Frame load #{token} finished: {path} ({inspection.value})")
        self.load_finished.emit(token, inspection)
