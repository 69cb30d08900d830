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
Content store for HelloShell pages.

Each page owns one read-only JSON document providing labels, navigation
entries, language entries and numeric settings. Documents are resolved once
at page startup; a document that cannot be loaded is fatal to that page only.
"""

import json
import logging
import re
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from core.content.models import LanguageEntry, NavigationEntry, RouteTable
from utils.error_handler import InitializationError

logger = logging.getLogger("helloshell.content")

PARAMETER_PATTERN = re.compile(r"\{(\w+)\}")


def format_template(template: str, values: Mapping[str, Any]) -> str:
    """
    Replace ``{name}`` placeholders in ``template``.

    Placeholders without a matching value are left untouched.
    """

    def _replace(match):
        key = match.group(1)
        if key in values and values[key] is not None:
            return str(values[key])
        return match.group(0)

    return PARAMETER_PATTERN.sub(_replace, template)


def _freeze(value: Any) -> Any:
    if isinstance(value, dict):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


class ContentDocument:
    """Read-only view over a page content document."""

    def __init__(self, page_id: str, data: Dict[str, Any], source: Optional[Path] = None):
        self.page_id = page_id
        self.source = source
        self._data = _freeze(data)

    @property
    def data(self) -> Mapping[str, Any]:
        return self._data

    @property
    def title(self) -> Optional[str]:
        """Document title from ``meta.title``."""
        title = self.get("meta.title")
        return title if isinstance(title, str) else None

    @property
    def settings(self) -> Mapping[str, Any]:
        settings = self._data.get("settings")
        return settings if isinstance(settings, Mapping) else MappingProxyType({})

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a value by dotted key (e.g. ``content.error.title``).

        Args:
            key: Dotted key
            default: Returned when any segment is missing

        Returns:
            The stored value or ``default``
        """
        value: Any = self._data
        for part in key.split("."):
            if isinstance(value, Mapping) and part in value:
                value = value[part]
            else:
                return default
        return value

    def text(self, key: str, fallback: Optional[str] = None, **params: Any) -> str:
        """
        Get a label by dotted key with ``{name}`` parameter substitution.

        Missing or non-string values log a warning and return ``fallback``
        (or the key itself when no fallback is given).
        """
        value = self.get(key)
        if not isinstance(value, str):
            logger.warning(f"Content key not found: {key} (page: {self.page_id})")
            return fallback if fallback is not None else key

        if params and "{" in value:
            return format_template(value, params)
        return value

    def setting(self, name: str, default: Union[int, float, str, bool, None] = None) -> Any:
        """Return a value from the ``settings`` section."""
        return self.settings.get(name, default)

    def number_setting(self, name: str, default: float) -> float:
        """Return a numeric setting, falling back to ``default`` on bad input."""
        value = self.settings.get(name, default)
        if isinstance(value, bool):
            logger.warning(f"Setting '{name}' on page {self.page_id} is not numeric: {value!r}")
            return default
        if not isinstance(value, (int, float)):
            try:
                value = float(value)
            except (TypeError, ValueError):
                logger.warning(
                    f"Setting '{name}' on page {self.page_id} is not numeric: {value!r}"
                )
                return default
        return value

    def navigation_entries(self) -> Tuple[NavigationEntry, ...]:
        """
        Build navigation entries from ``content.navigation``.

        Raises:
            InitializationError: If the section is missing or malformed
        """
        raw_entries = self.get("content.navigation")
        if not isinstance(raw_entries, tuple):
            raise InitializationError(
                self.page_id, f"Content for page '{self.page_id}' has no navigation"
            )

        entries = []
        for raw in raw_entries:
            try:
                entries.append(
                    NavigationEntry(
                        id=str(raw["id"]),
                        path=str(raw["path"]),
                        title=str(raw.get("title", raw["id"])),
                        icon=str(raw.get("icon", "")),
                        label=str(raw.get("label", raw.get("title", raw["id"]))),
                    )
                )
            except (KeyError, TypeError, AttributeError) as e:
                raise InitializationError(
                    self.page_id, f"Malformed navigation entry on page '{self.page_id}': {e}"
                ) from e
        return tuple(entries)

    def route_table(self) -> RouteTable:
        """Build the route table from the navigation entries."""
        try:
            return RouteTable(self.navigation_entries())
        except ValueError as e:
            raise InitializationError(self.page_id, str(e)) from e

    def language_entries(self) -> Tuple[LanguageEntry, ...]:
        """
        Build language entries from the top-level ``languages`` list.

        Raises:
            InitializationError: If the list is missing, empty, malformed or
                contains duplicate codes
        """
        raw_entries = self._data.get("languages")
        if not isinstance(raw_entries, tuple) or not raw_entries:
            raise InitializationError(
                self.page_id, f"Content for page '{self.page_id}' has no languages"
            )

        entries = []
        seen = set()
        for raw in raw_entries:
            try:
                entry = LanguageEntry(
                    code=str(raw["code"]),
                    display_name=str(raw.get("name", raw["code"])),
                    greeting_text=str(raw["greeting"]),
                    is_right_to_left=self._rtl_flag(raw),
                )
            except (KeyError, TypeError, AttributeError) as e:
                raise InitializationError(
                    self.page_id, f"Malformed language entry on page '{self.page_id}': {e}"
                ) from e
            if entry.code in seen:
                raise InitializationError(
                    self.page_id, f"Duplicate language code on page '{self.page_id}': {entry.code}"
                )
            seen.add(entry.code)
            entries.append(entry)
        return tuple(entries)

    def _rtl_flag(self, raw: Mapping[str, Any]) -> bool:
        value = raw.get("rtl", False)
        if isinstance(value, bool):
            return value
        logger.warning(
            f"Language '{raw.get('code')}' on page '{self.page_id}' has non-boolean "
            f"rtl {value!r}, using left-to-right"
        )
        return False


class ContentStore:
    """
    Loads page content documents from a site source tree.

    The document for page ``<id>`` lives at ``<root>/<id>/<id>.json``.
    Loaded documents are cached per page id.
    """

    def __init__(self, root_dir: Union[str, Path]):
        self.root_dir = Path(root_dir)
        self._cache: Dict[str, ContentDocument] = {}

    def document_path(self, page_id: str) -> Path:
        return self.root_dir / page_id / f"{page_id}.json"

    def load_content(self, page_id: str) -> ContentDocument:
        """
        Load the content document for ``page_id``.

        Args:
            page_id: Page identifier

        Returns:
            The page's content document

        Raises:
            InitializationError: If the document is missing, unreadable or
                not a JSON object
        """
        if page_id in self._cache:
            return self._cache[page_id]

        path = self.document_path(page_id)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            logger.error(f"Content document not found: {path}")
            raise InitializationError(page_id) from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Invalid JSON in content document {path}: {e}")
            raise InitializationError(page_id) from e
        except OSError as e:
            logger.error(f"Error reading content document {path}: {e}")
            raise InitializationError(page_id) from e

        if not isinstance(data, dict):
            logger.error(f"Content document {path} is not a JSON object")
            raise InitializationError(page_id)

        document = ContentDocument(page_id, data, source=path)
        self._cache[page_id] = document
        logger.info(f"Loaded content for page: {page_id}")
        return document

    def clear_cache(self) -> None:
        self._cache.clear()
