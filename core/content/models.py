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
"""Static data models shared by the shell router and the greeting cycler."""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple


@dataclass(frozen=True)
class NavigationEntry:
    """Navigation metadata used by the sidebar and the route table."""

    id: str
    path: str
    title: str
    icon: str = ""
    label: str = ""


@dataclass(frozen=True)
class LanguageEntry:
    """One greeting shown by the greeting cycler."""

    code: str
    display_name: str
    greeting_text: str
    is_right_to_left: bool = False


@dataclass(frozen=True)
class Route:
    """Resource locator and title for a single page."""

    path: str
    title: str


class RouteTable(Mapping):
    """
    Immutable mapping from page id to route.

    Built once at startup from the ordered navigation entries; iteration
    follows the entry order.
    """

    def __init__(self, entries: Iterable[NavigationEntry]):
        routes: Dict[str, Route] = {}
        for entry in entries:
            if entry.id in routes:
                raise ValueError(f"Duplicate navigation id: {entry.id}")
            routes[entry.id] = Route(path=entry.path, title=entry.title)
        self._routes = routes

    def __getitem__(self, page_id: str) -> Route:
        return self._routes[page_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def lookup(self, page_id: Optional[str]) -> Optional[Route]:
        """Return the route for ``page_id`` or None."""
        if page_id is None:
            return None
        return self._routes.get(page_id)

    @property
    def page_ids(self) -> Tuple[str, ...]:
        return tuple(self._routes)

    def __repr__(self) -> str:
        return f"RouteTable({list(self._routes)})"
