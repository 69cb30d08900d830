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
"""Back/forward history of visited shell pages."""

from typing import List, Optional


class NavigationHistory:
    """
    Linear navigation history with a cursor.

    Pushing drops any forward entries; moving back or forward only moves the
    cursor.
    """

    def __init__(self, max_entries: int = 50):
        self.max_entries = max_entries
        self._entries: List[str] = []
        self._index = -1

    @property
    def current(self) -> Optional[str]:
        if 0 <= self._index < len(self._entries):
            return self._entries[self._index]
        return None

    @property
    def entries(self) -> List[str]:
        return list(self._entries)

    def push(self, page_id: str) -> None:
        if self.current == page_id:
            return
        del self._entries[self._index + 1 :]
        self._entries.append(page_id)
        if len(self._entries) > self.max_entries:
            self._entries.pop(0)
        self._index = len(self._entries) - 1

    def can_go_back(self) -> bool:
        return self._index > 0

    def can_go_forward(self) -> bool:
        return self._index < len(self._entries) - 1

    def back(self) -> Optional[str]:
        if not self.can_go_back():
            return None
        self._index -= 1
        return self._entries[self._index]

    def forward(self) -> Optional[str]:
        if not self.can_go_forward():
            return None
        self._index += 1
        return self._entries[self._index]

    def clear(self) -> None:
        self._entries.clear()
        self._index = -1
