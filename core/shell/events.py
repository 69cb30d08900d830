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
Tagged events accepted by the shell router's dispatcher.

Every mutation of the shell state is triggered by exactly one of these
events: user input, timer fires, frame load signals, viewport changes and
history moves.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TimerKind(Enum):
    """Timers owned by the shell router."""

    LOADING_INDICATOR = "loading_indicator"
    LOAD_TIMEOUT = "load_timeout"
    RESIZE_DEBOUNCE = "resize_debounce"


class FrameInspection(Enum):
    """Result of inspecting a document loaded into the content frame."""

    OK = "ok"
    NOT_FOUND = "not_found"
    OPAQUE = "opaque"  # content could not be inspected; treated as success


class SidebarAction(Enum):
    OPEN = "open"
    CLOSE = "close"
    TOGGLE = "toggle"


@dataclass(frozen=True)
class NavigationRequested:
    page_id: str
    push_history: bool = True


@dataclass(frozen=True)
class HistoryChanged:
    page_id: str


@dataclass(frozen=True)
class RetryRequested:
    pass


@dataclass(frozen=True)
class TimerFired:
    kind: TimerKind
    token: int


@dataclass(frozen=True)
class ResourceLoaded:
    token: int
    inspection: FrameInspection = FrameInspection.OK


@dataclass(frozen=True)
class ResourceFailed:
    token: int
    reason: str = ""


@dataclass(frozen=True)
class ViewportChanged:
    """Viewport width change; ``debounced`` events arrive straight from resizes."""

    width: int
    debounced: bool = True


@dataclass(frozen=True)
class SidebarRequested:
    action: SidebarAction


@dataclass(frozen=True)
class KeyPressed:
    key: str
    modifiers: Optional[str] = None
