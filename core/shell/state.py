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
"""Mutable state record owned by the shell router."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from core.timers import TimerHandle, cancel_timer
from utils.error_handler import HelloShellError


class ShellPhase(Enum):
    IDLE = "idle"
    NAVIGATING = "navigating"
    LOADED = "loaded"
    ERRORED = "errored"


@dataclass
class ShellState:
    """
    Shell router state.

    At most one loading-indicator timer and one timeout timer are outstanding;
    they belong to the navigation identified by ``navigation_token`` and are
    cancelled together.
    """

    current_page_id: Optional[str] = None
    phase: ShellPhase = ShellPhase.IDLE
    is_mobile_layout: bool = False
    sidebar_open: bool = False
    is_loading: bool = False
    loading_indicator_visible: bool = False
    error: Optional[HelloShellError] = None
    navigation_token: int = 0
    loading_indicator_timer: Optional[TimerHandle] = field(default=None, repr=False)
    timeout_timer: Optional[TimerHandle] = field(default=None, repr=False)

    def cancel_navigation_timers(self) -> None:
        cancel_timer(self.loading_indicator_timer)
        cancel_timer(self.timeout_timer)
        self.loading_indicator_timer = None
        self.timeout_timer = None

    def pending_timers(self) -> List[TimerHandle]:
        return [
            timer
            for timer in (self.loading_indicator_timer, self.timeout_timer)
            if timer is not None and timer.active
        ]

    def snapshot(self) -> "ShellState":
        """Copy without timer handles, safe to hand to views."""
        return replace(self, loading_indicator_timer=None, timeout_timer=None)
