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
"""Application shell: routing state machine and content frame loading."""

from core.shell.events import FrameInspection, SidebarAction, TimerKind
from core.shell.history import NavigationHistory
from core.shell.loader import FileFrameLoader, FrameLoader, inspect_document
from core.shell.router import ShellRouter
from core.shell.state import ShellPhase, ShellState

__all__ = [
    "FileFrameLoader",
    "FrameInspection",
    "FrameLoader",
    "NavigationHistory",
    "ShellPhase",
    "ShellRouter",
    "ShellState",
    "SidebarAction",
    "TimerKind",
    "inspect_document",
]
