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
UI Constants for HelloShell.

Centralized constants to avoid hardcoding values throughout the UI layer.
"""

# Window
WINDOW_MIN_WIDTH = 320
WINDOW_MIN_HEIGHT = 480
DEFAULT_WINDOW_WIDTH = 1024
DEFAULT_WINDOW_HEIGHT = 720

# Sidebar
SIDEBAR_WIDTH = 220
SIDEBAR_BUTTON_MIN_HEIGHT = 44
SIDEBAR_TOGGLE_SIZE = 36

# Layout
DEFAULT_SPACING = 8
ZERO_MARGINS = (0, 0, 0, 0)
PAGE_MARGINS = (32, 32, 32, 32)

# Typography (point sizes)
EMOJI_FONT_SIZE = 56
HEADING_FONT_SIZE = 28
GREETING_FONT_SIZE = 40
ERROR_ICON_FONT_SIZE = 36

# Hello page wave animation
WAVE_DURATION_MS = 600
WAVE_OFFSET_PX = 12

# Error dialog
ERROR_DIALOG_MIN_WIDTH = 420
ERROR_DIALOG_DETAILS_MAX_HEIGHT = 240
COPY_FEEDBACK_RESET_MS = 2000
