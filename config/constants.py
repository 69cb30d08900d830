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
Application-wide constants for HelloShell.

This module contains constants used across multiple modules to avoid
hardcoded values throughout the codebase.
"""

# ============================================================================
# Application Constants
# ============================================================================

APP_NAME = "HelloShell"
APP_LOGGER_NAME = "helloshell"
LOG_SEPARATOR_LENGTH = 60  # characters for "=" * 60

# Page identifiers (one content document per page)
PAGE_SHELL = "shell"
PAGE_HELLO = "hello"
PAGE_LANGUAGES = "languages"
PAGE_IDS = (PAGE_SHELL, PAGE_HELLO, PAGE_LANGUAGES)

# ============================================================================
# Shell Router Constants
# ============================================================================

DEFAULT_LOADING_DELAY_MS = 300  # Delay before the loading indicator shows
DEFAULT_FRAME_TIMEOUT_MS = 10000  # Content frame load timeout
DEFAULT_MOBILE_BREAKPOINT_PX = 768  # Widths <= breakpoint use mobile layout
RESIZE_DEBOUNCE_MS = 250  # Quiet period before a resize is applied

SHELL_PREFERENCE_NAMESPACE = "shell"
LAST_VISITED_PAGE_KEY = "lastVisitedPage"

# Titles that mark a loaded document as an error page
NOT_FOUND_TITLES = ("Error",)
NOT_FOUND_BODY_MARKER = "404"

# ============================================================================
# Greeting Cycler Constants
# ============================================================================

DEFAULT_CYCLE_INTERVAL_S = 2.0
MIN_CYCLE_INTERVAL_S = 1.0
MAX_CYCLE_INTERVAL_S = 5.0
CYCLE_INTERVAL_STEP_S = 0.5

LANGUAGES_PREFERENCE_NAMESPACE = "languages"
SELECTED_LANGUAGE_KEY = "selectedLanguage"
CYCLE_INTERVAL_KEY = "cycleInterval"

# ============================================================================
# Site Build Constants
# ============================================================================

BUILD_LOG_FILENAME = "build.log"
BUILD_INFO_FILENAME = "build-info.txt"
HEALTH_PAGE_FILENAME = "health.html"
NOT_FOUND_PAGE_FILENAME = "404.html"

# Component directories that must exist in the source tree
REQUIRED_SOURCE_DIRS = ("shell", "hello", "languages", "shared")

# Directories created in the distribution tree
DIST_DIRECTORIES = ("shell", "hello", "languages", "shared/styles")

# Shared resources copied verbatim (relative to the source root)
SHARED_FILES = ("shared/styles/variables.css", "shared/styles/common.css")

# Fixed per-page file sets: (component, display name, files)
PAGE_COMPONENTS = (
    ("hello", "Hello World", ("hello.html", "hello.css", "hello.json")),
    ("languages", "Multi-Language", ("languages.html", "languages.css", "languages.json")),
    ("shell", "Application Shell", ("index.html", "shell.css", "shell.json")),
)

# Shell page copied to the distribution root
ROOT_INDEX_SOURCE = "shell/index.html"

# ============================================================================
# Logging Constants
# ============================================================================

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10 MB log file size
LOG_FILE_BACKUP_COUNT = 5  # Number of backup log files
DEFAULT_LOG_LINES_TO_READ = 100  # Default number of recent log lines

# Unit Conversion
BYTES_PER_KB = 1024
BYTES_PER_MB = 1024 * 1024
