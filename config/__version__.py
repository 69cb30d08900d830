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
Version management for HelloShell.

This module provides the single source of truth for version information.
The site builder and the shell sidebar both read the version from here.
"""

# Single source of truth for version information
__version__ = "1.0.0"

# Version metadata
VERSION_INFO = {
    "major": 1,
    "minor": 0,
    "patch": 0,
    "pre_release": None,  # e.g., "alpha", "beta", "rc1"
    "build": None,
}


def get_version() -> str:
    """
    Get the current application version.

    Returns:
        Version string in semantic versioning format
    """
    return __version__


def get_display_version() -> str:
    """
    Get formatted version for display in UI.

    Returns:
        Version string with 'v' prefix for display
    """
    version = get_version()
    if not version:
        return ""

    if not version.lower().startswith("v"):
        return f"v{version}"

    return version


def is_development_version() -> bool:
    """Check if this is a development/pre-release version."""
    return VERSION_INFO.get("pre_release") is not None
