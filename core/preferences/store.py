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
Namespaced preference storage.

Preferences are kept as ``"<namespace>.<key>"`` entries in a single JSON
file so independently persisted pages never collide. Namespace names may
not contain dots, so a namespaced key is never ambiguous. Every operation is
best-effort: failures are logged and reported through the return value,
never raised to the caller.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger("helloshell.preferences")

_MISSING = object()


class PreferenceStore:
    """JSON-file backed key-value store with optional namespaces."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """
        Initialize the preference store.

        Args:
            path: JSON file backing the store; None keeps preferences in
                memory only
        """
        self.path = Path(path) if path is not None else None
        self._values: Dict[str, Any] = {}
        self._load()

    @staticmethod
    def valid_namespace(namespace: Optional[str]) -> bool:
        if namespace is None:
            return True
        if not isinstance(namespace, str) or not namespace or "." in namespace:
            logger.error(f"Invalid preference namespace: {namespace!r}")
            return False
        return True

    @staticmethod
    def _full_key(key: str, namespace: Optional[str]) -> str:
        return f"{namespace}.{key}" if namespace else key

    def _load(self) -> None:
        if self.path is None or not self.path.exists():
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading preferences from {self.path}: {e}")
            return

        if isinstance(data, dict):
            self._values = data
            logger.debug(f"Loaded {len(data)} preference(s) from {self.path}")
        else:
            logger.error(f"Ignoring preferences file {self.path}: not a JSON object")

    def _flush(self) -> bool:
        if self.path is None:
            return True

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_name(self.path.name + ".tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self._values, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving preferences to {self.path}: {e}")
            return False

    def get(self, key: str, default: Any = None, namespace: Optional[str] = None) -> Any:
        """
        Retrieve a preference.

        Args:
            key: Preference key
            default: Value returned when the key does not exist
            namespace: Optional namespace prefix (e.g. ``"languages"``)

        Returns:
            Stored value or ``default``
        """
        if not self.valid_namespace(namespace):
            return default
        full_key = self._full_key(key, namespace)
        if full_key not in self._values:
            return default
        return copy.deepcopy(self._values[full_key])

    def set(self, key: str, value: Any, namespace: Optional[str] = None) -> bool:
        """
        Store a preference and persist it.

        Returns:
            True if the value was stored and written, False otherwise
        """
        if not self.valid_namespace(namespace):
            return False
        full_key = self._full_key(key, namespace)
        try:
            json.dumps(value)
        except (TypeError, ValueError) as e:
            logger.error(f"Preference '{full_key}' is not JSON serializable: {e}")
            return False

        previous = self._values.get(full_key, _MISSING)
        self._values[full_key] = copy.deepcopy(value)
        if self._flush():
            return True

        # Keep memory consistent with disk when the write fails
        if previous is _MISSING:
            self._values.pop(full_key, None)
        else:
            self._values[full_key] = previous
        return False

    def remove(self, key: str, namespace: Optional[str] = None) -> bool:
        """Remove a preference. Returns False if it could not be persisted."""
        if not self.valid_namespace(namespace):
            return False
        full_key = self._full_key(key, namespace)
        if self._values.pop(full_key, _MISSING) is _MISSING:
            return True
        return self._flush()

    def clear_namespace(self, namespace: str) -> bool:
        """Remove every preference stored under ``namespace``."""
        if namespace is None or not self.valid_namespace(namespace):
            return False
        prefix = f"{namespace}."
        keys = [key for key in self._values if key.startswith(prefix)]
        for key in keys:
            del self._values[key]
        logger.debug(f"Cleared {len(keys)} preference(s) in namespace '{namespace}'")
        return self._flush() if keys else True

    def clear(self) -> bool:
        """Remove every preference."""
        self._values.clear()
        return self._flush()

    def keys(self, namespace: Optional[str] = None):
        """Return stored keys, optionally limited to a namespace (unprefixed)."""
        if namespace is None:
            return list(self._values)
        if not self.valid_namespace(namespace):
            return []
        prefix = f"{namespace}."
        return [key[len(prefix):] for key in self._values if key.startswith(prefix)]

