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
Greeting cycler for the languages page.

Advances through the ordered language entries on a repeating timer and
lets the user pick a language manually, which stops the automatic cycle.
The selected language and the cycle interval survive restarts through the
preference store.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from PySide6.QtCore import QObject, Signal

from config.constants import (
    CYCLE_INTERVAL_KEY,
    CYCLE_INTERVAL_STEP_S,
    DEFAULT_CYCLE_INTERVAL_S,
    LANGUAGES_PREFERENCE_NAMESPACE,
    MAX_CYCLE_INTERVAL_S,
    MIN_CYCLE_INTERVAL_S,
    SELECTED_LANGUAGE_KEY,
)
from core.content.models import LanguageEntry
from core.content.store import ContentDocument
from core.preferences.store import PreferenceStore
from core.timers import TimerHandle, TimerScheduler, cancel_timer

logger = logging.getLogger("helloshell.greeting")


@dataclass
class CyclerState:
    """Position and mode of the greeting cycler."""

    current_index: int = 0
    is_auto_cycling: bool = False
    interval_seconds: float = DEFAULT_CYCLE_INTERVAL_S


class GreetingCycler(QObject):
    """Cycles greetings through the configured languages."""

    # (greeting text, right-to-left)
    greeting_changed = Signal(str, bool)
    language_changed = Signal(str)
    interval_changed = Signal(float)
    # (is auto-cycling, status text)
    status_changed = Signal(bool, str)

    def __init__(
        self,
        content: ContentDocument,
        scheduler: TimerScheduler,
        preferences: Optional[PreferenceStore] = None,
        parent: Optional[QObject] = None,
    ):
        """
        Initialize the cycler.

        Raises:
            InitializationError: If the document has no usable language list
        """
        super().__init__(parent)
        self.content = content
        self.scheduler = scheduler
        self.preferences = preferences or PreferenceStore()
        self.languages: Tuple[LanguageEntry, ...] = content.language_entries()

        self.min_interval = float(content.number_setting("minSpeed", MIN_CYCLE_INTERVAL_S))
        self.max_interval = float(content.number_setting("maxSpeed", MAX_CYCLE_INTERVAL_S))
        self.interval_step = float(content.number_setting("speedStep", CYCLE_INTERVAL_STEP_S))
        if self.min_interval > self.max_interval:
            logger.warning("minSpeed is above maxSpeed, using built-in interval range")
            self.min_interval, self.max_interval = MIN_CYCLE_INTERVAL_S, MAX_CYCLE_INTERVAL_S
        self.default_interval = self.clamp_interval(
            float(content.number_setting("defaultSpeed", DEFAULT_CYCLE_INTERVAL_S))
        )

        self._state = CyclerState(interval_seconds=self.default_interval)
        self._timer: Optional[TimerHandle] = None

    @property
    def state(self) -> CyclerState:
        return replace(self._state)

    @property
    def current_language(self) -> LanguageEntry:
        return self.languages[self._state.current_index]

    def index_of(self, code: str) -> Optional[int]:
        for index, entry in enumerate(self.languages):
            if entry.code == code:
                return index
        return None

    def clamp_interval(self, seconds: float) -> float:
        return min(max(seconds, self.min_interval), self.max_interval)

    def initialize(self) -> None:
        """Restore persisted choices and start cycling."""
        stored_code = self.preferences.get(
            SELECTED_LANGUAGE_KEY, namespace=LANGUAGES_PREFERENCE_NAMESPACE
        )
        index = self.index_of(stored_code) if isinstance(stored_code, str) else None
        if index is None:
            if stored_code is not None:
                logger.info(f"Stored language '{stored_code}' is not available")
            index = 0

        stored_interval = self.preferences.get(
            CYCLE_INTERVAL_KEY, namespace=LANGUAGES_PREFERENCE_NAMESPACE
        )
        interval = self.default_interval
        if (
            isinstance(stored_interval, (int, float))
            and not isinstance(stored_interval, bool)
            and self.min_interval <= stored_interval <= self.max_interval
        ):
            interval = float(stored_interval)
        elif stored_interval is not None:
            logger.info(f"Ignoring stored cycle interval {stored_interval!r}")

        self._state.interval_seconds = interval
        self.interval_changed.emit(interval)
        self._show(index)
        logger.info(
            f"Greeting cycler initialized at '{self.current_language.code}', "
            f"interval {interval}s"
        )
        self.start_auto_cycle()

    def select_language(self, code: str) -> bool:
        """Show ``code`` and stop auto-cycling; unknown codes are logged."""
        index = self.index_of(code)
        if index is None:
            logger.error(f"Unknown language code: {code}")
            return False

        self.stop_auto_cycle()
        self._show(index)
        self._persist_language()
        self._persist_interval()
        return True

    def set_interval_seconds(self, seconds: float) -> bool:
        """Change the cycle interval; a running cycle restarts at the new rate."""
        try:
            requested = float(seconds)
        except (TypeError, ValueError):
            logger.error(f"Invalid cycle interval: {seconds!r}")
            return False

        interval = self.clamp_interval(requested)
        if interval != requested:
            logger.warning(
                f"Cycle interval {requested}s outside [{self.min_interval}, "
                f"{self.max_interval}], using {interval}s"
            )

        self._state.interval_seconds = interval
        self.interval_changed.emit(interval)
        self._persist_interval()

        if self._state.is_auto_cycling:
            self._restart_timer()
        return True

    def start_auto_cycle(self) -> None:
        self._restart_timer()
        self._state.is_auto_cycling = True
        status = self.content.text("content.status.cycling", fallback="Auto-cycling")
        self.status_changed.emit(True, status)

    def stop_auto_cycle(self) -> None:
        cancel_timer(self._timer)
        self._timer = None
        self._state.is_auto_cycling = False
        status = self.content.text("content.status.manual", fallback="Manual selection")
        self.status_changed.emit(False, status)

    def shutdown(self) -> None:
        cancel_timer(self._timer)
        self._timer = None
        self._state.is_auto_cycling = False
        logger.debug("Greeting cycler shut down")

    def _restart_timer(self) -> None:
        cancel_timer(self._timer)
        interval_ms = int(round(self._state.interval_seconds * 1000))
        self._timer = self.scheduler.call_repeating(interval_ms, self._tick)

    def _tick(self) -> None:
        if not self._state.is_auto_cycling:
            return
        self._show((self._state.current_index + 1) % len(self.languages))
        self._persist_language()

    def _show(self, index: int) -> None:
        self._state.current_index = index
        entry = self.languages[index]
        self.greeting_changed.emit(entry.greeting_text, entry.is_right_to_left)
        self.language_changed.emit(entry.code)

    def _persist_language(self) -> None:
        self.preferences.set(
            SELECTED_LANGUAGE_KEY,
            self.current_language.code,
            namespace=LANGUAGES_PREFERENCE_NAMESPACE,
        )

    def _persist_interval(self) -> None:
        self.preferences.set(
            CYCLE_INTERVAL_KEY,
            self._state.interval_seconds,
            namespace=LANGUAGES_PREFERENCE_NAMESPACE,
        )
