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
Cancellable timers for the page controllers.

Controllers never touch ``QTimer`` directly; they schedule through a
``TimerScheduler`` so the state machines can be driven by a virtual clock in
tests and by the Qt event loop in the application.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional, Set

from PySide6.QtCore import QObject, QTimer

logger = logging.getLogger("helloshell.timers")


class TimerHandle(ABC):
    """A scheduled timer that can be cancelled synchronously."""

    @abstractmethod
    def cancel(self) -> None:
        """Cancel the timer. Cancelling twice is harmless."""

    @property
    @abstractmethod
    def active(self) -> bool:
        """True while the timer may still fire."""


class TimerScheduler(ABC):
    """Creates one-shot and repeating timers."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay_ms`` milliseconds."""

    @abstractmethod
    def call_repeating(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` every ``interval_ms`` milliseconds until cancelled."""


def cancel_timer(handle: Optional[TimerHandle]) -> None:
    """Cancel ``handle`` if it is set."""
    if handle is not None:
        handle.cancel()


class QtTimerHandle(TimerHandle):
    """Timer handle wrapping a ``QTimer``."""

    def __init__(self, scheduler: "QtTimerScheduler", timer: QTimer, callback, single_shot: bool):
        self._scheduler = scheduler
        self._timer = timer
        self._callback = callback
        self._single_shot = single_shot
        self._active = True
        timer.setSingleShot(single_shot)
        timer.timeout.connect(self._on_timeout)

    @property
    def active(self) -> bool:
        return self._active

    def _on_timeout(self) -> None:
        if not self._active:
            return
        if self._single_shot:
            self._release()
        try:
            self._callback()
        except Exception as e:
            logger.error(f"Error in timer callback: {e}", exc_info=True)

    def cancel(self) -> None:
        if not self._active:
            return
        self._timer.stop()
        self._release()

    def _release(self) -> None:
        self._active = False
        self._scheduler._forget(self)
        self._timer.deleteLater()


class QtTimerScheduler(TimerScheduler):
    """Scheduler backed by ``QTimer`` on the Qt event loop."""

    def __init__(self, parent: Optional[QObject] = None):
        self._parent = parent
        self._handles: Set[QtTimerHandle] = set()

    def _start(self, ms: int, callback, single_shot: bool) -> TimerHandle:
        timer = QTimer(self._parent)
        handle = QtTimerHandle(self, timer, callback, single_shot)
        self._handles.add(handle)
        timer.start(max(0, int(ms)))
        return handle

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        return self._start(delay_ms, callback, single_shot=True)

    def call_repeating(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        return self._start(interval_ms, callback, single_shot=False)

    def _forget(self, handle: QtTimerHandle) -> None:
        self._handles.discard(handle)

    @property
    def pending_count(self) -> int:
        return len(self._handles)

    def cancel_all(self) -> None:
        """Cancel every outstanding timer."""
        for handle in list(self._handles):
            handle.cancel()
