# SPDX-License-Identifier: Apache-2.0
"""
Pytest configuration for HelloShell tests.
"""

import os
import sys
from pathlib import Path
from typing import Callable, List, Optional, Tuple

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from core.content.store import ContentDocument, ContentStore  # noqa: E402
from core.preferences.store import PreferenceStore  # noqa: E402
from core.shell.events import FrameInspection  # noqa: E402
from core.shell.loader import FrameLoader  # noqa: E402
from core.shell.router import ShellRouter  # noqa: E402
from core.timers import TimerHandle, TimerScheduler  # noqa: E402

SITE_DIR = ROOT_DIR / "site"


class ManualTimer(TimerHandle):
    def __init__(self, scheduler, due_ms, interval_ms, callback, seq):
        self.scheduler = scheduler
        self.due_ms = due_ms
        self.interval_ms = interval_ms
        self.callback = callback
        self.seq = seq
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False


class ManualScheduler(TimerScheduler):
    """Virtual clock; timers fire only inside ``advance``."""

    def __init__(self):
        self.now_ms = 0
        self._timers: List[ManualTimer] = []
        self._seq = 0

    def _add(self, delay_ms, callback, interval_ms=None) -> ManualTimer:
        self._seq += 1
        timer = ManualTimer(self, self.now_ms + delay_ms, interval_ms, callback, self._seq)
        self._timers.append(timer)
        return timer

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        return self._add(delay_ms, callback)

    def call_repeating(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        return self._add(interval_ms, callback, interval_ms)

    @property
    def pending(self) -> List[ManualTimer]:
        return [timer for timer in self._timers if timer.active]

    @property
    def pending_count(self) -> int:
        return len(self.pending)

    def advance(self, ms: int) -> None:
        target = self.now_ms + ms
        while True:
            due = [timer for timer in self.pending if timer.due_ms <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due_ms, t.seq))
            self.now_ms = timer.due_ms
            if timer.interval_ms:
                timer.due_ms += timer.interval_ms
            else:
                timer.cancel()
            timer.callback()
        self.now_ms = target


class FakeFrameLoader(FrameLoader):
    """Records load requests; tests decide when and how they resolve."""

    def __init__(self):
        super().__init__()
        self.requests: List[Tuple[int, str]] = []

    def load(self, token: int, path: str) -> None:
        self.requests.append((token, path))

    @property
    def last_token(self) -> int:
        return self.requests[-1][0]

    def succeed(self, token: Optional[int] = None, inspection=FrameInspection.OK) -> None:
        self.load_finished.emit(self.last_token if token is None else token, inspection)

    def fail(self, token: Optional[int] = None, reason: str = "boom") -> None:
        self.load_failed.emit(self.last_token if token is None else token, reason)


class CountingPreferenceStore(PreferenceStore):
    """In-memory preference store counting writes."""

    def __init__(self, path=None):
        super().__init__(path)
        self.writes: List[Tuple[str, object, Optional[str]]] = []

    def set(self, key, value, namespace=None) -> bool:
        self.writes.append((key, value, namespace))
        return super().set(key, value, namespace=namespace)


class SignalRecorder:
    """Collects the arguments of every emission of a Qt signal."""

    def __init__(self, signal):
        self.calls: List[tuple] = []
        signal.connect(self._record)

    def _record(self, *args):
        self.calls.append(args)

    @property
    def count(self) -> int:
        return len(self.calls)

    @property
    def last(self):
        return self.calls[-1] if self.calls else None


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for PySide6 testing."""
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app


@pytest.fixture
def site_dir() -> Path:
    return SITE_DIR


@pytest.fixture
def content_store() -> ContentStore:
    return ContentStore(SITE_DIR)


@pytest.fixture
def shell_content(content_store) -> ContentDocument:
    return content_store.load_content("shell")


@pytest.fixture
def languages_content(content_store) -> ContentDocument:
    return content_store.load_content("languages")


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def frame_loader(qapp) -> FakeFrameLoader:
    return FakeFrameLoader()


@pytest.fixture
def preferences() -> CountingPreferenceStore:
    return CountingPreferenceStore()


@pytest.fixture
def make_router(shell_content, scheduler, frame_loader, preferences):
    """Factory building a router over the real shell document."""
    routers = []

    def _make(content: Optional[ContentDocument] = None, **kwargs) -> ShellRouter:
        router = ShellRouter(
            content or shell_content,
            scheduler,
            frame_loader,
            kwargs.pop("preferences", preferences),
            **kwargs,
        )
        routers.append(router)
        return router

    yield _make

    for router in routers:
        router.shutdown()


@pytest.fixture
def recorder():
    return SignalRecorder
