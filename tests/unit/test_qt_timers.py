# SPDX-License-Identifier: Apache-2.0
"""Tests for the QTimer-backed scheduler."""

from core.timers import QtTimerScheduler, cancel_timer


def test_call_later_fires_once(qtbot):
    scheduler = QtTimerScheduler()
    fired = []

    handle = scheduler.call_later(10, lambda: fired.append(1))
    assert handle.active
    assert scheduler.pending_count == 1

    qtbot.waitUntil(lambda: fired == [1], timeout=2000)
    qtbot.wait(30)

    assert fired == [1]
    assert not handle.active
    assert scheduler.pending_count == 0


def test_cancelled_timer_never_fires(qtbot):
    scheduler = QtTimerScheduler()
    fired = []

    handle = scheduler.call_later(10, lambda: fired.append(1))
    cancel_timer(handle)
    qtbot.wait(50)

    assert fired == []
    assert not handle.active
    cancel_timer(handle)
    cancel_timer(None)


def test_repeating_timer(qtbot):
    scheduler = QtTimerScheduler()
    ticks = []

    handle = scheduler.call_repeating(5, lambda: ticks.append(1))
    qtbot.waitUntil(lambda: len(ticks) >= 3, timeout=2000)
    handle.cancel()
    count = len(ticks)
    qtbot.wait(30)

    assert len(ticks) == count
    assert scheduler.pending_count == 0


def test_cancel_all(qtbot):
    scheduler = QtTimerScheduler()
    fired = []
    scheduler.call_later(10, lambda: fired.append("a"))
    scheduler.call_repeating(10, lambda: fired.append("b"))

    scheduler.cancel_all()
    qtbot.wait(50)

    assert fired == []
    assert scheduler.pending_count == 0


def test_callback_errors_are_logged(qtbot, caplog):
    scheduler = QtTimerScheduler()
    after = []

    def explode():
        raise RuntimeError("tick failed")

    scheduler.call_later(0, explode)
    scheduler.call_later(5, lambda: after.append(1))
    qtbot.waitUntil(lambda: after == [1], timeout=2000)

    assert "tick failed" in caplog.text
