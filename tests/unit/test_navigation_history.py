# SPDX-License-Identifier: Apache-2.0
from core.shell.history import NavigationHistory


def test_empty_history():
    history = NavigationHistory()

    assert history.current is None
    assert not history.can_go_back()
    assert not history.can_go_forward()
    assert history.back() is None
    assert history.forward() is None


def test_back_and_forward():
    history = NavigationHistory()
    for page in ("hello", "languages", "hello"):
        history.push(page)

    assert history.back() == "languages"
    assert history.back() == "hello"
    assert history.back() is None
    assert history.forward() == "languages"
    assert history.current == "languages"


def test_repeated_push_is_ignored():
    history = NavigationHistory()
    history.push("hello")
    history.push("hello")

    assert history.entries == ["hello"]


def test_push_drops_forward_entries():
    history = NavigationHistory()
    for page in ("a", "b", "c"):
        history.push(page)
    history.back()
    history.back()

    history.push("d")

    assert history.entries == ["a", "d"]
    assert not history.can_go_forward()


def test_max_entries():
    history = NavigationHistory(max_entries=3)
    for page in ("a", "b", "c", "d"):
        history.push(page)

    assert history.entries == ["b", "c", "d"]
    assert history.current == "d"


def test_clear():
    history = NavigationHistory()
    history.push("hello")

    history.clear()

    assert history.entries == []
    assert history.current is None
