# SPDX-License-Identifier: Apache-2.0
"""Tests for the namespaced preference store."""

import json

from core.preferences.store import PreferenceStore


def test_round_trip_survives_restart(tmp_path):
    path = tmp_path / "prefs" / "preferences.json"
    store = PreferenceStore(path)

    assert store.set("selectedLanguage", "ja", namespace="languages") is True
    assert store.set("cycleInterval", 2.5, namespace="languages") is True

    reopened = PreferenceStore(path)
    assert reopened.get("selectedLanguage", namespace="languages") == "ja"
    assert reopened.get("cycleInterval", namespace="languages") == 2.5

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["languages.selectedLanguage"] == "ja"


def test_namespaces_are_independent():
    store = PreferenceStore()
    store.set("lastVisitedPage", "hello", namespace="shell")
    store.set("lastVisitedPage", "other", namespace="languages")

    assert store.get("lastVisitedPage", namespace="shell") == "hello"
    assert store.get("lastVisitedPage", namespace="languages") == "other"
    assert store.get("lastVisitedPage") is None
    assert store.get("missing", default="fallback", namespace="shell") == "fallback"


def test_get_returns_copies():
    store = PreferenceStore()
    store.set("recent", ["hello"], namespace="shell")

    value = store.get("recent", namespace="shell")
    value.append("languages")

    assert store.get("recent", namespace="shell") == ["hello"]


def test_clear_namespace_keeps_other_namespaces():
    store = PreferenceStore()
    store.set("a", 1, namespace="shell")
    store.set("b", 2, namespace="shell")
    store.set("a", 3, namespace="languages")

    assert store.clear_namespace("shell") is True

    assert store.keys("shell") == []
    assert store.keys("languages") == ["a"]


def test_remove_and_clear():
    store = PreferenceStore()
    store.set("a", 1, namespace="shell")

    assert store.remove("a", namespace="shell") is True
    assert store.remove("a", namespace="shell") is True
    assert store.get("a", namespace="shell") is None

    store.set("b", 2)
    assert store.clear() is True
    assert store.keys() == []


def test_unserializable_value_is_rejected(caplog):
    store = PreferenceStore()

    assert store.set("bad", object(), namespace="shell") is False
    assert store.get("bad", namespace="shell") is None
    assert "not JSON serializable" in caplog.text


def test_write_failure_is_reported_not_raised(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")
    store = PreferenceStore(blocker / "preferences.json")

    assert store.set("lastVisitedPage", "hello", namespace="shell") is False
    assert store.get("lastVisitedPage", namespace="shell") is None


def test_corrupt_file_starts_empty(tmp_path):
    path = tmp_path / "preferences.json"
    path.write_text("{not json", encoding="utf-8")

    store = PreferenceStore(path)

    assert store.keys() == []
    assert store.set("a", 1) is True


def test_dotted_namespace_is_rejected(caplog):
    store = PreferenceStore()
    assert store.set("b.c", "nested-key", namespace="a") is True

    assert store.set("c", "dotted-namespace", namespace="a.b") is False
    assert store.get("c", default="fallback", namespace="a.b") == "fallback"
    assert store.remove("c", namespace="a.b") is False
    assert store.clear_namespace("a.b") is False
    assert store.keys(namespace="a.b") == []
    assert store.get("b.c", namespace="a") == "nested-key"
    assert "Invalid preference namespace" in caplog.text


def test_invalid_utf8_file_starts_empty(tmp_path):
    path = tmp_path / "preferences.json"
    path.write_bytes(b'{"shell.lastVisitedPage": "\xff\xfe"}')

    store = PreferenceStore(path)

    assert store.keys() == []
