# SPDX-License-Identifier: Apache-2.0
"""Tests for page content documents."""

import json
from types import MappingProxyType

import pytest

from core.content.models import NavigationEntry, RouteTable
from core.content.store import ContentDocument, ContentStore, format_template
from utils.error_handler import InitializationError


def test_site_documents_load(content_store):
    for page_id in ("hello", "languages", "shell"):
        document = content_store.load_content(page_id)
        assert document.page_id == page_id
        assert document.title


def test_documents_are_cached(content_store):
    assert content_store.load_content("hello") is content_store.load_content("hello")
    content_store.clear_cache()
    assert content_store.load_content("hello") is not None


def test_shell_navigation(shell_content):
    entries = shell_content.navigation_entries()

    assert [entry.id for entry in entries] == ["hello", "languages"]
    assert entries[0] == NavigationEntry(
        id="hello",
        path="../hello/hello.html",
        title="Hello World",
        icon="👋",
        label="Hello World",
    )
    routes = shell_content.route_table()
    assert list(routes) == ["hello", "languages"]
    assert routes["languages"].title == "Multi-Language"


def test_languages_include_right_to_left_entries(languages_content):
    entries = languages_content.language_entries()
    rtl_codes = {entry.code for entry in entries if entry.is_right_to_left}

    assert rtl_codes == {"ar", "he"}
    assert entries[0].code == "en"


def test_non_boolean_rtl_is_left_to_right(caplog):
    document = ContentDocument(
        "languages",
        {
            "languages": [
                {"code": "en", "greeting": "Hello!", "rtl": "false"},
                {"code": "ar", "greeting": "مرحبا!", "rtl": True},
                {"code": "he", "greeting": "שלום!", "rtl": 1},
            ]
        },
    )

    flags = {entry.code: entry.is_right_to_left for entry in document.language_entries()}

    assert flags == {"en": False, "ar": True, "he": False}
    assert "non-boolean rtl" in caplog.text


def test_text_lookup_and_templating(shell_content):
    assert shell_content.text("content.error.retryButton") == "Retry"
    assert (
        shell_content.text("content.error.messages.unknown", app="weather")
        == "Unknown application: weather"
    )
    assert shell_content.text("content.missing", fallback="x") == "x"
    assert shell_content.text("content.missing") == "content.missing"


def test_format_template_leaves_unknown_placeholders():
    assert format_template("{a} and {b}", {"a": 1}) == "1 and {b}"


def test_number_setting_falls_back(shell_content):
    assert shell_content.number_setting("loadingDelay", 1) == 300
    assert shell_content.number_setting("missing", 42) == 42

    document = ContentDocument("x", {"settings": {"delay": "soon", "flag": True, "n": "7"}})
    assert document.number_setting("delay", 5) == 5
    assert document.number_setting("flag", 5) == 5
    assert document.number_setting("n", 5) == 7.0


def test_document_data_is_read_only(shell_content):
    assert isinstance(shell_content.data, MappingProxyType)
    with pytest.raises(TypeError):
        shell_content.data["meta"]["title"] = "changed"


def test_missing_document(tmp_path):
    store = ContentStore(tmp_path)
    with pytest.raises(InitializationError) as exc_info:
        store.load_content("shell")
    assert exc_info.value.page_id == "shell"


@pytest.mark.parametrize(
    "payload",
    [b"{broken", b"[1, 2, 3]", b'{"meta": {"title": "\xff\xfe"}}'],
)
def test_invalid_document(tmp_path, payload):
    (tmp_path / "hello").mkdir()
    (tmp_path / "hello" / "hello.json").write_bytes(payload)

    with pytest.raises(InitializationError):
        ContentStore(tmp_path).load_content("hello")


def test_duplicate_navigation_ids_rejected():
    document = ContentDocument(
        "shell",
        {
            "content": {
                "navigation": [
                    {"id": "a", "path": "a.html"},
                    {"id": "a", "path": "b.html"},
                ]
            }
        },
    )
    with pytest.raises(InitializationError):
        document.route_table()


def test_malformed_entries_rejected():
    with pytest.raises(InitializationError):
        document = ContentDocument("shell", {"content": {"navigation": [{"title": "no id"}]}})
        document.navigation_entries()
    with pytest.raises(InitializationError):
        ContentDocument("shell", {"content": {}}).navigation_entries()
    with pytest.raises(InitializationError):
        ContentDocument("languages", {"languages": [{"code": "en"}]}).language_entries()
    with pytest.raises(InitializationError):
        ContentDocument(
            "languages",
            {"languages": [{"code": "en", "greeting": "a"}, {"code": "en", "greeting": "b"}]},
        ).language_entries()


def test_route_table_lookup():
    routes = RouteTable([NavigationEntry(id="a", path="a.html", title="A")])

    assert routes.lookup("a").path == "a.html"
    assert routes.lookup("b") is None
    assert routes.lookup(None) is None
    assert routes.page_ids == ("a",)
    assert len(routes) == 1


def test_site_json_is_valid(site_dir):
    for path in site_dir.glob("*/*.json"):
        assert isinstance(json.loads(path.read_text(encoding="utf-8")), dict)
