# SPDX-License-Identifier: Apache-2.0
"""Tests for the loader hosting native page widgets in the shell."""

import shutil

import pytest

from core.content.store import ContentStore
from core.shell.events import FrameInspection
from ui.greeting_widget import GreetingWidget
from ui.hello_widget import HelloWidget
from ui.page_loader import PageFrameLoader, default_page_factories

pytestmark = pytest.mark.ui


@pytest.fixture
def make_loader(qtbot, content_store, shell_content, scheduler, preferences):
    def _make(store=None, factories=None):
        store = store or content_store
        if factories is None:
            factories = default_page_factories(scheduler, preferences)
        loader = PageFrameLoader(
            store,
            shell_content.route_table(),
            factories,
            store.root_dir / "shell",
            store.root_dir,
        )
        loader.page_ready.connect(qtbot.addWidget)
        return loader

    return _make


@pytest.fixture
def routes(shell_content):
    return shell_content.route_table()


def test_languages_route_builds_cycling_page(qtbot, make_loader, routes, scheduler):
    loader = make_loader()
    pages = []
    loader.page_ready.connect(pages.append)

    with qtbot.waitSignal(loader.load_finished, timeout=2000) as blocker:
        loader.load(1, routes["languages"].path)

    assert blocker.args == [1, FrameInspection.OK]
    page = pages[0]
    assert isinstance(page, GreetingWidget)
    assert loader.current_page is page
    first = page.greeting_label.text()

    scheduler.advance(2000)

    assert page.greeting_label.text() != first
    loader.release_page()


def test_navigating_away_shuts_down_previous_page(qtbot, make_loader, routes, scheduler):
    loader = make_loader()
    pages = []
    loader.page_ready.connect(pages.append)

    with qtbot.waitSignal(loader.load_finished, timeout=2000):
        loader.load(1, routes["languages"].path)
    greeting_page = pages[0]

    with qtbot.waitSignal(loader.load_finished, timeout=2000):
        loader.load(2, routes["hello"].path)

    assert isinstance(pages[1], HelloWidget)
    assert greeting_page.cycler.state.is_auto_cycling is False
    shown = greeting_page.greeting_label.text()
    scheduler.advance(10000)
    assert greeting_page.greeting_label.text() == shown


def test_route_without_factory_renders_document(qtbot, make_loader, routes):
    loader = make_loader(factories={})
    pages = []
    documents = []
    loader.page_ready.connect(pages.append)
    loader.document_ready.connect(lambda html, path: documents.append(path))

    with qtbot.waitSignal(loader.load_finished, timeout=2000) as blocker:
        loader.load(3, routes["hello"].path)

    assert blocker.args == [3, FrameInspection.OK]
    assert pages == []
    assert documents[0].endswith("hello.html")


def test_missing_content_fails_load(qtbot, make_loader, routes, tmp_path, site_dir):
    site = tmp_path / "site"
    shutil.copytree(site_dir, site)
    (site / "languages" / "languages.json").unlink()
    loader = make_loader(store=ContentStore(site))

    with qtbot.waitSignal(loader.load_failed, timeout=2000) as blocker:
        loader.load(4, routes["languages"].path)

    assert blocker.args[0] == 4
    assert "languages" in blocker.args[1]
    assert loader.current_page is None


def test_superseded_load_builds_no_page(qtbot, make_loader, routes):
    loader = make_loader()
    pages = []
    finished = []
    loader.page_ready.connect(pages.append)
    loader.load_finished.connect(lambda token, inspection: finished.append(token))

    loader.load(1, routes["languages"].path)
    with qtbot.waitSignal(loader.load_finished, timeout=2000):
        loader.load(2, routes["hello"].path)

    assert finished == [2]
    assert len(pages) == 1
    assert isinstance(pages[0], HelloWidget)
