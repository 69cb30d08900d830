# SPDX-License-Identifier: Apache-2.0
"""Tests for the multi-language greeting page."""

import pytest

from config.constants import CYCLE_INTERVAL_KEY, LANGUAGES_PREFERENCE_NAMESPACE
from core.greeting.cycler import GreetingCycler
from ui.greeting_widget import GreetingWidget

pytestmark = pytest.mark.ui


@pytest.fixture
def widget(qtbot, languages_content, scheduler, preferences):
    cycler = GreetingCycler(languages_content, scheduler, preferences)
    widget = GreetingWidget(cycler)
    qtbot.addWidget(widget)
    widget.initialize()
    yield widget
    widget.shutdown()


def test_initial_render(widget):
    first = widget.cycler.languages[0]

    assert widget.window_title == widget.cycler.content.title
    assert widget.language_combo.count() == len(widget.cycler.languages)
    assert widget.language_combo.currentData() == first.code
    assert widget.greeting_label.text() == first.greeting_text
    assert widget.speed_value_label.text() == "2.0s"
    assert widget.speed_slider.value() == widget.position_for_seconds(2.0)
    assert widget.status_label.text() == widget.cycler.content.text("content.status.cycling")


def test_tick_updates_greeting_and_selector(widget, scheduler):
    second = widget.cycler.languages[1]

    scheduler.advance(2000)

    assert widget.greeting_label.text() == second.greeting_text
    assert widget.language_combo.currentData() == second.code


def test_choosing_language_stops_cycling(widget, scheduler):
    index = widget.cycler.index_of("ar")

    widget.language_combo.setCurrentIndex(index)
    widget.language_combo.activated.emit(index)
    scheduler.advance(10000)

    assert widget.cycler.current_language.code == "ar"
    assert widget.greeting_label.property("rtl") is True
    assert widget.status_label.text() == widget.cycler.content.text("content.status.manual")
    assert widget.cycler.state.is_auto_cycling is False


def test_slider_sets_interval(widget, preferences):
    widget.speed_slider.setValue(widget.position_for_seconds(4.5))

    assert widget.cycler.state.interval_seconds == 4.5
    assert widget.speed_value_label.text() == "4.5s"
    stored = preferences.get(CYCLE_INTERVAL_KEY, namespace=LANGUAGES_PREFERENCE_NAMESPACE)
    assert stored == 4.5


@pytest.mark.parametrize(
    "position, seconds",
    [(0, 1.0), (2, 2.0), (8, 5.0), (20, 5.0)],
)
def test_slider_positions(widget, position, seconds):
    assert widget.seconds_for_position(position) == seconds


def test_position_for_seconds_is_bounded(widget):
    assert widget.position_for_seconds(0.0) == 0
    assert widget.position_for_seconds(9.0) == widget.speed_slider.maximum()
