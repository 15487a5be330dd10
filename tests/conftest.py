import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from datetime import date

import pytest
from PyQt6.QtWidgets import QApplication

from muuttotimeline.layout import TimelineLayout
from muuttotimeline.model import TimelineItem
from muuttotimeline.scale import TimelineRange


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def winter_range():
    return TimelineRange(date(2025, 1, 1), date(2025, 3, 1))


@pytest.fixture
def pinned_layout(winter_range):
    def build(items, px_per_day=20, anchor_date=None, **kwargs):
        layout = TimelineLayout(px_per_day=px_per_day, **kwargs)
        layout.pin_range(winter_range)
        layout.rebuild(items, anchor_date)
        return layout

    return build


@pytest.fixture
def make_item():
    def build(item_id, title="Kartons packen", due_date=None, **kwargs):
        return TimelineItem(id=item_id, title=title, due_date=due_date, **kwargs)

    return build
