"""Shared fixtures for the indicator tests."""

import threading

import pytest

from dispatcher import UiDispatcher
from errors import UiDispatchFailure
from layout import PAD_CHAR, LabelFormatter
from menu import MenuProjector
from symbols import SymbolRegistry

# Pixel widths per character; anything else is 8px wide
CHAR_WIDTHS = {
    "A": 9, "P": 8, "L": 7, "G": 10, "O": 10, "I": 3, "M": 12, "W": 13,
    PAD_CHAR: 5,
}


class FakeMeasurer:
    def __init__(self, widths=None, default=8):
        self.widths = dict(CHAR_WIDTHS if widths is None else widths)
        self.default = default
        self.calls = 0

    def measure(self, text):
        self.calls += 1
        return sum(self.widths.get(ch, self.default) for ch in text)


class FakeRow:
    def __init__(self, text):
        self.text = text


class FakeSurface:
    """Records row mutations and the thread each one happened on."""

    def __init__(self):
        self.rows = []
        self.mutation_threads = set()
        self.disposed = False
        self.clear_count = 0

    def _touch(self):
        if self.disposed:
            raise UiDispatchFailure("surface disposed")
        self.mutation_threads.add(threading.get_ident())

    def create_row(self, text):
        self._touch()
        row = FakeRow(text)
        self.rows.append(row)
        return row

    def set_row_text(self, row, text):
        self._touch()
        row.text = text

    def clear_all_rows(self):
        self._touch()
        self.clear_count += 1
        self.rows = []

    @property
    def texts(self):
        return [row.text for row in self.rows]


@pytest.fixture
def measurer():
    return FakeMeasurer()


@pytest.fixture
def formatter(measurer):
    return LabelFormatter(measurer)


@pytest.fixture
def surface():
    return FakeSurface()


@pytest.fixture
def dispatcher():
    return UiDispatcher(maxsize=16)


@pytest.fixture
def registry():
    return SymbolRegistry()


@pytest.fixture
def projector(surface, formatter, registry):
    projector = MenuProjector(surface, formatter)
    registry.subscribe(projector.rebuild)
    return projector


@pytest.fixture
def settings_db(tmp_path, monkeypatch):
    """Points the settings store at a temporary directory and initializes it."""
    import database as db

    monkeypatch.setenv("APPDATA", str(tmp_path))
    db.initialize_database()
    return db
