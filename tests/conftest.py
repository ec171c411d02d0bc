"""
pytest configuration and shared fixtures.

Qt tests run on the ``offscreen`` platform so no display is needed; they are
skipped when PyQt5 is not installed.
"""
import os

import pytest

# Must be set before any QApplication is created
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from fakes import FakeClock, FakeMapAsset, FakeProvider, ManualScheduler, RecordingSurface  # noqa: E402


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def map_asset():
    return FakeMapAsset(720, 500)


@pytest.fixture()
def provider():
    return FakeProvider({"site-a": 0, "site-b": 1})


@pytest.fixture()
def surface():
    return RecordingSurface()


@pytest.fixture(scope="session")
def qapp():
    QtWidgets = pytest.importorskip("PyQt5.QtWidgets")
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app
