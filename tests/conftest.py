import os
import sys

import pytest

# Ensure repo root is on sys.path for test discovery
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from tests.fakes import FakeDocument, FakeHost


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def saved_doc(tmp_path):
    model = tmp_path / "house.skp"
    model.write_text("model", encoding="utf-8")
    return FakeDocument(str(model))


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.setenv("SAVELOG_SETTINGS", str(tmp_path / "settings" / "settings.json"))
    monkeypatch.setenv("USERNAME", "tester")
