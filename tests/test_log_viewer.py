import os

from savelog.core.commands import LOG_SAVED_MESSAGE
from savelog.core.views import ACTION_SAVE_LOG
from savelog.ui.log_viewer import NO_LOG_MESSAGE, LogViewer
from tests.fakes import FakeDocument


def _write_log(doc, text: str) -> str:
    path = doc.saved_path.replace(".skp", "_changelog.txt")
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    return path


def test_unsaved_document_shows_message(host) -> None:
    assert LogViewer(host).open(FakeDocument("")) is False
    assert host.messages == [NO_LOG_MESSAGE]
    assert host.dialogs == []


def test_missing_log_shows_message_and_creates_nothing(host, saved_doc) -> None:
    assert LogViewer(host).open(saved_doc) is False
    assert host.messages == [NO_LOG_MESSAGE]
    assert not os.path.exists(saved_doc.saved_path.replace(".skp", "_changelog.txt"))


def test_no_active_document_shows_message(host) -> None:
    assert LogViewer(host).open(None) is False
    assert host.messages == [NO_LOG_MESSAGE]


def test_viewer_shows_title_and_content(host, saved_doc) -> None:
    _write_log(saved_doc, "\n[2024-01-01 00:00:00] User: a - Save Commit:\n$x\n" + "-" * 40)
    viewer = LogViewer(host)
    assert viewer.open(saved_doc)
    dialog = host.dialogs[0]
    assert dialog.options.title == "Project Change Log"
    assert (dialog.options.width, dialog.options.height) == (600, 500)
    assert "Project History (house.skp)" in dialog.html
    assert "\\$x" in dialog.html
    assert viewer.view.content.endswith("-" * 40)


def test_opening_twice_shows_identical_content(host, saved_doc) -> None:
    _write_log(saved_doc, "some history")
    LogViewer(host).open(saved_doc)
    LogViewer(host).open(saved_doc)
    assert host.dialogs[0].html == host.dialogs[1].html


def test_save_edits_overwrites_verbatim(host, saved_doc) -> None:
    path = _write_log(saved_doc, "old content")
    LogViewer(host).open(saved_doc)
    host.dialogs[0].trigger(ACTION_SAVE_LOG, "X")
    with open(path, encoding="utf-8", newline="") as f:
        assert f.read() == "X"
    assert host.messages == [LOG_SAVED_MESSAGE]
    assert not host.dialogs[0].closed
