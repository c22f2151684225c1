import threading

from savelog.config import Settings
from savelog.core.lifecycle import LifecycleBinder, LoadGuard, LoadState, load_plugin
from savelog.core.views import ACTION_SUBMIT
from savelog.ui.log_viewer import NO_LOG_MESSAGE
from tests.fakes import FakeDocument, FakeHost


def test_load_plugin_wires_menu_app_events_and_active_document(saved_doc) -> None:
    host = FakeHost(active=saved_doc)
    binder = load_plugin(host, Settings(), guard=LoadGuard())
    assert binder is not None
    assert host.app_listeners == [binder]
    assert host.document_listeners == [(saved_doc, binder)]
    assert [(m, label) for m, label, _ in host.menu_items] == [("Plugins", "View Project Change Log")]


def test_load_plugin_runs_once_per_guard() -> None:
    guard = LoadGuard()
    host = FakeHost(active=FakeDocument(""))
    assert load_plugin(host, guard=guard) is not None
    assert load_plugin(host, guard=guard) is None
    assert len(host.menu_items) == 1
    assert len(host.app_listeners) == 1
    assert guard.state is LoadState.INITIALIZED


def test_guard_admits_one_of_many_threads() -> None:
    guard = LoadGuard()
    wins = []
    threads = [threading.Thread(target=lambda: wins.append(guard.acquire())) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert wins.count(True) == 1


def test_created_and_opened_documents_get_save_observer() -> None:
    host = FakeHost()
    binder = LifecycleBinder(host)
    new_doc, opened_doc = FakeDocument(""), FakeDocument("/m/a.skp")
    binder.on_created(new_doc)
    binder.on_opened(opened_doc)
    assert host.document_listeners == [(new_doc, binder), (opened_doc, binder)]


def test_save_event_prompts_and_logs(saved_doc) -> None:
    host = FakeHost(active=saved_doc)
    load_plugin(host, guard=LoadGuard())
    host.save(saved_doc)
    assert len(host.dialogs) == 1
    host.dialogs[0].trigger(ACTION_SUBMIT, "- Added roof")
    with open(saved_doc.saved_path.replace(".skp", "_changelog.txt"), encoding="utf-8") as f:
        assert "- Added roof" in f.read()


def test_save_of_unsaved_document_does_not_prompt() -> None:
    doc = FakeDocument("")
    host = FakeHost(active=doc)
    load_plugin(host, guard=LoadGuard())
    host.save(doc)
    assert host.dialogs == []


def test_menu_action_opens_viewer_for_active_document(saved_doc) -> None:
    host = FakeHost(active=saved_doc)
    load_plugin(host, guard=LoadGuard())
    _menu, _label, action = host.menu_items[0]
    action()
    assert host.messages == [NO_LOG_MESSAGE]

    host.save(saved_doc)
    host.dialogs[0].trigger(ACTION_SUBMIT, "first")
    action()
    assert host.dialogs[-1].options.title == "Project Change Log"
