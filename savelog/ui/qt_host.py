"""
Standalone PySide6 host for the change log plugin.

A plain-text document editor with New/Open/Save/Save As and a Plugins menu.
Dialogs are HTML pages shown in QtWebEngine; pages reach Python through a
QWebChannel object exposed as savelogCall(action, payload).
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

from PySide6.QtCore import QByteArray, QFile, QIODevice, QObject, Qt, Slot
from PySide6.QtWebChannel import QWebChannel
from PySide6.QtWebEngineCore import QWebEngineScript, QWebEngineSettings
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QApplication,
    QDialog,
    QFileDialog,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QVBoxLayout,
)

from savelog.config import Settings, load_settings, settings_path
from savelog.core.host import STYLE_DIALOG, DialogOptions, DialogSurface, Document, DocumentEvents, Host
from savelog.core.lifecycle import load_plugin
from savelog.logging_setup import configure_logging

logger = logging.getLogger(__name__)

APP_TITLE = "savelog"

_BRIDGE_BOOTSTRAP = """
(function () {
  var pending = [];
  var bridge = null;
  window.savelogCall = function (action, payload) {
    var text = payload === undefined || payload === null ? "" : String(payload);
    if (bridge) { bridge.call(action, text); } else { pending.push([action, text]); }
  };
  new QWebChannel(qt.webChannelTransport, function (channel) {
    bridge = channel.objects.savelog;
    pending.forEach(function (item) { bridge.call(item[0], item[1]); });
    pending = [];
  });
})();
"""


def _windows_path() -> Path:
    return settings_path().with_name("windows.json")


def load_window_geometry(key: str) -> Optional[QByteArray]:
    path = _windows_path()
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    encoded = data.get(key) if isinstance(data, dict) else None
    if not isinstance(encoded, str) or not encoded:
        return None
    return QByteArray.fromBase64(encoded.encode("ascii"))


def save_window_geometry(key: str, geometry: QByteArray) -> None:
    path = _windows_path()
    data = {}
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            data = {}
    if not isinstance(data, dict):
        data = {}
    data[key] = bytes(geometry.toBase64()).decode("ascii")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    except OSError as exc:
        logger.warning("Could not remember window size for %s: %s", key, exc)


def _web_channel_script() -> str:
    qfile = QFile(":/qtwebchannel/qwebchannel.js")
    if not qfile.open(QIODevice.ReadOnly):
        raise RuntimeError("qwebchannel.js is missing from the Qt resources.")
    try:
        return bytes(qfile.readAll()).decode("utf-8")
    finally:
        qfile.close()


class QtDocument:
    def __init__(self, saved_path: str = "", text: str = "") -> None:
        self.saved_path = saved_path
        self.text = text

    def __repr__(self) -> str:
        return f"QtDocument({self.saved_path!r})"


class _ActionBridge(QObject):
    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.handlers: Dict[str, Callable[[str], None]] = {}

    @Slot(str, str)
    def call(self, action: str, payload: str) -> None:
        handler = self.handlers.get(action)
        if handler is None:
            logger.warning("No handler for dialog action %r.", action)
            return
        handler(payload)


class QtHtmlDialog(QDialog):
    def __init__(self, options: DialogOptions, parent=None) -> None:
        super().__init__(parent)
        self.options = options
        self.on_closed: Optional[Callable[[], None]] = None
        self.closed = False
        self.setAttribute(Qt.WA_DeleteOnClose, True)
        self.setWindowTitle(options.title)
        self.resize(options.width, options.height)
        if not options.resizable:
            self.setFixedSize(options.width, options.height)
        if options.style == STYLE_DIALOG:
            self.setWindowModality(Qt.WindowModal)
        else:
            self.setWindowFlag(Qt.Window, True)
            self.setWindowFlag(Qt.WindowMinMaxButtonsHint, True)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.view = QWebEngineView(self)
        if not options.scrollable:
            self.view.page().settings().setAttribute(QWebEngineSettings.WebAttribute.ShowScrollBars, False)
        layout.addWidget(self.view)

        self.bridge = _ActionBridge(self)
        self.channel = QWebChannel(self)
        self.channel.registerObject("savelog", self.bridge)
        self.view.page().setWebChannel(self.channel)

        script = QWebEngineScript()
        script.setName("savelog-bridge")
        script.setSourceCode(_web_channel_script() + _BRIDGE_BOOTSTRAP)
        script.setInjectionPoint(QWebEngineScript.DocumentCreation)
        script.setWorldId(QWebEngineScript.MainWorld)
        script.setRunsOnSubFrames(False)
        self.view.page().scripts().insert(script)

        geometry = load_window_geometry(options.preferences_key)
        if geometry and options.resizable:
            self.restoreGeometry(geometry)

    def done(self, result: int) -> None:
        self._finish()
        super().done(result)

    def closeEvent(self, event) -> None:
        self._finish()
        super().closeEvent(event)

    def _finish(self) -> None:
        if self.closed:
            return
        self.closed = True
        save_window_geometry(self.options.preferences_key, self.saveGeometry())
        callback, self.on_closed = self.on_closed, None
        if callback is not None:
            callback()


class QtDialogSurface(DialogSurface):
    def __init__(self, options: DialogOptions, parent=None) -> None:
        self.widget = QtHtmlDialog(options, parent)
        self.closed = False
        self._callback: Optional[Callable[[], None]] = None
        self.widget.on_closed = self._closed_by_widget

    def _closed_by_widget(self) -> None:
        self.closed = True
        if self._callback is not None:
            self._callback()

    def set_html(self, html: str) -> None:
        self.widget.view.setHtml(html)

    def add_action_callback(self, name: str, handler: Callable[[str], None]) -> None:
        self.widget.bridge.handlers[name] = handler

    def set_on_closed(self, callback: Callable[[], None]) -> None:
        self._callback = callback

    def center(self) -> None:
        parent = self.widget.parentWidget()
        if parent is not None:
            area = parent.frameGeometry()
        else:
            area = QApplication.primaryScreen().availableGeometry()
        frame = self.widget.frameGeometry()
        frame.moveCenter(area.center())
        self.widget.move(frame.topLeft())

    def show(self) -> None:
        self.widget.show()
        self.widget.raise_()

    def close(self) -> None:
        if not self.closed:
            self.widget.close()


class QtHost(Host):
    def __init__(self, window: Optional["EditorWindow"] = None) -> None:
        self.window = window
        self.document: Optional[QtDocument] = None
        self.app_listeners: List[DocumentEvents] = []
        self.document_listeners: Dict[int, List[DocumentEvents]] = {}

    def active_document(self) -> Optional[Document]:
        return self.document

    def subscribe_app(self, listener: DocumentEvents) -> None:
        self.app_listeners.append(listener)

    def subscribe_document(self, document: Document, listener: DocumentEvents) -> None:
        self.document_listeners.setdefault(id(document), []).append(listener)

    def add_menu_item(self, menu: str, label: str, action: Callable[[], None]) -> None:
        if self.window is None:
            raise RuntimeError("Menus need an editor window.")
        self.window.menu(menu).addAction(label, action)

    def create_dialog(self, options: DialogOptions) -> DialogSurface:
        return QtDialogSurface(options, self.window)

    def message_box(self, text: str) -> None:
        QMessageBox.information(self.window, APP_TITLE, text)

    # Events the editor raises.

    def set_active(self, document: QtDocument) -> None:
        if self.document is not None and self.document is not document:
            self.document_listeners.pop(id(self.document), None)
        self.document = document

    def document_created(self, document: QtDocument) -> None:
        self.set_active(document)
        for listener in list(self.app_listeners):
            listener.on_created(document)

    def document_opened(self, document: QtDocument) -> None:
        self.set_active(document)
        for listener in list(self.app_listeners):
            listener.on_opened(document)

    def document_saved(self, document: QtDocument) -> None:
        for listener in list(self.document_listeners.get(id(document), [])):
            listener.on_post_save(document)


class EditorWindow(QMainWindow):
    def __init__(self, settings: Optional[Settings] = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self.host = QtHost(self)
        self._menus = {}
        self.resize(900, 650)

        self.editor = QPlainTextEdit()
        self.editor.setPlaceholderText("Model notes...")
        self.setCentralWidget(self.editor)

        file_menu = self.menu("File")
        file_menu.addAction("New", self.new_document)
        file_menu.addAction("Open...", self.open_document)
        file_menu.addAction("Save", self.save_document)
        file_menu.addAction("Save As...", self.save_document_as)

        self.host.set_active(QtDocument())
        self._refresh_title()

    def menu(self, name: str):
        if name not in self._menus:
            self._menus[name] = self.menuBar().addMenu(name)
        return self._menus[name]

    def _refresh_title(self) -> None:
        doc = self.host.document
        name = os.path.basename(doc.saved_path) if doc and doc.saved_path else "Untitled"
        self.setWindowTitle(f"{name} - {APP_TITLE}")

    def _file_filter(self) -> str:
        suffix = self.settings.document_suffix
        return f"Models (*{suffix});;All Files (*)"

    def load_path(self, path: str, *, notify: bool = True) -> None:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        doc = QtDocument(saved_path=os.path.abspath(path), text=text)
        self.editor.setPlainText(text)
        if notify:
            self.host.document_opened(doc)
        else:
            self.host.set_active(doc)
        self._refresh_title()

    def new_document(self) -> None:
        self.editor.clear()
        self.host.document_created(QtDocument())
        self._refresh_title()

    def open_document(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Open Model", "", self._file_filter())
        if not path:
            return
        try:
            self.load_path(path)
        except (OSError, UnicodeDecodeError) as exc:
            QMessageBox.critical(self, "Open", f"Failed to open {path}: {exc}")

    def save_document(self) -> None:
        doc = self.host.document
        if doc is None or not doc.saved_path:
            self.save_document_as()
            return
        self._write(doc, doc.saved_path)

    def save_document_as(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self, "Save Model", f"untitled{self.settings.document_suffix}", self._file_filter()
        )
        if not path:
            return
        self._write(self.host.document, path)

    def _write(self, doc: QtDocument, path: str) -> None:
        text = self.editor.toPlainText()
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as exc:
            QMessageBox.critical(self, "Save", f"Failed to save {path}: {exc}")
            return
        doc.saved_path = os.path.abspath(path)
        doc.text = text
        self._refresh_title()
        self.host.document_saved(doc)


def run_app(path: Optional[str] = None, settings: Optional[Settings] = None) -> int:
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    QApplication.setAttribute(Qt.AA_ShareOpenGLContexts)
    app = QApplication.instance() or QApplication(sys.argv)
    win = EditorWindow(settings)
    if path:
        # The startup document arrives before any observer exists.
        win.load_path(path, notify=False)
    load_plugin(win.host, settings)
    win.show()
    return app.exec()
