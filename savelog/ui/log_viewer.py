from __future__ import annotations

import logging
import os
from typing import Optional

from savelog.config import Settings
from savelog.core.commands import CommandTable, apply_effects, viewer_commands
from savelog.core.errors import LogFileNotFound, LogIOFailure, UnknownAction
from savelog.core.host import STYLE_WINDOW, DialogOptions, DialogSurface, Document, Host
from savelog.core.paths import resolve_log_path
from savelog.core.store import LogStore
from savelog.core.views import ViewerView, render_viewer

logger = logging.getLogger(__name__)

NO_LOG_MESSAGE = "No log file found. Save the model to start a log."


class LogViewer:
    def __init__(self, host: Host, settings: Optional[Settings] = None, store: Optional[LogStore] = None) -> None:
        self.host = host
        self.settings = settings or Settings()
        self.store = store or LogStore()
        self.log_path: Optional[str] = None
        self.dialog: Optional[DialogSurface] = None
        self.commands: Optional[CommandTable] = None
        self.view: Optional[ViewerView] = None

    def _options(self) -> DialogOptions:
        return DialogOptions(
            title="Project Change Log",
            preferences_key="com.savelog.commit_log_viewer",
            width=self.settings.viewer_width,
            height=self.settings.viewer_height,
            resizable=True,
            style=STYLE_WINDOW,
        )

    def open(self, document: Optional[Document]) -> bool:
        log_path = resolve_log_path(document, self.settings) if document is not None else None
        if not log_path or not self.store.exists(log_path):
            self.host.message_box(NO_LOG_MESSAGE)
            return False

        try:
            content = self.store.read_all(log_path)
        except LogFileNotFound:
            self.host.message_box(NO_LOG_MESSAGE)
            return False
        except LogIOFailure as exc:
            logger.error("%s", exc)
            self.host.message_box(str(exc))
            return False

        self.log_path = log_path
        self.view = ViewerView(document_name=os.path.basename(document.saved_path), content=content)
        self.commands = viewer_commands(log_path)
        dialog = self.host.create_dialog(self._options())
        self.dialog = dialog
        dialog.set_html(render_viewer(self.view))
        for action in self.commands.actions():
            dialog.add_action_callback(action, lambda payload, a=action: self.handle(a, payload))
        dialog.set_on_closed(self._on_closed)
        dialog.center()
        dialog.show()
        return True

    def handle(self, action: str, payload: str = "") -> bool:
        if self.commands is None:
            return False
        try:
            effects = self.commands.dispatch(action, payload)
        except UnknownAction as exc:
            logger.warning("%s", exc)
            return False
        return apply_effects(
            effects,
            store=self.store,
            host=self.host,
            dialog=self.dialog,
            user_env_vars=self.settings.user_env_vars,
        )

    def _on_closed(self) -> None:
        self.dialog = None
        self.commands = None
