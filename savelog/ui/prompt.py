from __future__ import annotations

import enum
import logging
from datetime import datetime
from typing import Callable, Optional

from savelog.config import Settings
from savelog.core.commands import CommandTable, apply_effects, prompt_commands
from savelog.core.errors import UnknownAction
from savelog.core.host import STYLE_DIALOG, DialogOptions, DialogSurface, Document, Host
from savelog.core.paths import resolve_log_path
from savelog.core.store import LogStore
from savelog.core.views import ACTION_SUBMIT, PromptView, render_prompt

logger = logging.getLogger(__name__)


class PromptState(enum.Enum):
    IDLE = "idle"
    SHOWN = "shown"
    SUBMITTED = "submitted"
    CANCELLED = "cancelled"
    CLOSED = "closed"


class CommitPrompt:
    """
    Asks "what changed?" after a save and appends the answer to the change log.

    One instance per save event. show() returns as soon as the dialog is up;
    the rest happens in the dialog's action callbacks.
    """

    def __init__(
        self,
        host: Host,
        settings: Optional[Settings] = None,
        store: Optional[LogStore] = None,
        now: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.host = host
        self.settings = settings or Settings()
        self.store = store or LogStore()
        self.now = now
        self.state = PromptState.IDLE
        self.log_path: Optional[str] = None
        self.dialog: Optional[DialogSurface] = None
        self.commands: Optional[CommandTable] = None

    def _options(self) -> DialogOptions:
        return DialogOptions(
            title="Commit Changes",
            preferences_key="com.savelog.commit_log_input",
            width=self.settings.prompt_width,
            height=self.settings.prompt_height,
            resizable=True,
            scrollable=False,
            style=STYLE_DIALOG,
        )

    def show(self, document: Document) -> bool:
        if self.state is not PromptState.IDLE:
            return False
        log_path = resolve_log_path(document, self.settings)
        if not log_path:
            logger.debug("Skipping commit prompt for unsaved document.")
            return False

        self.log_path = log_path
        self.commands = prompt_commands(log_path)
        dialog = self.host.create_dialog(self._options())
        self.dialog = dialog
        dialog.set_html(render_prompt(PromptView()))
        for action in self.commands.actions():
            dialog.add_action_callback(action, lambda payload, a=action: self.handle(a, payload))
        dialog.set_on_closed(self._on_closed)
        dialog.center()
        self.state = PromptState.SHOWN
        dialog.show()
        return True

    def handle(self, action: str, payload: str = "") -> None:
        if self.state is not PromptState.SHOWN:
            logger.debug("Ignoring %r, prompt is %s.", action, self.state.value)
            return
        try:
            effects = self.commands.dispatch(action, payload)
        except UnknownAction as exc:
            logger.warning("%s", exc)
            return

        # Leave SHOWN before the effects run so the close they trigger is not
        # taken for the user dismissing the window.
        self.state = PromptState.SUBMITTED if action == ACTION_SUBMIT else PromptState.CANCELLED
        ok = apply_effects(
            effects,
            store=self.store,
            host=self.host,
            dialog=self.dialog,
            user_env_vars=self.settings.user_env_vars,
            now=self.now,
        )
        if not ok:
            # Keep the dialog open so the message is not lost.
            self.state = PromptState.SHOWN
            return
        self.state = PromptState.CLOSED

    def _on_closed(self) -> None:
        if self.state is PromptState.SHOWN:
            self.state = PromptState.CANCELLED
        self.state = PromptState.CLOSED
        self.dialog = None
