from __future__ import annotations

import enum
import logging
import threading
from typing import List, Optional

from savelog.config import Settings
from savelog.ui.log_viewer import LogViewer
from savelog.ui.prompt import CommitPrompt, PromptState
from .host import Document, DocumentEvents, Host
from .store import LogStore

logger = logging.getLogger(__name__)


class LoadState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


class LoadGuard:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.state = LoadState.UNINITIALIZED

    def acquire(self) -> bool:
        """Move to INITIALIZED; True only for the caller that made the move."""
        with self._lock:
            if self.state is LoadState.INITIALIZED:
                return False
            self.state = LoadState.INITIALIZED
            return True


PROCESS_GUARD = LoadGuard()


class LifecycleBinder(DocumentEvents):
    def __init__(self, host: Host, settings: Optional[Settings] = None, store: Optional[LogStore] = None) -> None:
        self.host = host
        self.settings = settings or Settings()
        self.store = store or LogStore()
        self.prompts: List[CommitPrompt] = []
        self.viewer: Optional[LogViewer] = None

    def attach(self, document: Document) -> None:
        self.host.subscribe_document(document, self)

    def on_created(self, document: Document) -> None:
        self.attach(document)

    def on_opened(self, document: Document) -> None:
        self.attach(document)

    def on_post_save(self, document: Document) -> None:
        self.prompts = [p for p in self.prompts if p.state is PromptState.SHOWN]
        prompt = CommitPrompt(self.host, self.settings, self.store)
        if prompt.show(document):
            self.prompts.append(prompt)

    def open_viewer(self) -> None:
        self.viewer = LogViewer(self.host, self.settings, self.store)
        self.viewer.open(self.host.active_document())


def load_plugin(
    host: Host,
    settings: Optional[Settings] = None,
    guard: LoadGuard = PROCESS_GUARD,
) -> Optional[LifecycleBinder]:
    if not guard.acquire():
        logger.debug("Change log plugin already loaded.")
        return None

    settings = settings or Settings()
    binder = LifecycleBinder(host, settings)
    host.add_menu_item(settings.menu_name, settings.menu_label, binder.open_viewer)
    host.subscribe_app(binder)
    # Hosts do not replay created/opened for the document open at startup.
    active = host.active_document()
    if active is not None:
        binder.attach(active)
    logger.info("Change log plugin loaded.")
    return binder
