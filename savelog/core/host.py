"""
What the changelog recorder needs from the application it lives in.

A host adapter implements Host and DialogSurface; lifecycle listeners implement
DocumentEvents. Nothing in savelog.core imports a GUI toolkit.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

STYLE_DIALOG = "dialog"
STYLE_WINDOW = "window"


class Document(Protocol):
    saved_path: str


@dataclass(frozen=True)
class DialogOptions:
    title: str
    preferences_key: str
    width: int
    height: int
    resizable: bool = True
    scrollable: bool = True
    style: str = STYLE_DIALOG


class DocumentEvents(ABC):
    @abstractmethod
    def on_created(self, document: Document) -> None:
        ...

    @abstractmethod
    def on_opened(self, document: Document) -> None:
        ...

    @abstractmethod
    def on_post_save(self, document: Document) -> None:
        """Called only after the document has been written to disk."""


class DialogSurface(ABC):
    @abstractmethod
    def set_html(self, html: str) -> None:
        ...

    @abstractmethod
    def add_action_callback(self, name: str, handler: Callable[[str], None]) -> None:
        ...

    @abstractmethod
    def set_on_closed(self, callback: Callable[[], None]) -> None:
        """Run callback once when the surface closes, whoever closed it."""

    @abstractmethod
    def center(self) -> None:
        ...

    @abstractmethod
    def show(self) -> None:
        """Display without blocking; actions arrive later as callbacks."""

    @abstractmethod
    def close(self) -> None:
        ...


class Host(ABC):
    @abstractmethod
    def active_document(self) -> Optional[Document]:
        ...

    @abstractmethod
    def subscribe_app(self, listener: DocumentEvents) -> None:
        """Deliver created/opened events for documents that appear from now on."""

    @abstractmethod
    def subscribe_document(self, document: Document, listener: DocumentEvents) -> None:
        """Deliver post-save events for one document."""

    @abstractmethod
    def add_menu_item(self, menu: str, label: str, action: Callable[[], None]) -> None:
        ...

    @abstractmethod
    def create_dialog(self, options: DialogOptions) -> DialogSurface:
        ...

    @abstractmethod
    def message_box(self, text: str) -> None:
        ...
