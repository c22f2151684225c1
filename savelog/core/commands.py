"""
Dialog actions as data.

Each dialog gets a CommandTable mapping action ids to pure handlers. A handler
turns the action payload into a tuple of effects; apply_effects is the only
place those effects touch the filesystem or the host.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple, Union

from savelog.config import DEFAULT_USER_ENV_VARS
from .errors import LogIOFailure, UnknownAction
from .host import DialogSurface, Host
from .store import LogStore, make_entry
from .views import ACTION_CANCEL, ACTION_SAVE_LOG, ACTION_SUBMIT

logger = logging.getLogger(__name__)

LOG_SAVED_MESSAGE = "Log updated successfully."


@dataclass(frozen=True)
class AppendEntry:
    path: str
    message: str


@dataclass(frozen=True)
class OverwriteLog:
    path: str
    content: str


@dataclass(frozen=True)
class ShowMessage:
    text: str


@dataclass(frozen=True)
class CloseDialog:
    pass


Effect = Union[AppendEntry, OverwriteLog, ShowMessage, CloseDialog]
Handler = Callable[[str], Tuple[Effect, ...]]


class CommandTable:
    def __init__(self, handlers: Optional[Mapping[str, Handler]] = None) -> None:
        self._handlers: Dict[str, Handler] = dict(handlers or {})

    def actions(self) -> list[str]:
        return list(self._handlers)

    def dispatch(self, action: str, payload: str = "") -> Tuple[Effect, ...]:
        try:
            handler = self._handlers[action]
        except KeyError:
            raise UnknownAction(action) from None
        return handler(payload if payload is not None else "")


def prompt_commands(log_path: str) -> CommandTable:
    return CommandTable(
        {
            ACTION_SUBMIT: lambda message: (AppendEntry(log_path, message), CloseDialog()),
            ACTION_CANCEL: lambda _payload: (CloseDialog(),),
        }
    )


def viewer_commands(log_path: str) -> CommandTable:
    return CommandTable(
        {
            ACTION_SAVE_LOG: lambda content: (
                OverwriteLog(log_path, content),
                ShowMessage(LOG_SAVED_MESSAGE),
            ),
        }
    )


def apply_effects(
    effects: Iterable[Effect],
    *,
    store: LogStore,
    host: Host,
    dialog: Optional[DialogSurface] = None,
    user_env_vars: Iterable[str] = DEFAULT_USER_ENV_VARS,
    now: Optional[Callable[[], datetime]] = None,
) -> bool:
    """
    Carry out effects in order. Returns False if a write failed; the failure is
    shown to the user and the effects after it are skipped.
    """
    for effect in effects:
        try:
            if isinstance(effect, AppendEntry):
                entry = make_entry(effect.message, now=now() if now else None, names=user_env_vars)
                store.append(effect.path, entry)
                logger.info("Log updated at %s", effect.path)
            elif isinstance(effect, OverwriteLog):
                store.overwrite(effect.path, effect.content)
                logger.info("Log rewritten at %s", effect.path)
            elif isinstance(effect, ShowMessage):
                host.message_box(effect.text)
            elif isinstance(effect, CloseDialog):
                if dialog is not None:
                    dialog.close()
        except LogIOFailure as exc:
            logger.error("%s", exc)
            host.message_box(str(exc))
            return False
    return True
