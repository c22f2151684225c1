"""
store.py

Append-only change log file next to a saved document.

Each entry is written as:

  \\n[YYYY-MM-DD HH:MM:SS] User: <name> - Save Commit:\\n<message>\\n<40 dashes>

Entries are never parsed back; the viewer only ever sees the raw text.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Mapping, Optional

from savelog.config import DEFAULT_USER_ENV_VARS
from .errors import LogFileNotFound, LogIOFailure

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
ENTRY_SEPARATOR = "-" * 40
UNKNOWN_USER = "Unknown"


@dataclass(frozen=True)
class LogEntry:
    timestamp: datetime
    author: str
    message: str

    def serialize(self) -> str:
        stamp = self.timestamp.strftime(TIMESTAMP_FORMAT)
        return f"\n[{stamp}] User: {self.author} - Save Commit:\n{self.message}\n{ENTRY_SEPARATOR}"


def resolve_username(
    environ: Optional[Mapping[str, str]] = None,
    names: Iterable[str] = DEFAULT_USER_ENV_VARS,
) -> str:
    env = os.environ if environ is None else environ
    for name in names:
        value = env.get(name)
        if value:
            return value
    return UNKNOWN_USER


def make_entry(
    message: str,
    now: Optional[datetime] = None,
    environ: Optional[Mapping[str, str]] = None,
    names: Iterable[str] = DEFAULT_USER_ENV_VARS,
) -> LogEntry:
    return LogEntry(
        timestamp=now or datetime.now(),
        author=resolve_username(environ, names),
        message=message,
    )


class LogStore:
    # newline="" everywhere: entries and edits hit the disk byte for byte.

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def append(self, path: str, entry: LogEntry) -> None:
        try:
            with open(path, "a", encoding="utf-8", newline="") as f:
                f.write(entry.serialize())
        except OSError as exc:
            raise LogIOFailure("append to", path, exc) from exc

    def read_all(self, path: str) -> str:
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                return f.read()
        except FileNotFoundError as exc:
            raise LogFileNotFound(path) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise LogIOFailure("read", path, exc) from exc

    def overwrite(self, path: str, content: str) -> None:
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as exc:
            raise LogIOFailure("write", path, exc) from exc
