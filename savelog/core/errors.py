from __future__ import annotations


class ChangelogError(Exception):
    """Base class for everything the changelog recorder raises on purpose."""


class UnsavedDocument(ChangelogError):
    def __init__(self, message: str = "Document has not been saved yet.") -> None:
        super().__init__(message)


class LogFileNotFound(ChangelogError, FileNotFoundError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Change log not found: {path}")
        self.path = path


class LogIOFailure(ChangelogError, OSError):
    def __init__(self, action: str, path: str, reason: object) -> None:
        super().__init__(f"Could not {action} change log {path}: {reason}")
        self.action = action
        self.path = path


class UnknownAction(ChangelogError, KeyError):
    def __init__(self, action: str) -> None:
        super().__init__(action)
        self.action = action

    def __str__(self) -> str:
        return f"Unknown dialog action: {self.action}"
