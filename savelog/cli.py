"""
cli.py

Single entrypoint for the change log recorder:

  - path: show where a document's change log lives
  - log:  append an entry without opening a dialog
  - show: print a document's change log
  - app:  start the PySide6 editor with the plugin loaded

Examples:
  python -m savelog path models/house.skp
  python -m savelog log models/house.skp -m "- Added roof"
  python -m savelog show models/house.skp
  python -m savelog app models/house.skp

Notes:
- The document path is used as given (made absolute), exactly as the host
  would report it after a save.
- --settings overrides the settings file (default ~/.savelog/settings.json
  or $SAVELOG_SETTINGS).
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from savelog.config import load_settings
from savelog.core.errors import ChangelogError, LogFileNotFound, UnsavedDocument
from savelog.core.paths import changelog_path_for
from savelog.core.store import LogStore, make_entry
from savelog.logging_setup import configure_logging
from savelog.ui.log_viewer import NO_LOG_MESSAGE


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="savelog", add_help=True)
    p.add_argument("--settings", default="", help="Path to settings.json")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_path = sub.add_parser("path", help="Print the change log path for a saved document")
    p_path.add_argument("document", help="Saved document path")

    p_log = sub.add_parser("log", help="Append a change log entry for a saved document")
    p_log.add_argument("document", help="Saved document path")
    p_log.add_argument("-m", "--message", default="", help="What changed (may be empty)")

    p_show = sub.add_parser("show", help="Print a document's change log")
    p_show.add_argument("document", help="Saved document path")

    p_app = sub.add_parser("app", help="Start the editor with the change log plugin")
    p_app.add_argument("document", nargs="?", default="", help="Document to open at startup")

    return p


def _log_path(document: str, settings) -> str:
    saved = os.path.abspath(document) if document else ""
    log_path = changelog_path_for(
        saved,
        document_suffix=settings.document_suffix,
        changelog_suffix=settings.changelog_suffix,
    )
    if not log_path:
        raise UnsavedDocument(
            f"No change log possible for {document!r} (expected a saved *{settings.document_suffix} file)."
        )
    return log_path


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args.settings or None)
    configure_logging(settings.log_level)

    if args.cmd == "app":
        # Import lazily so the other commands work without QtWebEngine.
        from savelog.ui.qt_host import run_app

        return run_app(args.document or None, settings)

    store = LogStore()
    try:
        log_path = _log_path(args.document, settings)
        if args.cmd == "path":
            print(log_path)
        elif args.cmd == "log":
            store.append(log_path, make_entry(args.message, names=settings.user_env_vars))
            print(f"Log updated at {log_path}")
        elif args.cmd == "show":
            try:
                sys.stdout.write(store.read_all(log_path))
            except LogFileNotFound:
                print(NO_LOG_MESSAGE, file=sys.stderr)
                return 1
            sys.stdout.write("\n")
    except ChangelogError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
