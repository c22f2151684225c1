from __future__ import annotations

import logging
from typing import Optional

from savelog.config import DEFAULT_CHANGELOG_SUFFIX, DEFAULT_DOCUMENT_SUFFIX

logger = logging.getLogger(__name__)


def changelog_path_for(
    saved_path: str,
    *,
    document_suffix: str = DEFAULT_DOCUMENT_SUFFIX,
    changelog_suffix: str = DEFAULT_CHANGELOG_SUFFIX,
) -> Optional[str]:
    """
    Derive the changelog path from a document's saved path.

    This is a literal substitution of the first occurrence of ``document_suffix``,
    wherever it sits in the path, not an extension swap. Returns None for
    unsaved documents.

    Paths that never mention the suffix also return None. This deviates from the
    original plugin, which returned such paths unchanged and so would have
    appended the log to the document file itself.
    """
    if not saved_path:
        return None
    if document_suffix not in saved_path:
        logger.warning("No %r in %s; not logging changes for it.", document_suffix, saved_path)
        return None
    return saved_path.replace(document_suffix, changelog_suffix, 1)


def resolve_log_path(document, settings=None) -> Optional[str]:
    saved_path = getattr(document, "saved_path", "") or ""
    if settings is None:
        return changelog_path_for(saved_path)
    return changelog_path_for(
        saved_path,
        document_suffix=settings.document_suffix,
        changelog_suffix=settings.changelog_suffix,
    )
