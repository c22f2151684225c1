import os

from savelog.config import Settings
from savelog.core.paths import changelog_path_for, resolve_log_path
from tests.fakes import FakeDocument


def test_changelog_path_replaces_suffix() -> None:
    assert changelog_path_for("/a/b/house.skp") == "/a/b/house_changelog.txt"


def test_changelog_path_keeps_directory_and_stem() -> None:
    saved = os.path.join("projects", "site", "barn.skp")
    derived = changelog_path_for(saved)
    assert os.path.dirname(derived) == os.path.dirname(saved)
    assert os.path.basename(derived) == "barn_changelog.txt"


def test_unsaved_document_has_no_log_path() -> None:
    assert changelog_path_for("") is None
    assert resolve_log_path(FakeDocument("")) is None


def test_substitution_hits_first_occurrence_anywhere_in_path() -> None:
    assert changelog_path_for("/work/old.skp.d/house.skp") == "/work/old_changelog.txt.d/house.skp"


def test_path_without_suffix_token_is_not_logged() -> None:
    assert changelog_path_for("/a/b/house.dwg") is None


def test_resolve_uses_settings_tokens() -> None:
    settings = Settings(document_suffix=".3dm", changelog_suffix="-history.log")
    assert resolve_log_path(FakeDocument("/x/part.3dm"), settings) == "/x/part-history.log"
