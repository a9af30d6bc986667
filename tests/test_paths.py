"""Tests for vault path resolution."""

from wallabag_sync.core.paths import MAX_TITLE_LENGTH, file_path, sanitize_title
from wallabag_sync.core.types import Entry


def _entry(title: str) -> Entry:
    return Entry(id=1, title=title, url="https://example.com/1")


def test_file_path_example():
    assert file_path(_entry("Hello World!")) == "wallabag/Hello World!.md"


def test_file_path_is_deterministic():
    entry = _entry("Some: Title / with * chars")
    assert file_path(entry) == file_path(entry)
    assert file_path(entry) == file_path(_entry("Some: Title / with * chars"))


def test_file_path_truncates_long_titles():
    path = file_path(_entry("x" * 500))
    stem = path[len("wallabag/"):-len(".md")]
    assert len(stem) == MAX_TITLE_LENGTH


def test_file_path_truncation_respects_custom_bound():
    path = file_path(_entry("abcdefghij"), folder="notes", extension=".markdown", max_length=4)
    assert path == "notes/abcd.markdown"


def test_sanitize_removes_illegal_characters():
    cleaned = sanitize_title('a\\b/c:d*e?f"g<h>i|j#k^l[m]n\x00o\x1fp')
    for ch in '\\/:*?"<>|#^[]\x00\x1f':
        assert ch not in cleaned
    assert cleaned == "abcdefghijklmnop"


def test_sanitize_collapses_whitespace():
    assert sanitize_title("  many \t\n spaces  ") == "many spaces"


def test_empty_title_does_not_raise():
    assert file_path(_entry("")) == "wallabag/.md"
    assert file_path(_entry("///???")) == "wallabag/.md"


def test_titles_differing_only_in_illegal_characters_collide():
    assert file_path(_entry("What? Now")) == file_path(_entry("What Now"))
