"""Deterministic vault paths for entries."""

from __future__ import annotations

import posixpath
import re

from .types import Entry

DEFAULT_FOLDER = "wallabag"
DEFAULT_EXTENSION = ".md"
MAX_TITLE_LENGTH = 190

# Illegal on Windows/macOS/Linux plus characters that break vault links.
_ILLEGAL_RE = re.compile(r'[\\/:*?"<>|#^\[\]]')
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_title(title: str) -> str:
    """Strip characters that are not allowed in file names.

    Args:
        title: Raw entry title

    Returns:
        Title with illegal and control characters removed and whitespace
        collapsed. May be empty.

    Examples:
        >>> sanitize_title("Hello World!")
        'Hello World!'
        >>> sanitize_title("a/b: c?")
        'ab c'
    """
    cleaned = _ILLEGAL_RE.sub("", title or "")
    cleaned = _CONTROL_RE.sub("", cleaned)
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def file_path(
    entry: Entry,
    folder: str = DEFAULT_FOLDER,
    extension: str = DEFAULT_EXTENSION,
    max_length: int = MAX_TITLE_LENGTH,
) -> str:
    """Return the vault-relative path for an entry.

    The path depends only on the title, so two entries whose sanitized and
    truncated titles match resolve to the same file.

    Args:
        entry: The entry to place
        folder: Vault folder holding synced entries
        extension: File extension including the dot
        max_length: Maximum length of the file name stem

    Returns:
        A POSIX-style relative path such as "wallabag/Hello World!.md"
    """
    stem = sanitize_title(entry.title)[:max_length].rstrip()
    return posixpath.join(folder, f"{stem}{extension}")
