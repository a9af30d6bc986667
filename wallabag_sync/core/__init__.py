"""
Core pipeline primitives.

This package contains data types, the error taxonomy and path
resolution shared by all pipeline stages.
"""

from .errors import (
    AuthError,
    ConfigError,
    ConversionError,
    FetchError,
    ReconcileError,
    WallabagSyncError,
)
from .paths import file_path, sanitize_title
from .types import (
    AuthFailure,
    AuthResult,
    AuthSuccess,
    AuthToken,
    Credentials,
    Entry,
    EntryOutcome,
    EntryPage,
    SyncReport,
)

__all__ = [
    "AuthError",
    "AuthFailure",
    "AuthResult",
    "AuthSuccess",
    "AuthToken",
    "ConfigError",
    "ConversionError",
    "Credentials",
    "Entry",
    "EntryOutcome",
    "EntryPage",
    "FetchError",
    "ReconcileError",
    "SyncReport",
    "WallabagSyncError",
    "file_path",
    "sanitize_title",
]
