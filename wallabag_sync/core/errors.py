"""
Error taxonomy for the sync pipeline.

Configuration, authentication and fetch errors abort a run. Conversion and
reconcile errors are caught per entry and recorded in the SyncReport.
"""

from __future__ import annotations


class WallabagSyncError(Exception):
    """Base class for all sync errors."""


class ConfigError(WallabagSyncError):
    """Required configuration (credentials, server URL) is missing."""


class AuthError(WallabagSyncError):
    """The token endpoint rejected the credentials or request."""

    def __init__(self, error: str, description: str = ""):
        self.error = error
        self.description = description
        reason = description or error
        super().__init__(f"authentication failed: {reason}")


class FetchError(WallabagSyncError):
    """The entries endpoint returned an error or an unusable payload."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class ConversionError(WallabagSyncError):
    """An entry's HTML could not be translated to markdown."""

    def __init__(self, entry_id: int, message: str):
        self.entry_id = entry_id
        super().__init__(f"entry {entry_id}: {message}")


class ReconcileError(WallabagSyncError):
    """Creating or overwriting an entry's file failed."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")
