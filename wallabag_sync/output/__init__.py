"""
Vault output.

This package handles note serialization and the
create-or-overwrite reconciliation of entry files.
"""

from .reconciler import Reconciler, render_note
from .vault import FileStore, LocalVault

__all__ = [
    "FileStore",
    "LocalVault",
    "Reconciler",
    "render_note",
]
