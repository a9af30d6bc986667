"""
Wallabag Sync - mirror Wallabag articles into a markdown vault.

This package authenticates against a Wallabag server, fetches unarchived
entries, converts them to markdown and writes one note per entry with
YAML front matter.

Main entry point is the CLI via `wallabag-sync run` command.

Example:
    $ wallabag-sync run --vault ~/notes --config config.yaml
"""

__all__ = [
    "__version__",
    "AppConfig",
    "LocalVault",
    "SyncRunner",
    "WallabagClient",
    "file_path",
    "load_config",
    "render_note",
    "to_markdown",
]
__version__ = "0.1.0"

from .config import AppConfig, load_config
from .core.paths import file_path
from .fetch.client import WallabagClient
from .fetch.converter import to_markdown
from .output.reconciler import render_note
from .output.vault import LocalVault
from .runner import SyncRunner
