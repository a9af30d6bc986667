"""
Create-or-overwrite reconciliation of entry notes.

Each entry becomes one markdown file: a YAML front-matter block followed
by the converted body. Existing files are overwritten in full; manual
edits are not preserved.
"""

from __future__ import annotations

import yaml

from ..config import SyncConfig
from ..core.errors import ReconcileError
from ..core.paths import file_path
from ..core.types import Entry, EntryOutcome
from .vault import FileStore


def render_note(entry: Entry, to_read_tag: str = "TO_READ") -> str:
    """Serialize an entry as front matter plus markdown body.

    Args:
        entry: Entry whose content is already markdown
        to_read_tag: Tag label that marks an entry as to-read

    Returns:
        Full file content, identical for identical entries

    Examples:
        >>> print(render_note(Entry(id=1, title="T", url="u", content="Hi")))
        ---
        title: T
        url: u
        starred: false
        tags: []
        to_read: false
        ---
        Hi
        <BLANKLINE>
    """
    metadata = {
        "title": entry.title,
        "url": entry.url,
        "starred": bool(entry.is_starred),
        "tags": list(entry.tags),
        "to_read": to_read_tag in entry.tags,
    }
    # default_flow_style=None keeps scalar lists inline: tags: [a, b]
    front_matter = yaml.safe_dump(
        metadata,
        allow_unicode=True,
        default_flow_style=None,
        sort_keys=False,
        width=10_000,
    )
    body = entry.content.strip()
    return f"---\n{front_matter}---\n{body}\n"


class Reconciler:
    """Writes entries into a FileStore.

    Args:
        store: Target vault
        settings: Folder, extension and naming settings
    """

    def __init__(self, store: FileStore, settings: SyncConfig | None = None):
        self.store = store
        self.settings = settings or SyncConfig()

    def path_for(self, entry: Entry) -> str:
        return file_path(
            entry,
            folder=self.settings.folder,
            extension=self.settings.extension,
            max_length=self.settings.max_title_length,
        )

    async def sync(self, entry: Entry) -> EntryOutcome:
        """Create or overwrite the file for one entry.

        Raises:
            ReconcileError: If listing or writing the file fails
        """
        path = self.path_for(entry)
        content = render_note(entry, self.settings.to_read_tag)
        try:
            existing = await self.store.list_markdown_files()
            if path in existing:
                await self.store.modify(path, content)
                status = "updated"
            else:
                await self.store.create(path, content)
                status = "created"
        except Exception as exc:  # noqa: BLE001
            raise ReconcileError(path, f"{type(exc).__name__}: {exc}") from exc
        return EntryOutcome(entry_id=entry.id, title=entry.title, path=path, status=status)
