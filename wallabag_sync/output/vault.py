"""
File storage for synced notes.

FileStore is the interface the reconciler writes through; LocalVault
implements it over a directory on disk. Paths are vault-relative and
always use forward slashes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import asyncio
from pathlib import Path, PurePosixPath


class FileStore(ABC):
    """Abstract vault-like file store keyed by relative path."""

    @abstractmethod
    async def list_markdown_files(self) -> list[str]:
        """Return relative paths of all markdown files in the store."""
        raise NotImplementedError

    @abstractmethod
    async def read(self, path: str) -> str:
        raise NotImplementedError

    @abstractmethod
    async def create(self, path: str, content: str) -> None:
        """Create a new file, creating parent folders as needed."""
        raise NotImplementedError

    @abstractmethod
    async def modify(self, path: str, content: str) -> None:
        """Replace the full contents of an existing file."""
        raise NotImplementedError


class LocalVault(FileStore):
    """FileStore backed by a local directory.

    Attributes:
        root: Vault root directory
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def resolve(self, path: str) -> Path:
        """Map a vault-relative path onto the filesystem.

        Raises:
            ValueError: If the path is absolute or escapes the vault root
        """
        rel = PurePosixPath(path)
        if rel.is_absolute() or ".." in rel.parts:
            raise ValueError(f"Path escapes vault root: {path}")
        return self.root.joinpath(*rel.parts)

    async def list_markdown_files(self) -> list[str]:
        return await asyncio.to_thread(self._list_markdown_files)

    def _list_markdown_files(self) -> list[str]:
        if not self.root.exists():
            return []
        return sorted(
            file.relative_to(self.root).as_posix()
            for file in self.root.rglob("*.md")
            if file.is_file()
        )

    async def read(self, path: str) -> str:
        target = self.resolve(path)
        return await asyncio.to_thread(target.read_text, encoding="utf-8")

    async def create(self, path: str, content: str) -> None:
        target = self.resolve(path)
        await asyncio.to_thread(self._create, target, content)

    async def modify(self, path: str, content: str) -> None:
        target = self.resolve(path)
        await asyncio.to_thread(self._modify, target, content)

    @staticmethod
    def _modify(target: Path, content: str) -> None:
        if not target.is_file():
            raise FileNotFoundError(f"No such file in vault: {target}")
        target.write_text(content, encoding="utf-8")

    @staticmethod
    def _create(target: Path, content: str) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
