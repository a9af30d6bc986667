"""
Core data types for Wallabag Sync.

This module defines the fundamental data structures used throughout the pipeline:
- Credentials: OAuth client and user credentials for one run
- AuthToken: Bearer token returned by the token endpoint
- AuthSuccess / AuthFailure: Tagged result of an authentication attempt
- Entry: A single remote article snapshot
- EntryPage: One page of the paginated entries listing
- EntryOutcome / SyncReport: Per-entry and per-run sync results
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Union


@dataclass(frozen=True)
class Credentials:
    """OAuth client and user credentials.

    Attributes:
        client_id: Wallabag API client id
        client_secret: Wallabag API client secret
        username: Wallabag account username
        password: Wallabag account password
    """
    client_id: str
    client_secret: str
    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(client_id={self.client_id!r}, username={self.username!r})"


@dataclass(frozen=True)
class AuthToken:
    """Bearer token issued by the Wallabag OAuth endpoint.

    Attributes:
        access_token: Token sent in the Authorization header
        expires_in: Lifetime in seconds from issuance
        refresh_token: Token for the refresh flow (unused)
        token_type: Always "bearer" for Wallabag
        issued_at: When the token was received
    """
    access_token: str
    expires_in: int
    refresh_token: str
    token_type: str = "bearer"
    issued_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return now >= self.issued_at + timedelta(seconds=self.expires_in)

    @property
    def authorization(self) -> str:
        return f"Bearer {self.access_token}"

    def __repr__(self) -> str:
        return f"AuthToken(token_type={self.token_type!r}, expires_in={self.expires_in})"


@dataclass(frozen=True)
class AuthSuccess:
    token: AuthToken


@dataclass(frozen=True)
class AuthFailure:
    error: str
    description: str = ""


AuthResult = Union[AuthSuccess, AuthFailure]


@dataclass(frozen=True)
class Entry:
    """Remote article snapshot.

    `content` holds HTML when fetched and markdown after conversion.

    Attributes:
        id: Server-assigned entry id
        title: Article title (may be empty)
        url: Original article URL
        domain: Domain name reported by Wallabag
        created_at: Creation timestamp as returned by the server
        content: Article body
        tags: Tag labels attached to the entry
        is_archived: Whether the entry has been marked as read
        is_starred: Whether the entry is starred
    """
    id: int
    title: str
    url: str
    domain: str | None = None
    created_at: str | None = None
    content: str = ""
    tags: tuple[str, ...] = ()
    is_archived: bool = False
    is_starred: bool = False

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> "Entry":
        """Build an Entry from one `_embedded.items` element."""
        return cls(
            id=int(item["id"]),
            title=item.get("title") or "",
            url=item.get("url") or "",
            domain=item.get("domain_name") or item.get("domain"),
            created_at=item.get("created_at"),
            content=item.get("content") or "",
            tags=tuple(_tag_label(tag) for tag in item.get("tags") or []),
            is_archived=bool(int(item.get("is_archived") or 0)),
            is_starred=bool(int(item.get("is_starred") or 0)),
        )


def _tag_label(tag: Any) -> str:
    # The API returns tag objects; plain strings are accepted too.
    if isinstance(tag, dict):
        return str(tag.get("label") or tag.get("slug") or "")
    return str(tag)


@dataclass
class EntryPage:
    """One page of the paginated entries listing.

    Attributes:
        limit: Page size reported by the server
        page: 1-based page number
        pages: Total number of pages
        items: Entries on this page, in server order
    """
    limit: int
    page: int
    pages: int
    items: list[Entry] = field(default_factory=list)


@dataclass
class EntryOutcome:
    """Result of syncing a single entry.

    Attributes:
        entry_id: Id of the entry
        title: Entry title
        path: Vault-relative target path, None when it could not be resolved
        status: "created", "updated" or "failed"
        error: Error message when status is "failed"
    """
    entry_id: int
    title: str
    path: str | None
    status: str
    error: str | None = None


@dataclass
class SyncReport:
    """Summary of one sync run."""
    fetched: int = 0
    archived_skipped: int = 0
    outcomes: list[EntryOutcome] = field(default_factory=list)

    def _count(self, status: str) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == status)

    @property
    def created(self) -> int:
        return self._count("created")

    @property
    def updated(self) -> int:
        return self._count("updated")

    @property
    def failed(self) -> int:
        return self._count("failed")

    @property
    def errors(self) -> list[EntryOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status == "failed"]
