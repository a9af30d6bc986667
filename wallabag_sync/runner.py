"""
Main sync orchestration for Wallabag Sync.

This module coordinates one end-to-end run:
1. Authenticate against the Wallabag server
2. Fetch every page of entries
3. Drop archived entries
4. Convert entry bodies from HTML to markdown
5. Create or overwrite one vault file per entry, concurrently

Authentication and fetch failures abort the run. Conversion and
reconciliation failures are isolated per entry and reported.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
import logging

from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from .config import AppConfig, get_base_url
from .core.errors import AuthError, ConversionError, FetchError, WallabagSyncError
from .core.types import Credentials, Entry, EntryOutcome, SyncReport
from .fetch.client import WallabagClient
from .fetch.converter import to_markdown
from .output.reconciler import Reconciler
from .output.vault import FileStore
from .utils.logging import log_event


class SyncRunner:
    """Runs the sync pipeline against one vault.

    Args:
        cfg: Application configuration
        store: Vault the entries are written into
        client: Optional pre-built API client; one is built from cfg otherwise
        logger: Logger for events
    """

    def __init__(
        self,
        cfg: AppConfig,
        store: FileStore,
        client: WallabagClient | None = None,
        logger: logging.Logger | None = None,
    ):
        self.cfg = cfg
        self.store = store
        self.reconciler = Reconciler(store, cfg.sync)
        self.logger = logger or logging.getLogger("wallabag_sync")
        self._client = client

    def _build_client(self) -> WallabagClient:
        wb = self.cfg.wallabag
        return WallabagClient(
            get_base_url(wb),
            timeout_seconds=wb.timeout_seconds,
            per_page=wb.per_page,
            trust_env=wb.trust_env,
        )

    async def run(self, credentials: Credentials, progress: Progress | None = None) -> SyncReport:
        """Run one sync.

        Args:
            credentials: Credentials for this run
            progress: Optional Rich progress bar advanced per settled entry

        Returns:
            SyncReport with one outcome per unarchived entry

        Raises:
            AuthError: If authentication fails (nothing is fetched or written)
            FetchError: If any entries page cannot be retrieved
        """
        client = self._client or self._build_client()
        owns_client = self._client is None
        try:
            entries = await self._fetch(client, credentials)
        finally:
            if owns_client:
                await client.aclose()

        report = SyncReport(fetched=len(entries))
        pending = filter_unarchived(entries)
        report.archived_skipped = len(entries) - len(pending)
        log_event(
            self.logger,
            "Entries filtered",
            event="entries_filtered",
            fetched=len(entries),
            archived_skipped=report.archived_skipped,
        )
        self._warn_collisions(pending)

        report.outcomes = await self._sync_entries(pending, progress)
        log_event(
            self.logger,
            "Sync done",
            event="sync_done",
            created_count=report.created,
            updated_count=report.updated,
            failed_count=report.failed,
        )
        return report

    async def _fetch(self, client: WallabagClient, credentials: Credentials) -> list[Entry]:
        log_event(self.logger, "Sync start", event="sync_start", base_url=client.base_url)
        try:
            token = await client.auth(credentials)
        except AuthError as exc:
            log_event(self.logger, "Auth failed", level=logging.ERROR, event="auth_failed", error=str(exc))
            raise
        log_event(self.logger, "Auth ok", event="auth_ok", expires_in=token.expires_in)

        try:
            entries = await client.fetch_entries(token)
        except FetchError as exc:
            log_event(
                self.logger,
                "Fetch failed",
                level=logging.ERROR,
                event="fetch_failed",
                error=str(exc),
                status_code=exc.status_code,
            )
            raise
        log_event(self.logger, "Entries fetched", event="fetch_done", count=len(entries))
        return entries

    async def _sync_entries(
        self,
        entries: list[Entry],
        progress: Progress | None = None,
    ) -> list[EntryOutcome]:
        task_id = progress.add_task("Syncing", total=len(entries)) if progress else None

        async def _sync_single(entry: Entry) -> EntryOutcome:
            try:
                converted = to_markdown(entry)
                outcome = await self.reconciler.sync(converted)
            except WallabagSyncError as exc:
                event = "convert_failed" if isinstance(exc, ConversionError) else "entry_failed"
                log_event(
                    self.logger,
                    "Entry failed",
                    level=logging.WARNING,
                    event=event,
                    entry_id=entry.id,
                    title=entry.title,
                    error=str(exc),
                )
                outcome = EntryOutcome(
                    entry_id=entry.id,
                    title=entry.title,
                    path=getattr(exc, "path", None),
                    status="failed",
                    error=str(exc),
                )
            else:
                log_event(
                    self.logger,
                    "Entry synced",
                    level=logging.DEBUG,
                    event="entry_synced",
                    entry_id=entry.id,
                    path=outcome.path,
                    status=outcome.status,
                )
            if progress is not None and task_id is not None:
                progress.advance(task_id, 1)
            return outcome

        # gather() preserves input order, which keeps the report ordering stable.
        tasks = [asyncio.create_task(_sync_single(entry)) for entry in entries]
        return list(await asyncio.gather(*tasks))

    def _warn_collisions(self, entries: list[Entry]) -> None:
        by_path: dict[str, list[int]] = defaultdict(list)
        for entry in entries:
            by_path[self.reconciler.path_for(entry)].append(entry.id)
        for path, ids in by_path.items():
            if len(ids) > 1:
                log_event(
                    self.logger,
                    "Entries share a file path; last write wins",
                    level=logging.WARNING,
                    event="path_collision",
                    path=path,
                    entry_ids=ids,
                )


def filter_unarchived(entries: list[Entry]) -> list[Entry]:
    """Keep only entries that are not archived, preserving order."""
    return [entry for entry in entries if not entry.is_archived]


def run_sync(
    cfg: AppConfig,
    store: FileStore,
    credentials: Credentials,
    show_progress: bool = False,
    logger: logging.Logger | None = None,
) -> SyncReport:
    """Synchronous wrapper around SyncRunner.run."""
    runner = SyncRunner(cfg, store, logger=logger)
    if not show_progress:
        return asyncio.run(runner.run(credentials))

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
    ) as progress:
        return asyncio.run(runner.run(credentials, progress))
