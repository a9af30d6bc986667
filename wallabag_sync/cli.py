"""
Command-line interface for Wallabag Sync.

Uses Typer to provide a CLI with options for the main configuration
settings. Supports loading .env files for credential configuration.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
import typer
from rich.console import Console

from .config import get_credentials, load_config
from .core.errors import WallabagSyncError
from .output.vault import LocalVault
from .runner import run_sync
from .utils.logging import setup_logging

app = typer.Typer(add_completion=False)
console = Console()


@app.callback()
def main() -> None:
    """Sync unarchived Wallabag entries into a markdown vault."""


@app.command()
def run(
    vault: Path = typer.Option(..., "--vault", "-v", file_okay=False, help="Vault root directory."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    base_url: str | None = typer.Option(
        None, "--base-url", envvar="WALLABAG_URL", help="Wallabag server URL."
    ),
    folder: str | None = typer.Option(None, "--folder", help="Vault folder for synced entries."),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_dir: Path | None = typer.Option(None, "--log-dir", help="Directory for the JSONL log file."),
):
    """Run one sync.

    Authenticates against the Wallabag server, fetches every entry,
    and writes each unarchived entry as a markdown note in the vault.

    Args:
        vault: Vault root directory
        config: Optional path to YAML config file
        base_url: Override Wallabag server URL
        folder: Override vault folder for synced entries
        progress: Whether to show progress bar
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for the log file
    """
    load_dotenv()

    try:
        cfg = load_config(str(config) if config else None)
    except WallabagSyncError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    if base_url:
        cfg.wallabag.base_url = base_url
    if folder:
        cfg.sync.folder = folder
    if log_level:
        cfg.logging.level = log_level

    logger = setup_logging(cfg.logging, log_dir)

    try:
        credentials = get_credentials(cfg.wallabag)
        report = run_sync(
            cfg,
            LocalVault(vault),
            credentials,
            show_progress=progress,
            logger=logger,
        )
    except WallabagSyncError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    console.print(
        f"Synced {len(report.outcomes)} entries: "
        f"{report.created} created, {report.updated} updated, {report.failed} failed"
    )
    for outcome in report.errors:
        console.print(f"  [yellow]failed[/yellow] {outcome.title or outcome.entry_id}: {outcome.error}")
    if report.failed:
        raise typer.Exit(code=2)


if __name__ == "__main__":
    app()
