"""
Command-line interface for stars-sync.

Usage:
    stars-sync sync      # Sync GitHub stars into a Notion database
    stars-sync version   # Print version information
"""

import asyncio
import platform
import sys

import click

from stars_sync import __version__
from stars_sync.config.settings import Settings, get_settings
from stars_sync.observability.logging import bind_context, clear_context, setup_logging
from stars_sync.sync.errors import ConfigError, SyncError


def resolve_credentials(
    settings: Settings,
    github_token: str | None,
    notion_token: str | None,
    notion_database_id: str | None,
) -> tuple[str, str, str]:
    """
    Merge command-line values with environment settings.

    Flags win over environment variables. All three values are required.

    Raises:
        ConfigError: If any value is missing after merging
    """
    resolved = {
        "github-token": github_token or settings.github_token,
        "notion-token": notion_token or settings.notion_token,
        "notion-database-id": notion_database_id or settings.notion_database_id,
    }
    for name, value in resolved.items():
        if not value:
            raise ConfigError(f"{name} is required")
    return (
        resolved["github-token"],
        resolved["notion-token"],
        resolved["notion-database-id"],
    )


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """stars-sync - Sync your GitHub stars with a Notion database."""
    setup_logging("DEBUG" if debug else None)


@main.command()
@click.option("--github-token", default=None, help="GitHub token (default: $GITHUB_TOKEN)")
@click.option("--notion-token", default=None, help="Notion integration token (default: $NOTION_TOKEN)")
@click.option(
    "--notion-database-id",
    default=None,
    help="ID of the Notion database to sync with (default: $NOTION_DATABASE_ID)",
)
@click.option("--dry-run", is_flag=True, help="Show the plan without creating or archiving pages")
@click.option("--concurrency", default=None, type=click.IntRange(1, 20), help="Concurrent page mutations")
def sync(
    github_token: str | None,
    notion_token: str | None,
    notion_database_id: str | None,
    dry_run: bool,
    concurrency: int | None,
) -> None:
    """Sync your GitHub stars with a Notion database."""
    from stars_sync.clients.github import GitHubClient
    from stars_sync.clients.notion import NotionClient
    from stars_sync.sync.config import SyncConfig
    from stars_sync.sync.service import SyncService

    settings = get_settings()
    try:
        github_token, notion_token, database_id = resolve_credentials(
            settings, github_token, notion_token, notion_database_id
        )
    except ConfigError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    overrides: dict = {}
    if dry_run:
        overrides["dry_run"] = True
    if concurrency is not None:
        overrides["mutation_concurrency"] = concurrency
    config = SyncConfig(**overrides)

    async def run():
        bind_context(database_id=database_id)
        try:
            async with GitHubClient.from_settings(settings, token=github_token) as github, \
                    NotionClient.from_settings(settings, token=notion_token) as notion:
                service = SyncService(github, notion, config=config)
                return await service.sync(database_id)
        finally:
            clear_context()

    try:
        report = asyncio.run(run())
    except SyncError as e:
        click.echo(click.style(f"Sync failed: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo("\nSync Results:")
    click.echo("-" * 40)
    click.echo(f"  Starred repos:   {report.starred_repos}")
    click.echo(f"  Existing pages:  {report.existing_pages}")
    click.echo(f"  To create:       {report.to_create}")
    click.echo(f"  To archive:      {report.to_delete}")
    if report.dry_run:
        click.echo(click.style("  Dry run: no pages were changed", fg="yellow"))
    else:
        click.echo(f"  Created:         {report.applied.created}")
        click.echo(f"  Archived:        {report.applied.archived}")
        if report.applied.failed:
            click.echo(click.style(f"  Failed:          {report.applied.failed}", fg="red"))
    click.echo("-" * 40)


@main.command()
def version() -> None:
    """Print the application version."""
    click.echo(f"Version: {__version__}")
    click.echo(f"Python version: {platform.python_version()}")
    click.echo(f"Platform: {sys.platform}")


if __name__ == "__main__":
    main()
