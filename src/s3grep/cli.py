"""Command line interface for s3grep."""

from __future__ import annotations

import logging
import os
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from s3grep.config import AppConfig
from s3grep.errors import ConfigError, ListError
from s3grep.models import Query
from s3grep.search.coordinator import SearchCoordinator
from s3grep.storage.client import ObjectClient


err_console = Console(stderr=True)
app = typer.Typer(help="s3grep - search S3 objects for a literal string")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")
    # botocore is very chatty at DEBUG
    logging.getLogger("botocore").setLevel(logging.INFO if verbose else logging.WARNING)


def _echo_error(line: str) -> None:
    err_console.print(line, markup=False, highlight=False, soft_wrap=True)


@app.callback()
def main() -> None:
    """Grep-style search across the objects of an S3 bucket."""


@app.command()
def grep(
    query: str = typer.Argument(..., help="Literal text to search for"),
    bucket: str = typer.Option(..., "--bucket", "-b", help="Bucket to search"),
    prefix: str = typer.Option("", "--prefix", "-p", help="Only search keys starting with this prefix"),
    ignore_case: bool = typer.Option(False, "--ignore-case", "-i", help="ASCII case-insensitive matching"),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", min=1, envvar="S3GREP_WORKERS", help="Number of concurrent workers"
    ),
    profile: Optional[str] = typer.Option(None, "--profile", envvar="AWS_PROFILE", help="AWS profile name"),
    region: Optional[str] = typer.Option(None, "--region", envvar="AWS_REGION", help="AWS region"),
    endpoint_url: Optional[str] = typer.Option(
        None, "--endpoint-url", envvar="S3GREP_ENDPOINT_URL", help="Custom S3-compatible endpoint"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print every line containing QUERY in the objects of a bucket."""
    _setup_logging(verbose)
    if not bucket:
        raise typer.BadParameter("Bucket must not be empty", param_hint="'--bucket'")
    if not query:
        raise typer.BadParameter("Query must not be empty", param_hint="'QUERY'")

    config = AppConfig(profile=profile, region=region, endpoint_url=endpoint_url, workers=workers)

    try:
        client = ObjectClient.from_config(config)
        coordinator = SearchCoordinator(
            client,
            bucket,
            Query(pattern=os.fsencode(query), ignore_case=ignore_case),
            workers=config.resolve_workers(),
            printer=typer.echo,
            reporter=_echo_error,
            queue_size=config.queue_size,
        )
        stats = coordinator.run(prefix)
    except (ConfigError, ListError) as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False)
        raise typer.Exit(code=1) from exc

    if stats.cancelled:
        err_console.print("[yellow]Search interrupted.[/yellow]")
        raise typer.Exit(code=130)
