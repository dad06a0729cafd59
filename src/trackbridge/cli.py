#!/usr/bin/env python3
"""Command-line interface for trackbridge.

This CLI is primarily for debugging and development.
For production use, import trackbridge as a library.
"""

import asyncio
import json
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from trackbridge import create_converter
from trackbridge.config import DEFAULT_DIALECTS
from trackbridge.exceptions import TrackBridgeError
from trackbridge.lib.queries import generate_queries
from trackbridge.models.link import ParsedLink
from trackbridge.models.metadata import MetadataBase, TrackMetadata
from trackbridge.models.results import ConversionResult
from trackbridge.settings import get_settings
from trackbridge.utils.url import parse_link

logger = logging.getLogger("trackbridge")


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Configure logging with Rich handler.

    This function clears existing handlers before adding a new one, allowing
    it to be called multiple times to reconfigure logging.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise the configured
            ``TRACKBRIDGE_LOG_LEVEL`` (INFO by default).
        console: Optional Console instance to use for RichHandler.
    """
    level = logging.DEBUG if verbose else get_settings().log_level

    # Clear existing handlers to allow reconfiguration
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = RichHandler(
        rich_tracebacks=True,
        show_path=False,
        console=console,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    # Request lines from httpx are noise next to our own debug output
    logging.getLogger("httpx").setLevel(logging.WARNING)


def print_metadata_card(console: Console, metadata: MetadataBase, title: str) -> None:
    """Print one item's metadata as a vertical card.

    Args:
        console: Rich console for output.
        metadata: Metadata to display.
        title: Card title.
    """
    table = Table(
        show_header=False,
        padding=(0, 1),
        title=f"[bold yellow]{title}[/bold yellow]",
        title_justify="left",
    )
    table.add_column("Field", style="bold cyan", width=12)
    table.add_column("Value", overflow="fold")

    table.add_row("Type", metadata.content_type)
    table.add_row("Title", metadata.title)
    table.add_row("Artist", metadata.artist)
    if isinstance(metadata, TrackMetadata):
        if metadata.album:
            table.add_row("Album", metadata.album)
        if metadata.isrc:
            table.add_row("ISRC", metadata.isrc)
        if metadata.duration_ms:
            minutes, seconds = divmod(metadata.duration_ms // 1000, 60)
            table.add_row("Duration", f"{minutes}:{seconds:02d}")
    if metadata.release_date:
        table.add_row("Released", metadata.release_date)
    if metadata.genres:
        table.add_row("Genres", ", ".join(sorted(metadata.genres)))
    if metadata.popularity:
        table.add_row("Popularity", str(metadata.popularity))
    if metadata.url:
        table.add_row("URL", metadata.url)

    console.print()
    console.print(table)


def _confidence_style(confidence: int) -> str:
    if confidence >= 80:
        return "green"
    if confidence >= 50:
        return "yellow"
    return "red"


def print_result(console: Console, result: ConversionResult) -> None:
    """Print a conversion result as source and match cards."""
    source_label = result.direction.source.label
    target_label = result.direction.target.label
    print_metadata_card(console, result.source_metadata, f"Source ({source_label})")
    print_metadata_card(console, result.matched_metadata, f"Match ({target_label})")

    style = _confidence_style(result.confidence)
    console.print()
    console.print(f"[bold]{result.matched_url}[/bold]")
    console.print(f"Confidence: [{style}]{result.confidence}%[/{style}]")


def print_parsed_link(console: Console, parsed: ParsedLink) -> None:
    """Print the identifiers extracted from a link."""
    table = Table(show_header=False, padding=(0, 1))
    table.add_column("Field", style="bold cyan", width=12)
    table.add_column("Value", overflow="fold")
    table.add_row("Platform", parsed.platform.label)
    table.add_row("Type", parsed.content_type)
    table.add_row("ID", parsed.id)
    table.add_row("Region", parsed.region)
    table.add_row("Path", "/".join(parsed.path_segments))
    console.print(table)


async def _convert(url: str) -> ConversionResult:
    async with create_converter() as converter:
        return await converter.convert(url)


async def _resolve(url: str) -> tuple[ParsedLink, MetadataBase]:
    async with create_converter() as converter:
        return await converter.resolve(url)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Convert music links between Apple Music and Spotify."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose=verbose)


@main.command(name="convert")
@click.argument("url", metavar="URL")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def convert_cmd(url: str, as_json: bool) -> None:
    """Convert a track, album, or artist link to the other platform.

    \b
    Examples:
      trackbridge convert "https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC"
      trackbridge convert "https://music.apple.com/us/album/x/1440833098?i=1440833099"
    """
    console = Console()
    try:
        result = asyncio.run(_convert(url))
    except TrackBridgeError as e:
        logger.error(e.message)
        raise click.ClickException(e.message) from e
    except Exception as e:
        logger.exception("Unexpected error")
        raise click.ClickException(f"Unexpected error: {e}") from e

    if as_json:
        json.dump(result.model_dump(mode="json"), sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        print_result(console, result)


@main.command(name="parse")
@click.argument("url", metavar="URL")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def parse_cmd(url: str, as_json: bool) -> None:
    """Show the identifiers extracted from a link (no network access)."""
    try:
        parsed = parse_link(url)
    except TrackBridgeError as e:
        raise click.ClickException(e.message) from e

    if as_json:
        json.dump(parsed.model_dump(mode="json"), sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        print_parsed_link(Console(), parsed)


@main.command(name="queries")
@click.argument("url", metavar="URL")
def queries_cmd(url: str) -> None:
    """Show the search queries that would be tried for a link.

    Fetches the source metadata, then prints the queries in the order the
    other platform would be searched.
    """
    console = Console()
    try:
        parsed, source = asyncio.run(_resolve(url))
    except TrackBridgeError as e:
        logger.error(e.message)
        raise click.ClickException(e.message) from e

    target = parsed.platform.counterpart
    queries = generate_queries(source, DEFAULT_DIALECTS[target])

    print_metadata_card(console, source, f"Source ({parsed.platform.label})")
    console.print()
    console.print(f"[bold]Queries for {target.label}[/bold]")
    for i, query in enumerate(queries, 1):
        console.print(f"  [dim]{i:>2}.[/dim] {query}")


if __name__ == "__main__":
    main()
