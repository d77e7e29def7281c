"""Main CLI application for podindex."""

from functools import partial
from pathlib import Path
from typing import Annotated
from urllib.parse import urlsplit

import typer
from rich.console import Console
from rich.markup import escape

from podindex.core.config import Config, Verbosity, load_config
from podindex.core.errors import PodindexError, UsageError
from podindex.core.pipeline import FeedOptions

app = typer.Typer(
    name="podindex",
    help="Build a podcast feed from a tree of audio files.",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)

console = Console()
error_console = Console(stderr=True, soft_wrap=True)

# Exit status for missing or invalid command-line input
USAGE_EXIT_CODE = 2


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from podindex import __version__

        console.print(f"podindex version {__version__}")
        raise typer.Exit()


def _check_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        raise UsageError(f"Invalid feed URL {url}: must include scheme and host")
    return url


def build_options(
    config: Config,
    paths: list[Path] | None,
    url: str | None,
    out: Path | None,
    title: str | None,
    desc: str | None,
) -> FeedOptions:
    """Combine command-line values with configuration.

    Command-line values win over PODINDEX_URL, which wins over config files.

    Raises:
        UsageError: If no paths or no usable feed URL were given.
    """
    if not paths:
        raise UsageError(
            "You must specify one or more files or directories to index (--help for help)"
        )

    base_url = url or config.get_url()
    if not base_url:
        raise UsageError("Missing argument --url to specify podcast feed URL")

    return FeedOptions(
        paths=list(paths),
        base_url=_check_url(base_url),
        output_path=out or config.get_output_path(),
        title=title if title is not None else config.feed.title,
        description=desc if desc is not None else config.feed.description,
    )


@app.command()
def main(
    paths: Annotated[
        list[Path] | None,
        typer.Argument(help="Audio files or directories to index", show_default=False),
    ] = None,
    url: Annotated[
        str | None,
        typer.Option("--url", "-u", help="URL of feed file including filename"),
    ] = None,
    out: Annotated[
        Path | None,
        typer.Option("--out", "-o", help="Output file (default index.xml)"),
    ] = None,
    title: Annotated[
        str | None,
        typer.Option("--title", "-t", help="Podcast title"),
    ] = None,
    desc: Annotated[
        str | None,
        typer.Option("--desc", "-d", help="Podcast description"),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to configuration file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="List episodes as they are found and in feed order"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress all output except errors"),
    ] = False,
    version: Annotated[  # noqa: ARG001
        bool,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version"),
    ] = False,
) -> None:
    """Scan PATHS for .m4a and .mp3 files and write a podcast feed."""
    from podindex.cli.output import display_episode_found, display_episodes
    from podindex.core.pipeline import run_pipeline

    if quiet:
        verbosity = Verbosity.QUIET
    elif verbose:
        verbosity = Verbosity.VERBOSE
    else:
        verbosity = Verbosity.NORMAL

    try:
        config = load_config(config_path)
        options = build_options(config, paths, url, out, title, desc)
    except UsageError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(USAGE_EXIT_CODE) from None
    except PodindexError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    on_episode = None
    if verbosity == Verbosity.VERBOSE:
        on_episode = partial(display_episode_found, console=console)

    try:
        result = run_pipeline(options, on_episode=on_episode)
    except PodindexError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    if verbosity == Verbosity.VERBOSE:
        display_episodes(result.collection, console)

    if verbosity != Verbosity.QUIET:
        for warning in result.warnings:
            console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")
        console.print(
            f"[green]Wrote {len(result.collection.episodes)} episode(s) to:[/green] "
            f"{escape(str(result.output_path))}"
        )


if __name__ == "__main__":
    app()
