"""CLI output formatting utilities."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from podindex.core.models import Collection, Episode
from podindex.services.feed import display_title, order_hint


def display_episode_found(episode: Episode, console: Console) -> None:
    """Print one line for an episode as it is discovered."""
    console.print(f"[dim]Found:[/dim] {escape(str(episode.path or episode.enclosure_url))}")


def display_episodes(collection: Collection, console: Console) -> None:
    """Display the ordered episodes of a collection in a table."""
    if not collection.episodes:
        console.print("[yellow]No episodes found.[/yellow]")
        return

    table = Table(title="Episodes")
    table.add_column("Provider", style="dim")
    table.add_column("Show", style="bold")
    table.add_column("S", style="cyan", justify="right")
    table.add_column("E", style="cyan", justify="right")
    table.add_column("Title", style="bold")
    table.add_column("Order", style="dim", justify="right")
    table.add_column("Type", style="green")

    for episode in collection.episodes:
        table.add_row(
            escape(episode.provider) or "-",
            escape(episode.show) or "-",
            str(episode.series_number),
            str(episode.episode_number),
            escape(display_title(episode, collection.is_multi_show)) or "-",
            order_hint(episode),
            episode.enclosure_type.value,
        )

    console.print(table)
    if collection.is_multi_show:
        console.print(
            f"[dim]Multiple shows found; titles are prefixed with the show name "
            f"(first show: {escape(collection.first_observed_show)})[/dim]"
        )
