"""Podcast feed assembly and writing.

Builds an RSS 2.0 document with iTunes podcast tags from an ordered
collection of episodes, using feedgen.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from urllib.parse import urlsplit

from feedgen.entry import FeedEntry
from feedgen.feed import FeedGenerator

from podindex import __version__
from podindex.core.errors import AssemblyError, EncodingError, OutputError
from podindex.core.models import Collection, Episode


@dataclass
class FeedDocument:
    """A feed ready to be serialized.

    Attributes:
        generator: The populated feedgen generator.
        title: The channel title, as supplied or inferred.
    """

    generator: FeedGenerator
    title: str

    def to_bytes(self) -> bytes:
        """Serialize the feed as pretty-printed RSS.

        Raises:
            EncodingError: If the document cannot be serialized.
        """
        try:
            return self.generator.rss_str(pretty=True)
        except (ValueError, TypeError) as e:
            raise EncodingError(f"Can't encode feed '{self.title}': {e}") from e


def infer_title(title: str, episodes: Iterable[Episode]) -> str:
    """Return the feed title, inferring it from the episodes when empty.

    The inferred title is the show of the first episode, in the order
    given, that has one. A supplied title is returned unchanged.
    """
    if title:
        return title
    for episode in episodes:
        if episode.show:
            return episode.show
    return ""


def display_title(episode: Episode, multi_show: bool) -> str:
    """Return the item title, prefixed with the show for multi-show feeds."""
    if multi_show:
        return f"{episode.show}: {episode.title}"
    return episode.title


def order_hint(episode: Episode) -> str:
    """Return the ``itunes:order`` value for an episode.

    Computed as ``100 * series + episode``, so episode numbers of 100 or
    more collide with the next series.
    """
    return str(100 * episode.series_number + episode.episode_number)


def _check_url(url: str) -> None:
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        raise AssemblyError(f"Error adding item {url}: not an absolute URL")


def _add_item(fg: FeedGenerator, episode: Episode, multi_show: bool) -> FeedEntry:
    url = episode.enclosure_url
    _check_url(url)

    title = display_title(episode, multi_show)
    if not title and not episode.description:
        raise AssemblyError(f"Error adding item {url}: no title or description")

    try:
        entry = fg.add_entry(order="append")
        entry.title(title)
        entry.link(href=url)
        entry.guid(url, permalink=True)
        if episode.description:
            entry.description(episode.description)
        entry.pubDate(episode.updated_at)
        entry.enclosure(url, str(episode.size_bytes), episode.enclosure_type.value)
        entry.podcast.itunes_order(order_hint(episode))
    except ValueError as e:
        raise AssemblyError(f"Error adding item {url}: {e}") from e
    return entry


def build_feed(collection: Collection, now: datetime | None = None) -> FeedDocument:
    """Assemble the feed for an ordered collection.

    Args:
        collection: Collection with episodes already in feed order.
        now: Build time, used for both lastBuildDate and pubDate of the
            channel. Defaults to the current UTC time.

    Returns:
        FeedDocument holding the populated generator and resolved title.

    Raises:
        AssemblyError: If an episode cannot be turned into a feed item.
    """
    if now is None:
        now = datetime.now(UTC)

    title = infer_title(collection.title, collection.episodes)

    fg = FeedGenerator()
    fg.load_extension("podcast")
    # RSS requires a non-empty channel title and description
    fg.title(title or collection.base_url)
    fg.link(href=collection.base_url, rel="alternate")
    fg.description(collection.description or title or collection.base_url)
    fg.lastBuildDate(now)
    fg.pubDate(now)
    fg.generator("podindex", version=__version__)

    for episode in collection.episodes:
        _add_item(fg, episode, collection.is_multi_show)

    return FeedDocument(generator=fg, title=title)


def write_feed(document: FeedDocument, output_path: Path) -> Path:
    """Serialize the feed and write it to a file.

    Args:
        document: The assembled feed.
        output_path: Destination file, created or replaced.

    Returns:
        The path written.

    Raises:
        EncodingError: If the document cannot be serialized.
        OutputError: If the file cannot be created or written.
    """
    content = document.to_bytes()
    try:
        with open(output_path, "wb") as f:
            f.write(content)
    except OSError as e:
        raise OutputError(f"Can't open {output_path} for writing: {e}") from e
    return output_path
