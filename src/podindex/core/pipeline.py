"""Feed build pipeline for podindex.

Orchestrates the full flow: scan → order → assemble → write. Every stage
completes before the next begins and the first error ends the run.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from podindex.core.models import Collection, Episode
from podindex.core.ordering import order_episodes
from podindex.services.feed import build_feed, write_feed
from podindex.services.scanner import TagReader, scan


@dataclass
class FeedOptions:
    """Inputs for one feed build.

    Attributes:
        paths: Files or directories to scan, in order.
        base_url: URL the output directory is served from.
        output_path: Where the feed is written.
        title: Feed title, empty to infer it from the episodes.
        description: Feed description.
    """

    paths: list[Path]
    base_url: str
    output_path: Path = Path("index.xml")
    title: str = ""
    description: str = ""

    @property
    def base_dir(self) -> Path:
        """Absolute directory of the output file; enclosure paths are relative to it."""
        return Path(os.path.abspath(self.output_path)).parent


@dataclass
class PipelineResult:
    """Result of a successful feed build.

    Attributes:
        output_path: Path to the written feed.
        collection: The ordered collection the feed was built from.
        title: The channel title, as supplied or inferred.
        warnings: Non-fatal notes for the user.
    """

    output_path: Path
    collection: Collection
    title: str
    warnings: list[str] = field(default_factory=list)


def run_pipeline(
    options: FeedOptions,
    tag_reader: TagReader | None = None,
    on_episode: Callable[[Episode], None] | None = None,
    now: datetime | None = None,
) -> PipelineResult:
    """Build and write the feed described by ``options``.

    Args:
        options: Paths, URL and feed metadata.
        tag_reader: Callable returning the tags of one file, defaults to
            read_tags.
        on_episode: Called with each episode as it is discovered.
        now: Build time for the channel dates.

    Returns:
        PipelineResult with the output path and ordered collection.

    Raises:
        PodindexError: On the first scan, assembly, encoding or output
            failure.
    """
    collection = scan(
        options.paths,
        base_dir=options.base_dir,
        base_url=options.base_url,
        output_path=options.output_path,
        title=options.title,
        description=options.description,
        tag_reader=tag_reader,
        on_episode=on_episode,
    )
    collection = order_episodes(collection)

    document = build_feed(collection, now=now)
    output_path = write_feed(document, options.output_path)

    warnings = []
    if not collection.episodes:
        warnings.append("No .m4a or .mp3 files found; feed has no items")

    return PipelineResult(
        output_path=output_path,
        collection=collection,
        title=document.title,
        warnings=warnings,
    )
