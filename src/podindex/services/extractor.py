"""Episode extraction from a single audio file.

Turns one file's tags and filesystem metadata into an Episode with a
resolved enclosure URL.
"""

from __future__ import annotations

import os
from datetime import UTC, datetime
from pathlib import Path
from urllib.parse import quote, urljoin

from podindex.core.errors import PathResolutionError
from podindex.core.models import EnclosureType, Episode, TagData


def enclosure_type_for(extension: str) -> EnclosureType:
    """Map a file extension to its enclosure MIME type.

    ``.mp3`` (any case) is MPEG audio; every other accepted extension is
    an MP4/M4A container.
    """
    if extension.lower() == ".mp3":
        return EnclosureType.MP3
    return EnclosureType.M4A


def resolve_enclosure_url(path: Path, base_dir: Path, base_url: str) -> str:
    """Resolve a file path to its public URL.

    The path is made absolute, expressed relative to ``base_dir`` (the
    directory the feed is written to) and resolved against ``base_url``.

    Args:
        path: Path to the audio file.
        base_dir: Absolute directory of the output document.
        base_url: Absolute URL the output directory is served from.

    Returns:
        The absolute enclosure URL.

    Raises:
        PathResolutionError: If the path cannot be made relative to
            ``base_dir`` or cannot be encoded as a URL path.

    Example:
        >>> resolve_enclosure_url(Path("/out/a b.mp3"), Path("/out"), "https://x.example/feed/")
        'https://x.example/feed/a%20b.mp3'
    """
    abspath = os.path.abspath(path)
    try:
        relpath = os.path.relpath(abspath, base_dir)
    except ValueError as e:
        raise PathResolutionError(
            f"Can't resolve podcast file {abspath} relative to output directory {base_dir}: {e}"
        ) from e

    try:
        url_path = quote(Path(relpath).as_posix(), safe="/")
    except UnicodeEncodeError as e:
        raise PathResolutionError(f"Can't parse path {path} as URL: {e}") from e

    return urljoin(base_url, url_path)


def extract_episode(
    path: Path,
    tags: TagData,
    stat: os.stat_result,
    extension: str,
    base_dir: Path,
    base_url: str,
) -> Episode:
    """Build an Episode from one audio file.

    Args:
        path: Path to the audio file.
        tags: Tags read from the file.
        stat: Filesystem metadata of the file.
        extension: The file's extension, e.g. ``.mp3``.
        base_dir: Absolute directory of the output document.
        base_url: Absolute URL the output directory is served from.

    Returns:
        The Episode for this file.

    Raises:
        PathResolutionError: If the enclosure URL cannot be resolved.
    """
    return Episode(
        title=tags.title,
        show=tags.album,
        provider=tags.artist,
        description=tags.comment,
        episode_number=tags.track,
        series_number=tags.disc,
        updated_at=datetime.fromtimestamp(stat.st_mtime, tz=UTC),
        size_bytes=stat.st_size,
        enclosure_url=resolve_enclosure_url(path, base_dir, base_url),
        enclosure_type=enclosure_type_for(extension),
        path=path,
    )
