"""Directory tree scanning.

Walks root paths for audio files and collects one Episode per file. The
first error aborts the whole scan.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from podindex.core.errors import ScanError
from podindex.core.models import Collection, Episode, ShowTracker, TagData
from podindex.services.extractor import extract_episode
from podindex.services.tags import read_tags

# Extensions (lower-cased) recognized as episode audio files
AUDIO_EXTENSIONS = frozenset({".m4a", ".mp3"})

TagReader = Callable[[Path], TagData]


def is_candidate(path: Path) -> bool:
    """Check whether a path names a file with a recognized audio extension."""
    return path.suffix.lower() in AUDIO_EXTENSIONS and path.is_file()


def _walk(path: Path, is_root: bool = False) -> Iterator[Path]:
    yield path
    # Symlinked directories below a root are not followed
    if not path.is_dir() or (path.is_symlink() and not is_root):
        return
    try:
        children = sorted(path.iterdir(), key=lambda child: child.name)
    except OSError as e:
        raise ScanError(f"Can't read directory {path}: {e}") from e
    for child in children:
        yield from _walk(child)


def iter_candidates(root: Path) -> Iterator[Path]:
    """Yield every audio file under a root, depth-first in name order.

    Entries in each directory are visited in lexicographic order of their
    names, files and subdirectories interleaved. A root that is itself a
    file yields only that file (if it is a candidate).

    Raises:
        ScanError: If the root or a directory below it cannot be read.
    """
    if not root.exists():
        raise ScanError(f"Can't scan {root}: no such file or directory")
    for path in _walk(root, is_root=True):
        if is_candidate(path):
            yield path


def scan(
    roots: Iterable[Path],
    base_dir: Path,
    base_url: str,
    output_path: Path,
    title: str = "",
    description: str = "",
    tag_reader: TagReader | None = None,
    on_episode: Callable[[Episode], None] | None = None,
) -> Collection:
    """Scan root paths and collect their episodes.

    Args:
        roots: Files or directories to scan, in order.
        base_dir: Absolute directory of the output document.
        base_url: Absolute URL the output directory is served from.
        output_path: Where the feed will be written.
        title: Feed title, empty to infer it from the episodes.
        description: Feed description.
        tag_reader: Callable returning the tags of one file, defaults to
            read_tags.
        on_episode: Called with each episode as it is collected.

    Returns:
        Collection with episodes in discovery order.

    Raises:
        ScanError: If a root cannot be traversed.
        TagReadError: If a file cannot be opened or its tags parsed.
        PathResolutionError: If a file's enclosure URL cannot be resolved.
    """
    reader = tag_reader or read_tags
    episodes: list[Episode] = []
    shows = ShowTracker()

    for root in roots:
        for path in iter_candidates(Path(root)):
            tags = reader(path)
            try:
                stat = path.stat()
            except OSError as e:
                raise ScanError(f"Can't stat {path}: {e}") from e
            episode = extract_episode(path, tags, stat, path.suffix, base_dir, base_url)
            episodes.append(episode)
            shows = shows.observe(episode.show)
            if on_episode is not None:
                on_episode(episode)

    return Collection(
        base_dir=base_dir,
        base_url=base_url,
        output_path=output_path,
        title=title,
        description=description,
        episodes=tuple(episodes),
        shows=shows,
    )
