"""Audio tag reading.

Reads title, album, artist, comment, track and disc tags from MP3 (ID3)
and M4A (MP4 atom) files using mutagen.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import mutagen
from mutagen.id3 import ID3
from mutagen.mp3 import HeaderNotFoundError
from mutagen.mp4 import MP4Tags

from podindex.core.errors import TagReadError
from podindex.core.models import TagData

# ID3v2 frame ids for each tag field
ID3_FRAMES = {
    "title": "TIT2",
    "album": "TALB",
    "artist": "TPE1",
}

# MP4 atom names for each tag field
MP4_ATOMS = {
    "title": "\xa9nam",
    "album": "\xa9alb",
    "artist": "\xa9ART",
    "comment": "\xa9cmt",
}


def _parse_number(value: Any) -> int:
    """Parse a track or disc number such as ``"3"`` or ``"3/12"``.

    Returns 0 for missing or unparsable values.
    """
    if value is None:
        return 0
    text = str(value).split("/", 1)[0].strip()
    try:
        return int(text)
    except ValueError:
        return 0


def _first_text(frame: Any) -> str:
    if frame is None or not frame.text:
        return ""
    return str(frame.text[0])


def _from_id3(tags: ID3) -> TagData:
    comments = tags.getall("COMM")
    # Untitled comment first; iTunes also stores "iTunNORM" etc. as COMM
    comments.sort(key=lambda frame: frame.desc != "")
    return TagData(
        title=_first_text(tags.get(ID3_FRAMES["title"])),
        album=_first_text(tags.get(ID3_FRAMES["album"])),
        artist=_first_text(tags.get(ID3_FRAMES["artist"])),
        comment=_first_text(comments[0]) if comments else "",
        track=_parse_number(_first_text(tags.get("TRCK"))),
        disc=_parse_number(_first_text(tags.get("TPOS"))),
    )


def _first_pair(values: Any) -> int:
    if not values:
        return 0
    first = values[0]
    if isinstance(first, tuple):
        return int(first[0]) if first else 0
    return _parse_number(first)


def _from_mp4(tags: MP4Tags) -> TagData:
    fields = {}
    for name, atom in MP4_ATOMS.items():
        values = tags.get(atom)
        fields[name] = str(values[0]) if values else ""
    return TagData(
        **fields,
        track=_first_pair(tags.get("trkn")),
        disc=_first_pair(tags.get("disk")),
    )


def read_tags(path: Path) -> TagData:
    """Read tag metadata from an audio file.

    The file is opened and closed within this call. An ``.mp3`` whose audio
    stream is truncated or missing is still read for its ID3 tag.

    Args:
        path: Path to an ``.mp3`` or ``.m4a`` file.

    Returns:
        TagData with the values found in the file.

    Raises:
        TagReadError: If the file cannot be opened, is not a recognized
            audio format, carries no tags, or its tags cannot be parsed.
    """
    try:
        with open(path, "rb") as fileobj:
            try:
                audio = mutagen.File(fileobj)
            except HeaderNotFoundError:
                if path.suffix.lower() != ".mp3":
                    raise
                # No MPEG frames to sync to; the ID3 tag is still readable
                fileobj.seek(0)
                return _from_id3(ID3(fileobj))
    except OSError as e:
        raise TagReadError(f"Can't open {path} to read tags: {e}") from e
    except mutagen.MutagenError as e:
        raise TagReadError(f"Can't parse tags from {path}: {e}") from e

    if audio is None:
        raise TagReadError(f"Can't parse tags from {path}: unrecognized audio format")

    tags = audio.tags
    if isinstance(tags, ID3):
        return _from_id3(tags)
    if isinstance(tags, MP4Tags):
        return _from_mp4(tags)
    if tags is None:
        raise TagReadError(f"Can't parse tags from {path}: no tags found")
    raise TagReadError(
        f"Can't parse tags from {path}: unsupported tag format {type(tags).__name__}"
    )
