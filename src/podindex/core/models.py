"""Data models for podindex."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path


class EnclosureType(str, Enum):
    """MIME type of an episode's enclosure."""

    MP3 = "audio/mpeg"
    M4A = "audio/mp4"


@dataclass(frozen=True)
class TagData:
    """Tag values read from one audio file.

    Missing text tags are empty strings, missing numbers are 0.
    """

    title: str = ""
    album: str = ""
    artist: str = ""
    comment: str = ""
    track: int = 0
    disc: int = 0


@dataclass(frozen=True)
class Episode:
    """One feed entry, derived from exactly one audio file."""

    title: str
    show: str  # album
    provider: str  # artist
    description: str  # comment
    episode_number: int  # track number
    series_number: int  # disc number
    updated_at: datetime
    size_bytes: int
    enclosure_url: str
    enclosure_type: EnclosureType
    path: Path | None = None


@dataclass(frozen=True)
class ShowTracker:
    """Running detector for collections spanning more than one show.

    Fed with show names in discovery order. The first non-empty show becomes
    the reference; any later non-empty show that differs from it marks the
    collection as multi-show, permanently.
    """

    first_show: str = ""
    multi_show: bool = False

    def observe(self, show: str) -> ShowTracker:
        """Return the tracker state after seeing one more show name."""
        if not self.first_show:
            return ShowTracker(first_show=show, multi_show=self.multi_show)
        if show and show != self.first_show:
            return ShowTracker(first_show=self.first_show, multi_show=True)
        return self

    @classmethod
    def from_shows(cls, shows: Iterable[str]) -> ShowTracker:
        """Fold a whole discovery-order sequence of show names."""
        tracker = cls()
        for show in shows:
            tracker = tracker.observe(show)
        return tracker


@dataclass(frozen=True)
class Collection:
    """An immutable view of the scanned episodes and feed settings.

    Each pipeline stage returns a new Collection rather than mutating the
    one it was given.
    """

    base_dir: Path
    base_url: str
    output_path: Path
    title: str = ""
    description: str = ""
    episodes: tuple[Episode, ...] = ()
    shows: ShowTracker = field(default_factory=ShowTracker)

    @property
    def first_observed_show(self) -> str:
        return self.shows.first_show

    @property
    def is_multi_show(self) -> bool:
        return self.shows.multi_show
