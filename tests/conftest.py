"""Pytest fixtures for podindex tests."""

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest

from podindex.core.errors import TagReadError
from podindex.core.models import Collection, EnclosureType, Episode, ShowTracker, TagData

BASE_URL = "https://x.example/feed/"


def make_episode(
    title: str = "Pilot",
    show: str = "Show A",
    provider: str = "Acme",
    description: str = "",
    episode_number: int = 1,
    series_number: int = 1,
    url: str | None = None,
    enclosure_type: EnclosureType = EnclosureType.MP3,
) -> Episode:
    """Build an Episode with sensible defaults."""
    return Episode(
        title=title,
        show=show,
        provider=provider,
        description=description,
        episode_number=episode_number,
        series_number=series_number,
        updated_at=datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC),
        size_bytes=1000,
        enclosure_url=url or f"{BASE_URL}{title.replace(' ', '%20') or 'untitled'}.mp3",
        enclosure_type=enclosure_type,
    )


def make_collection(
    episodes: list[Episode],
    title: str = "",
    description: str = "",
    base_dir: Path = Path("/out"),
) -> Collection:
    """Build a Collection, tracking shows in the order given."""
    return Collection(
        base_dir=base_dir,
        base_url=BASE_URL,
        output_path=base_dir / "index.xml",
        title=title,
        description=description,
        episodes=tuple(episodes),
        shows=ShowTracker.from_shows(e.show for e in episodes),
    )


class FakeTagReader:
    """Tag reader returning canned tags by file name, recording each call."""

    def __init__(self, tags: dict[str, TagData], corrupt: set[str] | None = None) -> None:
        self.tags = tags
        self.corrupt = corrupt or set()
        self.calls: list[Path] = []

    def __call__(self, path: Path) -> TagData:
        self.calls.append(path)
        if path.name in self.corrupt:
            raise TagReadError(f"Can't parse tags from {path}: corrupt")
        return self.tags.get(path.name, TagData())


@pytest.fixture
def sample_episode() -> Episode:
    """Create a sample episode for testing."""
    return make_episode()


@pytest.fixture
def sample_tags() -> TagData:
    """Tags for a single-episode feed."""
    return TagData(title="Pilot", album="Show A", artist="Acme", track=1, disc=1)


@pytest.fixture
def audio_tree(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that creates empty files under tmp_path."""

    def _create(*names: str) -> Path:
        for name in names:
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"\x00" * 16)
        return tmp_path

    return _create


@pytest.fixture
def isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep user config files and PODINDEX_URL out of tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setattr("podindex.core.config.GLOBAL_CONFIG_PATH", home / ".podindex" / "config")
    monkeypatch.delenv("PODINDEX_URL", raising=False)
