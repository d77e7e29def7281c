"""Integration tests for the scan → order → assemble → write pipeline."""

import xml.etree.ElementTree as ET
from datetime import UTC, datetime
from pathlib import Path

import pytest
from mutagen.id3 import ID3, TALB, TIT2, TPE1, TRCK

from podindex.core.errors import TagReadError
from podindex.core.models import TagData
from podindex.core.pipeline import FeedOptions, run_pipeline
from tests.conftest import FakeTagReader

BASE_URL = "https://x.example/feed/"
ITUNES_NS = "{http://www.itunes.com/dtds/podcast-1.0.dtd}"
NOW = datetime(2024, 2, 1, tzinfo=UTC)


def read_channel(path: Path) -> ET.Element:
    channel = ET.parse(path).getroot().find("channel")
    assert channel is not None
    return channel


class TestFeedOptions:
    """Tests for pipeline options."""

    def test_base_dir_is_output_parent(self, tmp_path: Path) -> None:
        options = FeedOptions(paths=[tmp_path], base_url=BASE_URL, output_path=tmp_path / "index.xml")
        assert options.base_dir == tmp_path

    def test_base_dir_of_relative_output(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        options = FeedOptions(paths=[Path(".")], base_url=BASE_URL)
        assert options.output_path == Path("index.xml")
        assert options.base_dir.is_absolute()
        assert options.base_dir.resolve() == tmp_path.resolve()


class TestRunPipeline:
    """End-to-end pipeline tests with canned tags."""

    def test_single_episode(self, audio_tree) -> None:
        root = audio_tree("ep1.mp3")
        reader = FakeTagReader({
            "ep1.mp3": TagData(title="Pilot", album="Show A", artist="Acme", track=1, disc=1),
        })
        options = FeedOptions(paths=[root], base_url=BASE_URL, output_path=root / "index.xml")

        result = run_pipeline(options, tag_reader=reader, now=NOW)

        assert result.output_path == root / "index.xml"
        assert result.title == "Show A"
        assert result.collection.is_multi_show is False
        assert result.warnings == []

        channel = read_channel(result.output_path)
        assert channel.findtext("title") == "Show A"
        item = channel.find("item")
        assert item.findtext("title") == "Pilot"
        assert item.findtext("link") == "https://x.example/feed/ep1.mp3"
        assert item.find("enclosure").get("type") == "audio/mpeg"
        assert item.findtext(f"{ITUNES_NS}order") == "101"

    def test_orders_and_prefixes_multi_show(self, audio_tree) -> None:
        root = audio_tree("a/1.mp3", "a/2.mp3", "b/1.m4a")
        reader = FakeTagReader({
            "1.mp3": TagData(title="A1", album="Show A", artist="Acme", track=1),
            "2.mp3": TagData(title="A2", album="Show A", artist="Acme", track=2),
            "1.m4a": TagData(title="B1", album="Show B", artist="Acme", track=1),
        })
        options = FeedOptions(paths=[root], base_url=BASE_URL, output_path=root / "index.xml")

        result = run_pipeline(options, tag_reader=reader, now=NOW)

        titles = [item.findtext("title") for item in read_channel(result.output_path).findall("item")]
        assert titles == ["Show B: B1", "Show A: A2", "Show A: A1"]
        # Sorted order puts Show B first, so it names the feed
        assert result.title == "Show B"
        assert result.collection.first_observed_show == "Show A"

    def test_supplied_title_and_description(self, audio_tree) -> None:
        root = audio_tree("ep.mp3")
        options = FeedOptions(
            paths=[root],
            base_url=BASE_URL,
            output_path=root / "index.xml",
            title="Custom",
            description="Described",
        )
        reader = FakeTagReader({"ep.mp3": TagData(title="T", album="Drama Hour")})

        result = run_pipeline(options, tag_reader=reader, now=NOW)

        channel = read_channel(result.output_path)
        assert channel.findtext("title") == "Custom"
        assert channel.findtext("description") == "Described"

    def test_enclosures_relative_to_output_directory(self, audio_tree) -> None:
        root = audio_tree("media/show/ep.mp3")
        (root / "site").mkdir()
        options = FeedOptions(
            paths=[root / "media"], base_url=BASE_URL, output_path=root / "site" / "index.xml"
        )
        reader = FakeTagReader({"ep.mp3": TagData(title="T")})

        result = run_pipeline(options, tag_reader=reader, now=NOW)

        link = read_channel(result.output_path).find("item").findtext("link")
        assert link == "https://x.example/media/show/ep.mp3"

    def test_empty_scan_warns(self, tmp_path: Path) -> None:
        options = FeedOptions(paths=[tmp_path], base_url=BASE_URL, output_path=tmp_path / "index.xml")

        result = run_pipeline(options, tag_reader=FakeTagReader({}), now=NOW)

        assert result.warnings
        assert result.output_path.exists()

    def test_corrupt_file_writes_nothing(self, audio_tree) -> None:
        root = audio_tree("1.mp3", "2.mp3", "3.mp3")
        reader = FakeTagReader({}, corrupt={"2.mp3"})
        options = FeedOptions(paths=[root], base_url=BASE_URL, output_path=root / "index.xml")

        with pytest.raises(TagReadError):
            run_pipeline(options, tag_reader=reader, now=NOW)

        assert not (root / "index.xml").exists()
        assert [p.name for p in reader.calls] == ["1.mp3", "2.mp3"]

    def test_on_episode_callback(self, audio_tree) -> None:
        root = audio_tree("a.mp3", "b.mp3")
        seen = []
        options = FeedOptions(paths=[root], base_url=BASE_URL, output_path=root / "index.xml")

        run_pipeline(
            options,
            tag_reader=FakeTagReader({"a.mp3": TagData(title="a"), "b.mp3": TagData(title="b")}),
            on_episode=seen.append,
            now=NOW,
        )

        assert [e.title for e in seen] == ["a", "b"]

    def test_real_tags_on_mp3_without_audio(self, tmp_path: Path) -> None:
        path = tmp_path / "ep1.mp3"
        path.write_bytes(b"")
        tags = ID3()
        tags.add(TIT2(encoding=3, text=["Pilot"]))
        tags.add(TALB(encoding=3, text=["Show A"]))
        tags.add(TPE1(encoding=3, text=["Acme"]))
        tags.add(TRCK(encoding=3, text=["1"]))
        tags.save(path)
        options = FeedOptions(paths=[tmp_path], base_url=BASE_URL, output_path=tmp_path / "index.xml")

        result = run_pipeline(options, now=NOW)

        channel = read_channel(result.output_path)
        assert channel.findtext("title") == "Show A"
        item = channel.find("item")
        assert item.findtext("title") == "Pilot"
        assert item.findtext(f"{ITUNES_NS}order") == "1"
