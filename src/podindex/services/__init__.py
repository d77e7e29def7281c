"""Service modules for podindex."""

from podindex.services.extractor import (
    enclosure_type_for,
    extract_episode,
    resolve_enclosure_url,
)
from podindex.services.feed import (
    FeedDocument,
    build_feed,
    display_title,
    infer_title,
    order_hint,
    write_feed,
)
from podindex.services.scanner import (
    AUDIO_EXTENSIONS,
    iter_candidates,
    scan,
)
from podindex.services.tags import read_tags

__all__ = [
    "AUDIO_EXTENSIONS",
    "FeedDocument",
    "build_feed",
    "display_title",
    "enclosure_type_for",
    "extract_episode",
    "infer_title",
    "iter_candidates",
    "order_hint",
    "read_tags",
    "resolve_enclosure_url",
    "scan",
    "write_feed",
]
