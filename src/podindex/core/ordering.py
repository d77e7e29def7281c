"""Episode ordering for feed output.

Episodes are sorted by provider, then by show, series, episode number and
title in reverse. Show is reversed so that "Lecture Series 3" lists before
"Lecture Series 2", and within a show the latest installments come first.
"""

from __future__ import annotations

from dataclasses import replace
from functools import cmp_to_key
from typing import Any

from podindex.core.models import Collection, Episode


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def compare_episodes(a: Episode, b: Episode) -> int:
    """Compare two episodes for feed order.

    Args:
        a: First episode.
        b: Second episode.

    Returns:
        A negative number if ``a`` sorts first, positive if ``b`` does,
        0 if the two are indistinguishable by every sort key.
    """
    result = _cmp(a.provider, b.provider)
    if result:
        return result
    for key in ("show", "series_number", "episode_number", "title"):
        result = _cmp(getattr(b, key), getattr(a, key))
        if result:
            return result
    return 0


episode_sort_key = cmp_to_key(compare_episodes)


def order_episodes(collection: Collection) -> Collection:
    """Return a copy of the collection with its episodes in feed order."""
    return replace(collection, episodes=tuple(sorted(collection.episodes, key=episode_sort_key)))
