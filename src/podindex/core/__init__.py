"""Core modules for podindex."""

from podindex.core.config import (
    Config,
    FeedConfig,
    Verbosity,
    load_config,
)
from podindex.core.errors import (
    AssemblyError,
    ConfigError,
    EncodingError,
    OutputError,
    PathResolutionError,
    PodindexError,
    ScanError,
    TagReadError,
    UsageError,
)
from podindex.core.models import (
    Collection,
    EnclosureType,
    Episode,
    ShowTracker,
    TagData,
)
from podindex.core.ordering import compare_episodes, order_episodes

__all__ = [
    "AssemblyError",
    "Collection",
    "Config",
    "ConfigError",
    "EnclosureType",
    "EncodingError",
    "Episode",
    "FeedConfig",
    "OutputError",
    "PathResolutionError",
    "PodindexError",
    "ScanError",
    "ShowTracker",
    "TagData",
    "TagReadError",
    "UsageError",
    "Verbosity",
    "compare_episodes",
    "load_config",
    "order_episodes",
]
