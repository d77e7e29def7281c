"""Custom exceptions for podindex."""


class PodindexError(Exception):
    """Base exception for all podindex errors."""

    pass


class ConfigError(PodindexError):
    """Configuration-related errors."""

    pass


class UsageError(PodindexError):
    """Missing or invalid command-line input."""

    pass


class ScanError(PodindexError):
    """A root path or directory could not be traversed."""

    pass


class PathResolutionError(PodindexError):
    """A file path could not be expressed as an enclosure URL."""

    pass


class TagReadError(PodindexError):
    """An audio file could not be opened or its tags parsed."""

    pass


class AssemblyError(PodindexError):
    """An episode could not be converted into a feed item."""

    pass


class OutputError(PodindexError):
    """The output file could not be created or written."""

    pass


class EncodingError(PodindexError):
    """The feed document could not be serialized."""

    pass
