"""podindex - build a podcast feed from a directory of audio files."""

__version__ = "0.1.0"
