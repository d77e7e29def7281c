"""Command-line interface for podindex."""
