"""Allow running podindex as ``python -m podindex``."""

from podindex.cli.main import app

app()
