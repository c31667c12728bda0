"""Allow running as ``python -m contentkit``."""

from contentkit.cli import app

app()
