"""Allow ``python -m kubedeck``."""

from kubedeck.cli import app

app()
