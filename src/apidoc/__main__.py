"""Allow ``python -m apidoc``."""

from apidoc.cli.app import app

app()
