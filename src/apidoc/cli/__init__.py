"""apidoc command-line interface."""
