"""Command-line interface."""

from baton.zoom.cli.commands import app

__all__ = ["app"]
