"""baton-zoom CLI - Main entrypoint.

Usage:
    baton-zoom sync --output zoom.yaml
    baton-zoom validate --account-id ... --client-id ... --client-secret ...
"""

from __future__ import annotations

from baton.zoom.cli.commands import app


def create_app() -> None:
    """CLI entrypoint."""
    app()


if __name__ == "__main__":
    create_app()
