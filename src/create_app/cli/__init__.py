"""Command-line interface for create-app."""

from create_app.cli.app import app

__all__ = ["app"]
