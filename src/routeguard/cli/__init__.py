"""Command line interface."""

from routeguard.cli.main import cli

__all__ = ["cli"]
