"""Command-line interface for citeparse."""

from citeparse.cli.main import cli

__all__ = ["cli"]
