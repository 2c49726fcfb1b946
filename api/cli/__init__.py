"""Command-line entry points for the floor plan design service."""

__all__ = ["journal_cli"]
