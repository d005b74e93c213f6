"""Helpers shared across the CLI and library modules."""
