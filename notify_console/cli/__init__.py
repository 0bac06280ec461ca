"""Command-line interface for the notify console."""
