"""Template preview and import tooling for the notify relay console."""

__version__ = "0.1.0"
