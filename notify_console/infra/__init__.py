"""Infrastructure adapters (logging, external services)."""
