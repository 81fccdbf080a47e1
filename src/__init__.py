"""Genre-based movie and TV recommendation service."""

__version__ = "0.1.0"
