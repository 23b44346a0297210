"""Media pair matcher: pair reference and foreign videos by normalized filename."""

__version__ = "0.1.0"
