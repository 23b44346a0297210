"""Command line interface for media pair matcher."""
