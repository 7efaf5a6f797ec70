"""Command-line interface for vdfcodec."""
