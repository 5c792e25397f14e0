"""Command line interface for dremap."""
