"""Command-line interface for vcsver."""
