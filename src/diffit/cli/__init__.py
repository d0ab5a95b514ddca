"""Command line interface for diffit."""
