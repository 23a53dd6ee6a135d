"""Command-line interface for modelrouter."""
