"""Command modules for the tokml CLI."""
