"""Input adapters for tokml."""
