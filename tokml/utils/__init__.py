"""Utility helpers for tokml."""
