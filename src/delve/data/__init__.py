"""Packaged data resources (balance tables)."""
