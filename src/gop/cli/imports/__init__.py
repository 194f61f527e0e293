"""Inspect the external imports of a target."""
