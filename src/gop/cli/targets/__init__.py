"""Inspect the targets declared in gop.yml."""
