"""Shared utilities for gop core modules."""
