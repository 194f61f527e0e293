"""Top-level gop commands."""
