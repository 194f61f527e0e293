"""Test helper modules for the gop test suite.

- go_tree: write Go packages, GOPATH caches and gop workspaces
"""
