"""
gop - project-local Go dependency vendoring

gop discovers the transitive import graph of a workspace target and copies
every missing external package from the global GOPATH cache into the
project's ``src/vendor`` tree.
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
