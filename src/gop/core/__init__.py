"""gop core library: configuration, import graph and vendoring."""
