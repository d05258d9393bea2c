"""Icon font build system."""

__version__ = "0.1.0"
