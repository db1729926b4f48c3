"""Component manifest extraction and query tools for Vue design systems."""

__version__ = "0.1.0"
