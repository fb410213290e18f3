"""Delimiter, string, comment and span pair matching for editor buffers."""

__version__ = "0.1.0"

__all__ = ["__version__"]