"""blox-coach: rule-driven Blox Fruits PvP chat coach."""

from .__about__ import __version__

__all__ = ["__version__"]
