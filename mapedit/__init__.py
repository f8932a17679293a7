"""Editing model for layered 2D tile maps: tiles, attributes, zones, undo history and map files."""

__version__ = "0.1.0"