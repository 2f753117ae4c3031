"""Marker-driven code completion for files in a watched directory."""

__version__ = "0.1.0"