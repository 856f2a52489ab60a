"""Emergence pattern detection in text and path-based surveys of Markdown notes."""

__version__ = "0.1.0"