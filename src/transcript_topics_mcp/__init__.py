"""Transcript segmentation and topic alignment over MCP."""

__version__ = "0.1.0"
