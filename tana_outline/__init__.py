"""Tana to Outline Converter."""

__version__ = "1.0.0"
