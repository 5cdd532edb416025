"""Retail product page crawler and extraction engine."""

__version__ = "0.1.0"
