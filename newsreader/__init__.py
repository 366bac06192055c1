"""Headless-browser news reader for Vietnamese news sites."""

__version__ = "0.1.0"
