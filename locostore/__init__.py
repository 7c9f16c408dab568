"""Loco (localise.biz) backed storage for translation messages."""

__version__ = "0.1.0"
