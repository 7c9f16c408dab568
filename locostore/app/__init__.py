"""Composition root and command line entry point."""
