"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports: the Loco HTTP client,
    the Loco-backed storage adapter, XLIFF conversion and local settings.

Dependencies:
    Individual submodules depend on ``requests``, ``PyYAML``, the filesystem
    and domain protocol definitions.

Call context:
    Imported by ``locostore.app.main`` for runtime wiring and by tests.
"""
