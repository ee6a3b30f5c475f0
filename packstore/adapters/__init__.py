"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (HTTP download, ZIP
    extraction, JSON records, local filesystem) and the two record stores
    built on top of them.

Dependencies:
    ``package_fetcher``/``http_client`` depend on ``requests``; the rest use
    the standard library and domain protocol definitions.

Call context:
    Imported by ``packstore.app.update_manager`` for runtime wiring and by
    tests for transport-level behavior verification.
"""
