"""Use-case layer for the package lifecycle.

Each module coordinates domain objects and ports without importing concrete
adapters, so stages can be exercised with in-memory doubles.
"""
