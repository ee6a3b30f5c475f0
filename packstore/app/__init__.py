"""Application composition layer.

Wires the default adapters and the lifecycle use cases into a single
``PackageUpdateManager`` per application, and provides the caller-side
serialization helper the lock-free core expects.
"""
