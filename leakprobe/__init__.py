"""
leakprobe package initialization.

A diagnostic harness that prints process RSS after repeated cycles of
worker-thread buffer I/O and gRPC channel create/close, so an operator can
judge whether memory returns to its baseline.
"""

__version__ = "0.1.0"

__all__ = [
    "cli",
    "config",
    "consts",
    "models",
    "service",
    "util",
]
