"""Command line interface for running schema compatibility checks."""

from .run_verify import main

__all__ = ["main"]
