"""Command-line interface for selective markup filtering."""

from .main import main

__all__ = ["main"]
