"""Command-line interface for autotestgen."""

from .main import app

__all__ = ["app"]
