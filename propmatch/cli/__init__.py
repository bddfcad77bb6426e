"""
Command-line interface for propmatch.
"""

from .main import main

__all__ = ["main"]
