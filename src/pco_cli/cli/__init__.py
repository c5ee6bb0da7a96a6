"""
CLI interface package for pco.

This package contains the command-line interface components including
the main application, product command groups and output formatters.
"""

__all__ = ["app"]
