"""
CLI package for form_parser.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from form_parser.cli.app import app, main

__all__ = [
    "app",
    "main",
]
