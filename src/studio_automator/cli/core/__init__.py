"""Core utilities for CLI - shared console helpers."""

from .console import console, print_error, print_success, print_warning

__all__ = [
    "console",
    "print_error",
    "print_success",
    "print_warning",
]
