"""
tender launcher CLI module.

This module provides the tender and tender-ui console scripts.
"""

from .parser import CLI, interactive_main, main

__all__ = ["CLI", "main", "interactive_main"]
