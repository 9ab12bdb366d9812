"""
Entry point for running the launcher CLI as a module.

Usage: python -m tender_launcher.cli [command] [args...]
"""

from .parser import main

if __name__ == "__main__":
    main()
