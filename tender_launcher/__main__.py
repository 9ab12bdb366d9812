"""
Entry point for running the tender launcher as a module.

Usage: python -m tender_launcher [command] [args...]
"""

from tender_launcher.cli.parser import main

if __name__ == "__main__":
    main()
