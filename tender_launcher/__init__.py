"""
tender launcher.

Locates or downloads the platform-specific tender binary and runs it,
forwarding arguments, standard streams and exit status.
"""

__version__ = "0.1.0"
