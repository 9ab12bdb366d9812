"""
Core functionality for the tender launcher.

This package contains the configuration, platform mapping, cache layout
and download modules the resolver depends on.
"""

from .config import LauncherConfig, get_package_version

from .platform import (
    PlatformInfo,
    map_platform,
    detect_platform,
    get_supported_platforms,
)

from .directory import (
    get_cache_root,
    get_versioned_binary_path,
    ensure_directory,
)

from .exceptions import (
    LauncherError,
    ConfigurationError,
    UnsupportedPlatformError,
    ProvisioningError,
    DownloadError,
    DirectoryError,
    DirectoryCreationError,
    ProcessError,
    StartupError,
    SignalTerminationError,
)

__all__ = [
    "LauncherConfig",
    "get_package_version",
    "PlatformInfo",
    "map_platform",
    "detect_platform",
    "get_supported_platforms",
    "get_cache_root",
    "get_versioned_binary_path",
    "ensure_directory",
    "LauncherError",
    "ConfigurationError",
    "UnsupportedPlatformError",
    "ProvisioningError",
    "DownloadError",
    "DirectoryError",
    "DirectoryCreationError",
    "ProcessError",
    "StartupError",
    "SignalTerminationError",
]
