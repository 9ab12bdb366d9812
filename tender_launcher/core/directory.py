"""
Cache directory management for the tender launcher.

Downloaded binaries live in a per-user cache, keyed by tool name and
version so that different launcher versions never share a file.

Directory Structure:
    <cache root>/
        tender/
            cli/
                <version>/
                    tender[.exe]            : Installed binary (immutable once present)
                    tender[.exe].tmp-<pid>  : In-flight download, renamed on success

Cache root resolution:
    1. TENDER_CACHE_DIR, verbatim
    2. Windows: %LOCALAPPDATA% (default: ~/AppData/Local)
    3. macOS:   ~/Library/Caches
    4. Other:   $XDG_CACHE_HOME (default: ~/.cache)
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from tender_launcher.core.config import CACHE_DIR_ENV, LauncherConfig
from tender_launcher.core.exceptions import DirectoryCreationError

logger = logging.getLogger(__name__)


def _home_dir(environ: Mapping[str, str]) -> Path:
    home = environ.get("HOME") or environ.get("USERPROFILE")
    return Path(home) if home else Path.home()


def get_cache_root(environ: Mapping[str, str], os_family: str) -> Path:
    """
    Get the platform-specific cache root directory.

    Args:
        environ: Environment mapping to read overrides from
        os_family: Lowercased OS name ('windows', 'darwin', 'linux', ...)

    Returns:
        Path: The cache root directory.
            - TENDER_CACHE_DIR when set
            - Windows: %LOCALAPPDATA% or ~/AppData/Local
            - macOS: ~/Library/Caches
            - Linux and other Unix: $XDG_CACHE_HOME or ~/.cache

    Example:
        >>> get_cache_root({"HOME": "/home/user"}, "linux")
        PosixPath('/home/user/.cache')
    """
    override = environ.get(CACHE_DIR_ENV)
    if override:
        return Path(override)

    if os_family in ("windows", "win32"):
        local_app_data = environ.get("LOCALAPPDATA")
        if local_app_data:
            return Path(local_app_data)
        return _home_dir(environ) / "AppData" / "Local"

    if os_family in ("darwin", "macos"):
        return _home_dir(environ) / "Library" / "Caches"

    xdg_cache = environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return Path(xdg_cache)
    return _home_dir(environ) / ".cache"


def get_version_cache_dir(cache_root: Path, tool_name: str, version: str) -> Path:
    """
    Get the directory holding the binary for one version.

    Example:
        >>> get_version_cache_dir(Path("/c"), "tender", "1.2.3")
        PosixPath('/c/tender/cli/1.2.3')
    """
    return Path(cache_root) / tool_name / "cli" / version


def get_versioned_binary_path(
    cache_root: Path, tool_name: str, version: str, is_windows: bool = False
) -> Path:
    """
    Get the cached binary path for one version.

    Args:
        cache_root: Cache root from get_cache_root()
        tool_name: Delegated tool name ('tender')
        version: Version string ('1.2.3')
        is_windows: Append '.exe' to the file name

    Returns:
        Path: <cache_root>/<tool_name>/cli/<version>/<tool_name>[.exe]
    """
    file_name = f"{tool_name}.exe" if is_windows else tool_name
    return get_version_cache_dir(cache_root, tool_name, version) / file_name


def get_cached_binary_path(config: LauncherConfig, cache_root: Optional[Path] = None) -> Path:
    """Get the cached binary path for the version and platform in config."""
    if cache_root is None:
        cache_root = get_cache_root(config.environ, config.system)
    return get_versioned_binary_path(
        cache_root, config.tool_name, config.version, config.is_windows
    )


def ensure_directory(path: Path) -> Path:
    """
    Create a directory and its parents if they don't exist.

    Args:
        path: Directory to create

    Returns:
        Path: The directory path

    Raises:
        DirectoryCreationError: If directory creation fails.
    """
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationError(f"Failed to create cache directory at {path}: {e}")

    logger.debug(f"Cache directory ready: {path}")
    return Path(path)


__all__ = [
    "get_cache_root",
    "get_version_cache_dir",
    "get_versioned_binary_path",
    "get_cached_binary_path",
    "ensure_directory",
]
