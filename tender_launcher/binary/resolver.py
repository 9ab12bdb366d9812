"""
Binary resolution and provisioning.

This module decides which tender binary the launcher runs. Candidates are
tried in strict order:

1. TENDER_BINARY_PATH (authoritative: must exist, never falls through)
2. ./bin/tender[.exe] relative to the working directory
3. bin/tender[.exe] inside the installed package
4. The per-version cache entry, downloading it on first use

Downloads go to a pid-suffixed temporary file and are renamed into the
cache atomically. Concurrent launchers may both download; the last rename
wins and a reader never observes a half-written binary. If a download fails
but another process has meanwhile populated the cache, that copy is used.
This is best effort rather than transactional and assumes release artifacts
are immutable per version and platform.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from tender_launcher.core.config import BINARY_PATH_ENV, LauncherConfig
from tender_launcher.core.directory import ensure_directory, get_cached_binary_path
from tender_launcher.core.download import (
    download_file,
    remove_quietly,
    temp_path_for,
)
from tender_launcher.core.exceptions import (
    ConfigurationError,
    ProvisioningError,
    UnsupportedPlatformError,
)
from tender_launcher.core.platform import detect_platform, get_supported_platforms

logger = logging.getLogger(__name__)

Fetcher = Callable[..., Path]


@dataclass(frozen=True)
class Resolution:
    """Result of binary resolution."""

    path: Path
    """Path to the executable to run"""

    source: str
    """Where it came from: 'override', 'local', 'cache' or 'download'"""


def build_asset_name(
    tool_name: str, version: str, platform_tag: str, arch_tag: str
) -> str:
    """
    Build the release asset file name.

    Example:
        >>> build_asset_name("tender", "1.2.3", "linux", "amd64")
        'tender_1.2.3_linux_amd64'
        >>> build_asset_name("tender", "1.2.3", "windows", "arm64")
        'tender_1.2.3_windows_arm64.exe'
    """
    ext = ".exe" if platform_tag == "windows" else ""
    return f"{tool_name}_{version}_{platform_tag}_{arch_tag}{ext}"


def build_download_url(base_url: str, version: str, asset_name: str) -> str:
    """
    Build the release asset URL.

    Example:
        >>> build_download_url("https://h/releases/download", "1.2.3", "tender_1.2.3_linux_amd64")
        'https://h/releases/download/v1.2.3/tender_1.2.3_linux_amd64'
    """
    return f"{base_url.rstrip('/')}/v{version}/{asset_name}"


def candidate_paths(config: LauncherConfig) -> List[Path]:
    """Local install locations checked before the cache, in precedence order."""
    return [
        config.cwd / "bin" / config.executable_name,
        config.package_root / "bin" / config.executable_name,
    ]


class BinaryResolver:
    """
    Locates or provisions the tender binary.

    Example:
        >>> config = LauncherConfig.from_environment()
        >>> resolution = BinaryResolver(config).resolve()
        >>> print(f"Running {resolution.path} ({resolution.source})")
    """

    def __init__(self, config: LauncherConfig, fetcher: Optional[Fetcher] = None):
        """
        Initialize resolver.

        Args:
            config: Launcher configuration
            fetcher: Download function with download_file()'s signature.
                Injected by tests to observe or forbid network access.
        """
        self.config = config
        self.fetcher = fetcher or download_file

    def resolve(self) -> Resolution:
        """
        Resolve the binary to run.

        Returns:
            Resolution with the executable path and its source

        Raises:
            ConfigurationError: TENDER_BINARY_PATH points to a missing file
            UnsupportedPlatformError: No release exists for this OS/arch
            ProvisioningError: Download failed and nothing is cached
        """
        override = self.config.binary_override
        if override:
            if not os.path.exists(override):
                raise ConfigurationError(f"{BINARY_PATH_ENV} not found: {override}")
            logger.debug(f"Using {BINARY_PATH_ENV}: {override}")
            return Resolution(Path(override), "override")

        for candidate in candidate_paths(self.config):
            if candidate.exists():
                logger.debug(f"Using local binary: {candidate}")
                return Resolution(candidate, "local")

        return self._provision()

    def _provision(self) -> Resolution:
        config = self.config

        info = detect_platform(config)
        if not info.is_supported():
            raise UnsupportedPlatformError(
                info.os, info.arch, supported=get_supported_platforms()
            )
        platform_tag, arch_tag = info.platform_tag, info.arch_tag

        cache_path = get_cached_binary_path(config)
        if cache_path.exists():
            logger.debug(f"Using cached binary: {cache_path}")
            return Resolution(cache_path, "cache")

        asset_name = build_asset_name(
            config.tool_name, config.version, platform_tag, arch_tag
        )
        url = build_download_url(config.release_base_url, config.version, asset_name)
        temp_path = temp_path_for(cache_path)

        try:
            ensure_directory(cache_path.parent)
            logger.info(f"Downloading {asset_name} from {url}")
            self.fetcher(url, temp_path, timeout=config.timeout)
            if platform_tag != "windows":
                os.chmod(temp_path, 0o755)
            os.replace(temp_path, cache_path)
        except Exception as e:
            remove_quietly(temp_path)
            if cache_path.exists():
                logger.debug(
                    f"Download failed ({e}) but {cache_path} now exists, using it"
                )
                return Resolution(cache_path, "cache")
            raise ProvisioningError(
                platform_tag, arch_tag, config.version, url, e
            ) from e

        logger.info(f"Installed tender {config.version} to {cache_path}")
        return Resolution(cache_path, "download")


def resolve_binary_path(config: LauncherConfig) -> Path:
    """
    Resolve the path of the binary to run.

    Convenience wrapper around BinaryResolver(config).resolve().
    """
    return BinaryResolver(config).resolve().path


__all__ = [
    "BinaryResolver",
    "Resolution",
    "build_asset_name",
    "build_download_url",
    "candidate_paths",
    "resolve_binary_path",
]
