"""
Platform mapping for release artifacts.

Maps the OS and CPU architecture reported by the Python runtime onto the
tags used in tender release asset names:

    OS:    darwin/macos -> 'darwin', linux -> 'linux', windows -> 'windows'
    Arch:  x86_64/amd64/x64 -> 'amd64', aarch64/arm64 -> 'arm64'

Any other combination is unsupported; callers must fail before attempting
any download.

Usage:
    from tender_launcher.core.platform import map_platform

    tags = map_platform("linux", "x86_64")
    if tags is None:
        raise UnsupportedPlatformError("linux", "x86_64")
    platform_tag, arch_tag = tags  # ('linux', 'amd64')
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from tender_launcher.core.config import LauncherConfig

_OS_TAGS = {
    "darwin": "darwin",
    "macos": "darwin",
    "linux": "linux",
    "windows": "windows",
    "win32": "windows",
}

_ARCH_TAGS = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "x64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
}


@dataclass(frozen=True)
class PlatformInfo:
    """
    Detected platform and its release tags.

    Attributes:
        os: OS name as reported by the runtime ('linux', 'darwin', ...)
        arch: Architecture as reported by the runtime ('x86_64', 'arm64', ...)
        platform_tag: Release platform tag, or None if unsupported
        arch_tag: Release arch tag, or None if unsupported
    """

    os: str
    arch: str
    platform_tag: Optional[str]
    arch_tag: Optional[str]

    def is_supported(self) -> bool:
        """True when a release artifact exists for this platform."""
        return self.platform_tag is not None and self.arch_tag is not None

    def platform_string(self) -> str:
        """
        Get the release platform string (e.g., 'linux_amd64').

        Example:
            >>> PlatformInfo("linux", "x86_64", "linux", "amd64").platform_string()
            'linux_amd64'
        """
        return f"{self.platform_tag}_{self.arch_tag}"

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}"


def map_os(os_name: str) -> Optional[str]:
    """Return the release platform tag for an OS name, or None."""
    return _OS_TAGS.get(os_name.lower())


def map_arch(arch_name: str) -> Optional[str]:
    """Return the release arch tag for an architecture name, or None."""
    return _ARCH_TAGS.get(arch_name.lower())


def map_platform(os_name: str, arch_name: str) -> Optional[Tuple[str, str]]:
    """
    Map an (OS, architecture) pair to (platform_tag, arch_tag).

    Args:
        os_name: OS identifier ('linux', 'Darwin', 'Windows', ...)
        arch_name: CPU architecture identifier ('x86_64', 'AMD64', 'arm64', ...)

    Returns:
        (platform_tag, arch_tag), or None when either half is unsupported

    Example:
        >>> map_platform("linux", "x64")
        ('linux', 'amd64')
        >>> map_platform("freebsd", "x64") is None
        True
    """
    platform_tag = map_os(os_name)
    arch_tag = map_arch(arch_name)
    if platform_tag is None or arch_tag is None:
        return None
    return platform_tag, arch_tag


def detect_platform(config: LauncherConfig) -> PlatformInfo:
    """
    Build PlatformInfo for the OS and architecture recorded in config.

    Args:
        config: Launcher configuration

    Returns:
        PlatformInfo (check is_supported() before using the tags)
    """
    tags = map_platform(config.system, config.machine)
    platform_tag, arch_tag = tags if tags else (None, None)
    return PlatformInfo(
        os=config.system,
        arch=config.machine,
        platform_tag=platform_tag,
        arch_tag=arch_tag,
    )


def get_supported_platforms() -> List[str]:
    """
    Get list of all supported release platform strings.

    Example:
        >>> get_supported_platforms()[0]
        'darwin_amd64'
    """
    return [
        "darwin_amd64",
        "darwin_arm64",
        "linux_amd64",
        "linux_arm64",
        "windows_amd64",
        "windows_arm64",
    ]


__all__ = [
    "PlatformInfo",
    "map_os",
    "map_arch",
    "map_platform",
    "detect_platform",
    "get_supported_platforms",
]
