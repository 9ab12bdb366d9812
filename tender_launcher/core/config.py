"""
Launcher configuration.

All environment lookups happen once, in LauncherConfig.from_environment(),
and the resulting frozen object is passed down to the platform mapper,
cache locator, resolver and CLI. Tests build configs directly with an
injected environment instead of patching os.environ.

Environment variables:
    TENDER_BINARY_PATH       : Use this binary, never download
    TENDER_CACHE_DIR         : Root directory for downloaded binaries
    TENDER_RELEASE_BASE_URL  : Base URL of the release download host
    TENDER_DOWNLOAD_TIMEOUT  : Network timeout in seconds (default: 60)
    TENDER_LOG_LEVEL         : Launcher log level (default: WARNING)
"""

import os
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from tender_launcher import __version__ as _fallback_version
from tender_launcher.core.exceptions import ConfigurationError

TOOL_NAME = "tender"
DISTRIBUTION_NAME = "tender-launcher"
DEFAULT_RELEASE_BASE_URL = "https://github.com/elimydlarz/tender/releases/download"
DEFAULT_TIMEOUT = 60

BINARY_PATH_ENV = "TENDER_BINARY_PATH"
CACHE_DIR_ENV = "TENDER_CACHE_DIR"
RELEASE_BASE_URL_ENV = "TENDER_RELEASE_BASE_URL"
TIMEOUT_ENV = "TENDER_DOWNLOAD_TIMEOUT"
LOG_LEVEL_ENV = "TENDER_LOG_LEVEL"

PACKAGE_ROOT = Path(__file__).resolve().parent.parent


def get_package_version() -> str:
    """
    Read the launcher version from installed package metadata.

    Falls back to the version baked into the package when running
    from a source checkout without distribution metadata.
    """
    try:
        from importlib.metadata import PackageNotFoundError, version

        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return _fallback_version


@dataclass(frozen=True)
class LauncherConfig:
    """
    Everything the launcher needs to know about its environment.

    Attributes:
        version: Launcher (and delegated binary) version, e.g. '1.2.3'
        system: Lowercased OS name as reported by platform.system()
        machine: Lowercased CPU architecture as reported by platform.machine()
        environ: Snapshot of the process environment
        cwd: Working directory used for local bin/ lookup
        package_root: Installed package directory used for bundled bin/ lookup
        release_base_url: Base URL for release artifacts (no trailing slash)
        binary_override: Explicit binary path from TENDER_BINARY_PATH
        timeout: Network timeout in seconds
    """

    version: str
    system: str
    machine: str
    environ: Mapping[str, str] = field(default_factory=dict, repr=False)
    cwd: Path = field(default_factory=Path.cwd)
    package_root: Path = PACKAGE_ROOT
    release_base_url: str = DEFAULT_RELEASE_BASE_URL
    binary_override: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    tool_name: str = TOOL_NAME

    @property
    def is_windows(self) -> bool:
        """True when the current OS needs the .exe suffix."""
        return self.system in ("windows", "win32")

    @property
    def executable_name(self) -> str:
        """File name of the delegated binary, e.g. 'tender' or 'tender.exe'."""
        return f"{self.tool_name}.exe" if self.is_windows else self.tool_name

    @classmethod
    def from_environment(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        system: Optional[str] = None,
        machine: Optional[str] = None,
        cwd: Optional[Path] = None,
        version: Optional[str] = None,
    ) -> "LauncherConfig":
        """
        Build configuration from the process environment.

        Args:
            environ: Environment mapping (default: os.environ)
            system: OS name override (default: platform.system())
            machine: Architecture override (default: platform.machine())
            cwd: Working directory override (default: Path.cwd())
            version: Version override (default: package metadata)

        Returns:
            LauncherConfig instance

        Raises:
            ConfigurationError: If TENDER_DOWNLOAD_TIMEOUT is not a positive number
        """
        env = dict(os.environ if environ is None else environ)

        base_url = env.get(RELEASE_BASE_URL_ENV) or DEFAULT_RELEASE_BASE_URL

        return cls(
            version=version or get_package_version(),
            system=(system or platform.system()).lower(),
            machine=(machine or platform.machine()).lower(),
            environ=env,
            cwd=Path(cwd) if cwd is not None else Path.cwd(),
            release_base_url=base_url.rstrip("/"),
            binary_override=env.get(BINARY_PATH_ENV) or None,
            timeout=_parse_timeout(env.get(TIMEOUT_ENV)),
        )


def _parse_timeout(raw: Optional[str]) -> float:
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(
            f"{TIMEOUT_ENV} must be a number of seconds, got: {raw!r}"
        )
    if value <= 0:
        raise ConfigurationError(f"{TIMEOUT_ENV} must be positive, got: {raw!r}")
    return value


__all__ = [
    "LauncherConfig",
    "get_package_version",
    "TOOL_NAME",
    "DEFAULT_RELEASE_BASE_URL",
    "BINARY_PATH_ENV",
    "CACHE_DIR_ENV",
    "RELEASE_BASE_URL_ENV",
    "TIMEOUT_ENV",
    "LOG_LEVEL_ENV",
]
