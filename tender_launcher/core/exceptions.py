"""
Centralized exception hierarchy for the tender launcher.

Every failure that ends the launcher with a non-zero exit code is one of
these exceptions. The CLI catches LauncherError, prints the message to
stderr and exits 1.
"""

from typing import List, Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class LauncherError(Exception):
    """Base exception for all launcher errors."""

    pass


# ============================================================================
# Resolution Exceptions
# ============================================================================


class ConfigurationError(LauncherError):
    """Raised when launcher configuration is invalid (e.g. missing override path)."""

    pass


class UnsupportedPlatformError(LauncherError):
    """Raised when no release artifact exists for the current OS/arch pair."""

    def __init__(
        self, os_name: str, arch_name: str, supported: Optional[List[str]] = None
    ):
        self.os_name = os_name
        self.arch_name = arch_name
        self.supported = supported or []
        msg = f"Unsupported platform for tender: platform={os_name} arch={arch_name}"
        if self.supported:
            msg += f" (available: {', '.join(self.supported)})"
        super().__init__(msg)


class ProvisioningError(LauncherError):
    """Raised when the binary cannot be downloaded and no cached copy exists."""

    def __init__(
        self,
        platform_tag: str,
        arch_tag: str,
        version: str,
        url: str,
        cause: BaseException,
    ):
        self.platform_tag = platform_tag
        self.arch_tag = arch_tag
        self.version = version
        self.url = url
        self.cause = cause
        super().__init__(
            f"Unable to download tender binary for {platform_tag}/{arch_tag} "
            f"({version}). Tried: {url} Original error: {cause}"
        )


# ============================================================================
# Download Exceptions
# ============================================================================


class DownloadError(LauncherError):
    """Exception raised when fetching a release artifact fails."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
    ):
        self.status_code = status_code
        self.reason = reason
        super().__init__(message)


class DirectoryError(LauncherError):
    """Base exception for directory-related errors."""

    pass


class DirectoryCreationError(DirectoryError):
    """Raised when directory creation fails."""

    pass


# ============================================================================
# Process Exceptions
# ============================================================================


class ProcessError(LauncherError):
    """Base exception for delegated process failures."""

    pass


class StartupError(ProcessError):
    """Raised when the resolved binary cannot be started at all."""

    def __init__(self, path: str, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to start {path}: {cause}")


class SignalTerminationError(ProcessError):
    """Raised when the delegated binary is killed by a signal."""

    def __init__(self, signal_name: str):
        self.signal_name = signal_name
        super().__init__(f"tender terminated by signal {signal_name}")
