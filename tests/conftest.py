"""
Pytest configuration and shared fixtures for tender launcher tests.
"""

from dataclasses import replace
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest

from tender_launcher.core.config import LauncherConfig


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def isolated_home(tmp_path: Path) -> Path:
    """Create an empty home directory for cache path tests."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()
    return fake_home


@pytest.fixture
def cache_root(tmp_path: Path) -> Path:
    """Cache root used through TENDER_CACHE_DIR."""
    root = tmp_path / "cache"
    root.mkdir()
    return root


@pytest.fixture
def make_config(tmp_path: Path, cache_root: Path, isolated_home: Path) -> Callable[..., LauncherConfig]:
    """
    Factory for LauncherConfig isolated from the real machine.

    The working directory and package root are empty temporary directories,
    so no local bin/ candidate exists unless a test creates one.

    Example:
        def test_something(make_config):
            config = make_config(system="darwin", machine="arm64")
    """
    workdir = tmp_path / "work"
    workdir.mkdir()
    package_root = tmp_path / "site-packages" / "tender_launcher"
    package_root.mkdir(parents=True)

    def factory(
        system: str = "linux",
        machine: str = "x86_64",
        version: str = "1.2.3",
        env: Optional[Dict[str, str]] = None,
    ) -> LauncherConfig:
        environ = {"HOME": str(isolated_home), "TENDER_CACHE_DIR": str(cache_root)}
        environ.update(env or {})
        config = LauncherConfig.from_environment(
            environ=environ,
            system=system,
            machine=machine,
            cwd=workdir,
            version=version,
        )
        return replace(config, package_root=package_root)

    return factory


@pytest.fixture
def forbidden_fetcher():
    """Fetcher that fails the test if any download is attempted."""

    def fetch(url, destination, timeout=None):
        pytest.fail(f"unexpected download of {url}")

    return fetch


@pytest.fixture
def recording_fetcher():
    """
    Fetcher that writes fixed content and records every call.

    Returns:
        The fetch function; its ``calls`` attribute lists (url, destination).
    """
    calls = []

    def fetch(url, destination, timeout=None):
        calls.append((url, Path(destination)))
        Path(destination).write_bytes(b"#!/bin/sh\nexit 0\n")
        return Path(destination)

    fetch.calls = calls
    return fetch
