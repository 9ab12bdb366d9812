"""
Unit tests for the platform mapping module.

Tests cover:
- OS and architecture tag mapping
- Unsupported combinations
- PlatformInfo helpers
- Detection from LauncherConfig
"""

import pytest

from tender_launcher.core.platform import (
    PlatformInfo,
    detect_platform,
    get_supported_platforms,
    map_arch,
    map_os,
    map_platform,
)


class TestMapPlatform:
    """Tests for map_platform()."""

    @pytest.mark.parametrize(
        "os_name,arch_name,expected",
        [
            ("darwin", "x86_64", ("darwin", "amd64")),
            ("darwin", "arm64", ("darwin", "arm64")),
            ("linux", "x86_64", ("linux", "amd64")),
            ("linux", "x64", ("linux", "amd64")),
            ("linux", "aarch64", ("linux", "arm64")),
            ("windows", "AMD64", ("windows", "amd64")),
            ("Windows", "ARM64", ("windows", "arm64")),
            ("win32", "x64", ("windows", "amd64")),
        ],
    )
    def test_supported_pairs(self, os_name, arch_name, expected):
        """Test every supported pair maps to its agreed tags."""
        assert map_platform(os_name, arch_name) == expected

    @pytest.mark.parametrize(
        "os_name,arch_name",
        [
            ("freebsd", "x86_64"),
            ("linux", "i686"),
            ("linux", "armv7l"),
            ("linux", "riscv64"),
            ("sunos", "sparc"),
            ("", ""),
        ],
    )
    def test_unsupported_pairs(self, os_name, arch_name):
        """Test unsupported pairs map to None."""
        assert map_platform(os_name, arch_name) is None

    def test_mapping_is_stable(self):
        """Test repeated calls give the same tags."""
        assert map_platform("linux", "x86_64") == map_platform("linux", "x86_64")


class TestMapHalves:
    """Tests for map_os() and map_arch()."""

    def test_map_os_macos_alias(self):
        """Test 'macos' is accepted as an alias for darwin."""
        assert map_os("macos") == "darwin"

    def test_map_os_unknown(self):
        """Test unknown OS returns None."""
        assert map_os("plan9") is None

    def test_map_arch_case_insensitive(self):
        """Test architecture names are case-insensitive."""
        assert map_arch("X86_64") == "amd64"

    def test_map_arch_unknown(self):
        """Test 32-bit x86 is not supported."""
        assert map_arch("x86") is None


class TestPlatformInfo:
    """Tests for PlatformInfo dataclass."""

    def test_platform_string(self):
        """Test release platform string."""
        info = PlatformInfo("linux", "x86_64", "linux", "amd64")
        assert info.platform_string() == "linux_amd64"

    def test_is_supported(self):
        """Test is_supported reflects tag presence."""
        assert PlatformInfo("linux", "x86_64", "linux", "amd64").is_supported()
        assert not PlatformInfo("linux", "mips", None, None).is_supported()

    def test_str(self):
        """Test string representation uses runtime names."""
        assert str(PlatformInfo("darwin", "arm64", "darwin", "arm64")) == "darwin/arm64"


class TestDetectPlatform:
    """Tests for detect_platform()."""

    def test_detect_from_config(self, make_config):
        """Test detection uses the OS and arch recorded in config."""
        info = detect_platform(make_config(system="darwin", machine="arm64"))

        assert info.platform_tag == "darwin"
        assert info.arch_tag == "arm64"
        assert info.is_supported()

    def test_detect_unsupported(self, make_config):
        """Test detection of an unsupported platform."""
        info = detect_platform(make_config(system="freebsd", machine="x86_64"))

        assert info.platform_tag is None
        assert not info.is_supported()


class TestSupportedPlatforms:
    """Tests for get_supported_platforms()."""

    def test_lists_six_platforms(self):
        """Test three OSes times two architectures are listed."""
        platforms = get_supported_platforms()

        assert len(platforms) == 6
        assert "linux_amd64" in platforms
        assert "windows_arm64" in platforms

    def test_listed_platforms_are_mappable(self):
        """Test each listed platform round-trips through map_platform."""
        for entry in get_supported_platforms():
            os_tag, arch_tag = entry.split("_")
            assert map_platform(os_tag, arch_tag) == (os_tag, arch_tag)
