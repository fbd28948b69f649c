"""Tests for platform detection functionality."""

from __future__ import annotations

import itertools
from unittest.mock import patch

import pytest

from las_action.bootstrap.platform import (
    DARWIN_ARCH,
    SUPPORTED_ARCH,
    SUPPORTED_OS,
    PlatformInfo,
    detect_arch,
    detect_os,
    get_platform_info,
    host_arch,
    normalize_arch,
)
from las_action.core.errors import UnsupportedPlatformError


class TestDetectOS:
    """Tests for OS detection."""

    def test_detect_os_darwin(self) -> None:
        with patch("platform.system", return_value="Darwin"):
            assert detect_os() == "darwin"

    def test_detect_os_linux(self) -> None:
        with patch("platform.system", return_value="Linux"):
            assert detect_os() == "linux"

    def test_detect_os_windows_raises(self) -> None:
        with patch("platform.system", return_value="Windows"):
            with pytest.raises(UnsupportedPlatformError, match="'darwin', 'linux'"):
                detect_os()


class TestDetectArch:
    """Tests for architecture detection."""

    @pytest.mark.parametrize(
        ("machine", "expected"),
        [
            ("x86_64", "x64"),
            ("AMD64", "x64"),
            ("aarch64", "arm64"),
            ("arm64", "arm64"),
            ("armv7l", "arm"),
        ],
    )
    def test_detect_arch(self, machine: str, expected: str) -> None:
        with patch("platform.machine", return_value=machine):
            assert detect_arch() == expected

    def test_detect_arch_unknown_raises(self) -> None:
        with patch("platform.machine", return_value="mips"):
            with pytest.raises(UnsupportedPlatformError) as exc_info:
                detect_arch()
        message = str(exc_info.value)
        assert "'mips' is not supported" in message
        assert "'arm', 'arm64', 'x64'" in message


class TestHostArch:
    def test_unknown_machine(self) -> None:
        assert host_arch("ppc64le") is None


class TestNormalizeArch:
    """Tests for architecture normalization."""

    def test_arm_aliased_to_arm64(self) -> None:
        assert normalize_arch("linux", "arm") == "arm64"

    def test_x64_renamed_to_amd64(self) -> None:
        assert normalize_arch("linux", "x64") == "amd64"

    def test_arm64_unchanged(self) -> None:
        assert normalize_arch("linux", "arm64") == "arm64"

    @pytest.mark.parametrize("arch", SUPPORTED_ARCH)
    def test_darwin_always_universal(self, arch: str) -> None:
        assert normalize_arch("darwin", arch) == DARWIN_ARCH

    def test_total_over_supported_pairs(self) -> None:
        results = {
            (os_name, arch): normalize_arch(os_name, arch)
            for os_name, arch in itertools.product(SUPPORTED_OS, SUPPORTED_ARCH)
        }
        assert results == {
            ("darwin", "arm"): "all",
            ("darwin", "arm64"): "all",
            ("darwin", "x64"): "all",
            ("linux", "arm"): "arm64",
            ("linux", "arm64"): "arm64",
            ("linux", "x64"): "amd64",
        }


class TestPlatformInfo:
    """Tests for PlatformInfo dataclass."""

    def test_bundle_name(self) -> None:
        info = PlatformInfo(os="linux", arch="amd64")
        assert info.bundle_name == "linux-amd64"

    def test_asset_suffix(self) -> None:
        info = PlatformInfo(os="darwin", arch="all")
        assert info.asset_suffix == "darwin_all"


class TestGetPlatformInfo:
    """Tests for get_platform_info function."""

    def test_linux_x86_64(self) -> None:
        with patch("platform.system", return_value="Linux"):
            with patch("platform.machine", return_value="x86_64"):
                assert get_platform_info() == PlatformInfo(os="linux", arch="amd64")

    def test_linux_arm(self) -> None:
        with patch("platform.system", return_value="Linux"):
            with patch("platform.machine", return_value="arm"):
                assert get_platform_info() == PlatformInfo(os="linux", arch="arm64")

    def test_darwin_arm64(self) -> None:
        with patch("platform.system", return_value="Darwin"):
            with patch("platform.machine", return_value="arm64"):
                info = get_platform_info()
                assert info.arch == "all"
                assert info.bundle_name == "darwin-all"
