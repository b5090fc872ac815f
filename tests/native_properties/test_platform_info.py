"""Tests for normalisation of the host identity."""

import pytest
from pydantic import ValidationError

from native_properties.platform_info import (
    ArchFamily,
    OSFamily,
    PlatformInfo,
    normalise_arch,
    normalise_os,
)


class TestNormaliseOS:
    """Test normalise_os mapping."""

    @pytest.mark.parametrize(
        ("system", "expected"),
        [
            ("Linux", OSFamily.LINUX),
            ("Darwin", OSFamily.DARWIN),
            ("MSYS_NT-10.0-19045", OSFamily.WINDOWS_EMU),
            ("CYGWIN_NT-10.0", OSFamily.WINDOWS_EMU),
            ("MINGW64_NT-10.0", OSFamily.WINDOWS_EMU),
            ("MINGW64_ARM64_NT-10.0", OSFamily.WINDOWS_EMU),
            ("Plan9", OSFamily.UNSUPPORTED),
            ("FreeBSD", OSFamily.UNSUPPORTED),
            ("", OSFamily.UNSUPPORTED),
        ],
    )
    def test_maps_system_to_family(self, system: str, expected: OSFamily) -> None:
        """Test that known identifiers map to their family."""
        assert normalise_os(system) is expected

    @pytest.mark.parametrize("system", ["linux", "LINUX", "darwin", "msys_nt-10.0"])
    def test_matching_is_case_sensitive(self, system: str) -> None:
        """Test that identifiers in the wrong case are not recognised."""
        assert normalise_os(system) is OSFamily.UNSUPPORTED


class TestNormaliseArch:
    """Test normalise_arch mapping."""

    @pytest.mark.parametrize(
        ("machine", "expected"),
        [
            ("x86_64", ArchFamily.X86_64),
            ("amd64", ArchFamily.X86_64),
            ("i386", ArchFamily.X86_32),
            ("i486", ArchFamily.X86_32),
            ("i586", ArchFamily.X86_32),
            ("i686", ArchFamily.X86_32),
            ("x86", ArchFamily.X86_32),
            ("aarch64", ArchFamily.ARMV8),
            ("arm64", ArchFamily.ARMV8),
            ("armv7l", ArchFamily.ARMV7),
            ("armv7a", ArchFamily.ARMV7),
            ("armv6l", ArchFamily.ARMV6),
            ("armv5tel", ArchFamily.ARMV5),
            ("armv4l", ArchFamily.ARMV5),
            ("ppc64", ArchFamily.PPC64),
            ("ppc64le", ArchFamily.PPC64),
            ("powerpc64le", ArchFamily.PPC64),
            ("ppc", ArchFamily.PPC32),
            ("ppc32", ArchFamily.PPC32),
            ("powerpc", ArchFamily.PPC32),
            ("loongarch64", ArchFamily.LOONGARCH64),
            ("riscv64", ArchFamily.RISCV64),
            ("e2k", ArchFamily.E2K),
        ],
    )
    def test_maps_machine_to_family(self, machine: str, expected: ArchFamily) -> None:
        """Test that known machine strings map to their family."""
        assert normalise_arch(machine) is expected

    @pytest.mark.parametrize("machine", ["mips64", "sparc64", "s390x", "i786", "x86_32", ""])
    def test_unrecognised_machine_is_unknown(self, machine: str) -> None:
        """Test that anything else is the unknown family."""
        assert normalise_arch(machine) is ArchFamily.UNKNOWN


class TestPlatformInfo:
    """Test PlatformInfo construction."""

    def test_from_uname_normalises_both_fields(self) -> None:
        """Test that raw values are kept alongside their families."""
        platform = PlatformInfo.from_uname("Linux", "aarch64")

        assert platform.system == "Linux"
        assert platform.machine == "aarch64"
        assert platform.os_family is OSFamily.LINUX
        assert platform.arch_family is ArchFamily.ARMV8
        assert platform.is_supported

    def test_bit_width_kept_for_unknown_arch(self) -> None:
        """Test that the bit-width hint survives for unknown architectures."""
        platform = PlatformInfo.from_uname("Darwin", "mips64", 64)

        assert platform.arch_family is ArchFamily.UNKNOWN
        assert platform.bit_width == 64

    def test_bit_width_dropped_for_known_arch(self) -> None:
        """Test that the hint is discarded when the cascade decides."""
        platform = PlatformInfo.from_uname("Linux", "x86_64", 32)

        assert platform.bit_width is None

    def test_unsupported_platform_is_not_supported(self) -> None:
        """Test is_supported for an unknown OS."""
        assert not PlatformInfo.from_uname("Plan9", "x86_64").is_supported

    @pytest.mark.parametrize(
        ("machine", "expected"), [("ppc64le", True), ("ppc64", False), ("x86_64", False)]
    )
    def test_is_little_endian(self, machine: str, expected: bool) -> None:
        """Test little-endian detection from the machine string."""
        assert PlatformInfo.from_uname("Linux", machine).is_little_endian is expected

    def test_platform_info_is_immutable(self) -> None:
        """Test that platform info cannot be modified after creation."""
        platform = PlatformInfo.from_uname("Linux", "x86_64")

        with pytest.raises(ValidationError):
            platform.machine = "aarch64"  # type: ignore[misc]

    def test_rejects_invalid_bit_width(self) -> None:
        """Test that only 32 and 64 are valid bit widths."""
        with pytest.raises(ValidationError):
            PlatformInfo(
                system="Linux",
                machine="mips",
                os_family=OSFamily.LINUX,
                arch_family=ArchFamily.UNKNOWN,
                bit_width=16,  # type: ignore[arg-type]
            )
