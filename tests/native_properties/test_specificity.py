"""Tests that extra CPU features never make the selected tag less specific.

Specificity is the position of the selected rule in its cascade: a lower
index is a more specific build.
"""

from typing import Any

import pytest

from native_properties.cascades import default_registry
from native_properties.conditions import HostProfile
from native_properties.features import CpuDescription
from native_properties.platform_info import ArchFamily, PlatformInfo
from native_properties.rules import Cascade, CascadeRule

MACHINES = {
    ArchFamily.X86_32: "i686",
    ArchFamily.X86_64: "x86_64",
    ArchFamily.ARMV7: "armv7l",
    ArchFamily.ARMV8: "aarch64",
    ArchFamily.PPC64: "ppc64le",
    ArchFamily.LOONGARCH64: "loongarch64",
}

AMD_ZEN2 = {"vendor_id": "AuthenticAMD", "cpu_family": 23}


def rule_tokens(rule: CascadeRule) -> frozenset[str]:
    """The smallest feature set satisfying the rule's token clauses."""
    return frozenset(rule.all_of) | frozenset(rule.any_of[:1])


def selected_index(
    arch: ArchFamily, features: frozenset[str], **cpu: Any
) -> tuple[Cascade, int]:
    cascade = default_registry().get(arch)
    host = HostProfile(
        platform=PlatformInfo.from_uname("Linux", MACHINES[arch]),
        cpu=CpuDescription(features=features, **cpu),
    )
    return cascade, cascade.rules.index(cascade.select(host))


@pytest.mark.parametrize("arch", list(MACHINES))
def test_rule_tokens_select_that_rule_or_better(arch: ArchFamily) -> None:
    """Each rule's own tokens reach at least that rule, never below the base."""
    cascade = default_registry().get(arch)
    base_index = len(cascade.rules) - 1

    for index, rule in enumerate(cascade.rules):
        _, selected = selected_index(arch, rule_tokens(rule))

        assert selected <= base_index
        if not rule.when and not rule.unless:
            assert selected <= index, f"{cascade.name}: {rule.name} tokens selected rule {selected}"


@pytest.mark.parametrize(
    ("arch", "cpu"),
    [
        (ArchFamily.X86_64, {}),
        (ArchFamily.X86_64, AMD_ZEN2),
        (ArchFamily.X86_32, {}),
        (ArchFamily.LOONGARCH64, {}),
        (ArchFamily.ARMV7, {}),
        (ArchFamily.ARMV8, {}),
        (ArchFamily.PPC64, {}),
    ],
)
def test_adding_features_never_lowers_specificity(arch: ArchFamily, cpu: dict[str, Any]) -> None:
    """For every pair of rules, the union of their tokens selects no worse a rule."""
    cascade = default_registry().get(arch)
    token_sets = [frozenset()] + [rule_tokens(rule) for rule in cascade.rules]

    for present in token_sets:
        _, before = selected_index(arch, present, **cpu)
        for added in token_sets:
            _, after = selected_index(arch, present | added, **cpu)

            assert after <= before, (
                f"{cascade.name}: adding {sorted(added)} to {sorted(present)} "
                f"moved from rule {before} to {after}"
            )


class TestAmdErratum:
    """Test that the BMI2 exclusion still lands on a specific build."""

    def test_bmi2_with_avx2_selects_avx2(self) -> None:
        """Test that Zen 1/Zen 2 fall back to AVX2, not the base build."""
        cascade, selected = selected_index(
            ArchFamily.X86_64, frozenset({"avx2", "bmi2"}), **AMD_ZEN2
        )

        assert cascade.rules[selected].tag == "x86-64-avx2"
        assert selected < len(cascade.rules) - 1

    def test_adding_bmi2_keeps_avx2(self) -> None:
        """Test that BMI2 on an excluded core does not demote an AVX2 host."""
        _, without_bmi2 = selected_index(ArchFamily.X86_64, frozenset({"avx2"}), **AMD_ZEN2)
        _, with_bmi2 = selected_index(ArchFamily.X86_64, frozenset({"avx2", "bmi2"}), **AMD_ZEN2)

        assert with_bmi2 == without_bmi2

    def test_same_features_on_intel_select_bmi2(self) -> None:
        """Test that the exclusion is specific to AMD family 17h."""
        cascade, selected = selected_index(
            ArchFamily.X86_64,
            frozenset({"avx2", "bmi2"}),
            vendor_id="GenuineIntel",
            cpu_family=6,
        )

        assert cascade.rules[selected].tag == "x86-64-bmi2"
