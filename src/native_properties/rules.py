"""Pydantic types for classification cascades.

This module defines:

- CascadeRule: One (predicate, tag) entry of a cascade. The predicate is the
  conjunction of its feature-token and host-condition clauses.
- Cascade: An ordered, first-match-wins list of rules for one or more
  architecture families, always ending in an unconditional fallback rule.
"""

from __future__ import annotations

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from native_properties.conditions import HostCondition, HostProfile, check_condition
from native_properties.features import normalise_token
from native_properties.platform_info import ArchFamily

_TAG_PATTERN = r"^[a-z0-9]+(-[a-z0-9]+)*$"


class CascadeRule(BaseModel):
    """A single classification rule.

    A rule matches when all of these hold:

    - every token in ``all_of`` is present
    - at least one token in ``any_of`` is present (skipped when empty)
    - every condition in ``when`` holds
    - no condition in ``unless`` holds

    A rule with no clauses at all is unconditional and always matches.

    Attributes:
        name: Identifier of the rule, unique within its cascade
        description: What the rule selects and why
        tag: Result tag produced when the rule matches

    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Unique name for this rule")
    description: str = Field(
        min_length=1, description="Human-readable description of what this rule selects"
    )
    tag: str = Field(pattern=_TAG_PATTERN, description="Tag emitted on match")
    all_of: tuple[str, ...] = Field(
        default=(), description="Feature tokens that must all be present"
    )
    any_of: tuple[str, ...] = Field(
        default=(), description="Feature tokens of which one must be present"
    )
    when: tuple[HostCondition, ...] = Field(
        default=(), description="Host conditions that must all hold"
    )
    unless: tuple[HostCondition, ...] = Field(
        default=(), description="Host conditions that veto the rule"
    )

    @field_validator("all_of", "any_of")
    @classmethod
    def validate_canonical_tokens(cls, tokens: tuple[str, ...]) -> tuple[str, ...]:
        """Validate that tokens use the canonical spelling produced at extraction."""
        for token in tokens:
            if not token or normalise_token(token) != token:
                raise ValueError(
                    f"Feature token {token!r} is not canonical; "
                    f"expected {normalise_token(token)!r}"
                )
        return tokens

    @property
    def is_unconditional(self) -> bool:
        """Whether the rule matches any host."""
        return not (self.all_of or self.any_of or self.when or self.unless)

    def matches(self, host: HostProfile) -> bool:
        """Evaluate the rule against the host."""
        if not host.cpu.has_all(self.all_of):
            return False
        if self.any_of and not host.cpu.has_any(self.any_of):
            return False
        if not all(check_condition(condition, host) for condition in self.when):
            return False
        return not any(check_condition(condition, host) for condition in self.unless)


class Cascade(BaseModel):
    """Ordered classification rules for one or more architecture families."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Canonical name of the cascade")
    version: str = Field(
        pattern=r"^\d+\.\d+\.\d+$", description='Semantic version (e.g., "1.0.0")'
    )
    description: str = Field(
        min_length=1, description="Description of the architectures covered"
    )
    architectures: tuple[ArchFamily, ...] = Field(
        min_length=1, description="Architecture families classified by this cascade"
    )
    rules: tuple[CascadeRule, ...] = Field(
        min_length=1, description="Rules in priority order, most specific first"
    )

    @field_validator("rules")
    @classmethod
    def validate_unique_rule_names(
        cls, rules: tuple[CascadeRule, ...]
    ) -> tuple[CascadeRule, ...]:
        """Validate that rule names are unique within the cascade."""
        names = [rule.name for rule in rules]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate rule names found: {duplicates}")
        return rules

    @model_validator(mode="after")
    def validate_total_order(self) -> Cascade:
        """Ensure the cascade always yields a tag and has no unreachable rules."""
        *leading, fallback = self.rules
        if not fallback.is_unconditional:
            raise ValueError(
                f"Cascade '{self.name}' must end with an unconditional rule, "
                f"got '{fallback.name}'"
            )
        shadowing = [rule.name for rule in leading if rule.is_unconditional]
        if shadowing:
            raise ValueError(
                f"Cascade '{self.name}' has unconditional rules before the end: "
                f"{shadowing}"
            )
        return self

    @property
    def fallback(self) -> CascadeRule:
        """The architecture base rule."""
        return self.rules[-1]

    @property
    def tags(self) -> tuple[str, ...]:
        """Distinct tags in priority order."""
        return tuple(dict.fromkeys(rule.tag for rule in self.rules))

    def select(self, host: HostProfile) -> CascadeRule:
        """Return the first rule that matches the host."""
        return next(rule for rule in self.rules if rule.matches(host))

    def evaluate(self, host: HostProfile) -> list[tuple[CascadeRule, bool]]:
        """Evaluate every rule, for diagnostics. Priority order is preserved."""
        return [(rule, rule.matches(host)) for rule in self.rules]
