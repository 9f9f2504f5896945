"""Ordered literal text substitution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from tmi_cli.config import LegacyTokens, ProjectParams
    from tmi_cli.engine.naming import CaseForms

__all__ = [
    "SubstitutionRule",
    "RuleSet",
    "apply_rules",
    "build_project_rules",
    "find_rule_conflicts",
]


@dataclass(frozen=True, slots=True)
class SubstitutionRule:
    """Replace every occurrence of ``pattern`` with ``replacement``."""

    pattern: str
    replacement: str

    def apply(self, text: str) -> str:
        if not self.pattern:
            return text
        return text.replace(self.pattern, self.replacement)


# Rules run in sequence; a mapping would lose the order guarantee.
RuleSet = tuple[SubstitutionRule, ...]


def apply_rules(text: str, rules: Iterable[SubstitutionRule]) -> str:
    """Apply *rules* in order, each one over the output of the previous.

    A rule that matches nothing is a no-op.  Because rule ``k`` sees the
    result of rule ``k - 1``, a replacement that contains a later rule's
    pattern is rewritten again by that later rule; the most specific
    patterns must therefore come first.
    """
    for rule in rules:
        text = rule.apply(text)
    return text


def find_rule_conflicts(rules: RuleSet) -> list[tuple[SubstitutionRule, SubstitutionRule]]:
    """Return ``(earlier, later)`` pairs where ``later`` rewrites ``earlier``'s output."""
    conflicts: list[tuple[SubstitutionRule, SubstitutionRule]] = []
    for index, earlier in enumerate(rules):
        for later in rules[index + 1 :]:
            if later.pattern == later.replacement:
                continue
            if later.pattern and later.pattern in earlier.replacement:
                conflicts.append((earlier, later))
    return conflicts


def build_project_rules(
    forms: CaseForms,
    params: ProjectParams,
    legacy: LegacyTokens,
) -> RuleSet:
    """Return the rule set that turns the template into the new project.

    Order: bundle id, npm slug, then the PascalCase name.  The bare
    lowercase token has no rule of its own: the kebab name and the bundle
    id may contain it, so rewriting it would substitute those twice.
    """
    return (
        SubstitutionRule(legacy.bundle_id, params.bundle_id),
        SubstitutionRule(legacy.slug, forms.kebab),
        SubstitutionRule(legacy.name, forms.pascal),
    )
