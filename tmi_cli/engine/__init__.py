"""Template instantiation engine.

Case-form derivation, ordered text substitution, and the two recursive tree
passes (content substitution and structural rename) used by the project
bootstrapper.
"""

from tmi_cli.engine.naming import CaseForms, derive_case_forms
from tmi_cli.engine.substitution import (
    RuleSet,
    SubstitutionRule,
    apply_rules,
    build_project_rules,
)
from tmi_cli.engine.tree import (
    CONTENT_EXTENSIONS,
    EXCLUDED_DIRS,
    remove_stale_paths,
    rename_tree,
    walk_and_substitute,
)

__all__ = [
    "CONTENT_EXTENSIONS",
    "CaseForms",
    "EXCLUDED_DIRS",
    "RuleSet",
    "SubstitutionRule",
    "apply_rules",
    "build_project_rules",
    "derive_case_forms",
    "remove_stale_paths",
    "rename_tree",
    "walk_and_substitute",
]
