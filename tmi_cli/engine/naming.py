"""Case-form derivation for a single human supplied name."""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = ["CaseForms", "derive_case_forms", "split_words"]


_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")
_CASE_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


@dataclass(frozen=True, slots=True)
class CaseForms:
    """The four identifier spellings of one name.

    Attributes
    ----------
    kebab:
        Lowercase words joined with ``-`` (directory and npm names).
    pascal:
        Capitalised words with no separator (type and component names).
    camel:
        :attr:`pascal` with the first character lowercased.
    snake:
        :attr:`kebab` with ``-`` replaced by ``_``.
    """

    kebab: str
    pascal: str
    camel: str
    snake: str

    @property
    def compact(self) -> str:
        """Lowercase words with no separator, e.g. bundle id segments."""
        return self.kebab.replace("-", "")

    def is_empty(self) -> bool:
        return not self.pascal


def split_words(value: str) -> list[str]:
    """Split *value* on separators and lower-to-upper case transitions.

    ``"user-profile"``, ``"user_profile"``, ``"userProfile"`` and
    ``"UserProfile"`` all yield ``["user", "Profile"]``-style word lists
    (original casing preserved).
    """
    words: list[str] = []
    for chunk in _SEPARATORS.split(value):
        if not chunk:
            continue
        words.extend(part for part in _CASE_BOUNDARY.split(chunk) if part)
    return words


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def derive_case_forms(name: str) -> CaseForms:
    """Return the :class:`CaseForms` of *name*.

    Pure and deterministic.  An empty (or separator-only) name yields a record
    of empty strings; callers decide whether that is acceptable.
    """
    words = split_words(name)
    pascal = "".join(_capitalize(word) for word in words)
    camel = pascal[:1].lower() + pascal[1:]
    kebab = "-".join(word.lower() for word in words)
    return CaseForms(
        kebab=kebab,
        pascal=pascal,
        camel=camel,
        snake=kebab.replace("-", "_"),
    )
