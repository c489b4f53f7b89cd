"""Matching of free-text member names against vote table name lists.

Matching is a bag-of-tokens comparison: a member matches when any single
token of their full name equals any entry of the candidate list. Two
members sharing a surname both match the same table entry.
"""

import unicodedata
from collections.abc import Iterable


def normalize_name(name: str) -> str:
    """Decompose, strip combining marks and lower-case a name."""
    decomposed = unicodedata.normalize("NFD", name)
    stripped = "".join(ch for ch in decomposed if not "\u0300" <= ch <= "\u036f")
    return stripped.lower()


def normalize_candidates(candidate_names: Iterable[str]) -> set[str]:
    return {normalize_name(candidate) for candidate in candidate_names}


def name_tokens(full_name: str) -> list[str]:
    return normalize_name(full_name).split()


def matches_any(tokens: Iterable[str], normalized_candidates: set[str]) -> bool:
    return any(token in normalized_candidates for token in tokens)


def resolve(full_name: str, candidate_names: Iterable[str]) -> bool:
    """Return True if any token of full_name is among candidate_names.

    Examples:
        >>> resolve("José À.", ["jose"])
        True
        >>> resolve("Johnz Smithz", ["john", "jane", "doe"])
        False
    """
    return matches_any(name_tokens(full_name), normalize_candidates(candidate_names))
