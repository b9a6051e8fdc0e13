"""Deterministic text normalization and token-set similarity.

Every equivalence decision in the engine has to be explainable to an
auditor, so similarity is plain Jaccard overlap of normalized token sets
rather than an embedding distance.

Normalization:
- lowercase
- drop every character that is neither alphanumeric nor whitespace
- collapse whitespace
- split into a set of tokens (duplicates collapse)
"""

import re

_NON_ALNUM_RE = re.compile(r"[^\w\s]|_")
_MULTISPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lowercase, strip punctuation and collapse whitespace."""
    if not text:
        return ""
    cleaned = _NON_ALNUM_RE.sub("", text.lower())
    return _MULTISPACE_RE.sub(" ", cleaned).strip()


def normalize(text: str) -> frozenset[str]:
    """Normalize text into its token set."""
    normalized = normalize_text(text)
    if not normalized:
        return frozenset()
    return frozenset(normalized.split(" "))


def jaccard(left: frozenset[str], right: frozenset[str]) -> float:
    """Jaccard overlap of two token sets; 0.0 when either side is empty."""
    if not left or not right:
        return 0.0
    return len(left & right) / len(left | right)


def similarity(text_a: str, text_b: str) -> float:
    """
    Symmetric similarity score in [0, 1] between two text fragments.

    Identical normalized strings score 1.0. A side that normalizes to
    nothing scores 0.0 instead of dividing by zero.

    Example:
        >>> similarity("CardioFlow Stent", "cardioflow stent!")
        1.0
        >>> similarity("", "")
        0.0
    """
    norm_a = normalize_text(text_a)
    norm_b = normalize_text(text_b)
    if not norm_a or not norm_b:
        return 0.0
    if norm_a == norm_b:
        return 1.0
    return jaccard(frozenset(norm_a.split(" ")), frozenset(norm_b.split(" ")))


def mean_pairwise_similarity(token_sets: list[frozenset[str]]) -> float:
    """Mean Jaccard similarity over every unordered pair; 0.0 with fewer than two sets."""
    total = 0.0
    comparisons = 0
    for i in range(len(token_sets)):
        for j in range(i + 1, len(token_sets)):
            total += jaccard(token_sets[i], token_sets[j])
            comparisons += 1
    return total / comparisons if comparisons else 0.0


def contains_any(text: str, keywords: tuple[str, ...] | list[str]) -> list[str]:
    """Return the keywords found in text (case-insensitive substring match), in keyword order."""
    lowered = text.lower()
    return [keyword for keyword in keywords if keyword.lower() in lowered]


__all__ = [
    "contains_any",
    "jaccard",
    "mean_pairwise_similarity",
    "normalize",
    "normalize_text",
    "similarity",
]
