"""
Text similarity helpers for comparing profile and posting fields.

Responsibilities:
- Normalize free-text tokens before comparison.
- Containment, synonym and related-term matching.
- Rough US state extraction from location strings.

Non-Responsibilities:
- No weighting logic.
- No threshold logic.

The lookup tables below are the recognized extension point. They are built
once at import and cannot be mutated.
"""

from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional


def _freeze(table: dict) -> Mapping[str, FrozenSet[str]]:
    return MappingProxyType({key: frozenset(values) for key, values in table.items()})


# canonical skill -> aliases
SYNONYMS: Mapping[str, FrozenSet[str]] = _freeze({
    "javascript": ["js", "node.js", "nodejs"],
    "typescript": ["ts"],
    "python": ["py"],
    "machine learning": ["ml", "ai", "artificial intelligence"],
    "user interface": ["ui", "frontend"],
    "user experience": ["ux", "design"],
    "database": ["sql", "postgresql", "mysql"],
    "web development": ["frontend", "backend", "fullstack"],
})

# canonical interest -> substrings that count as a loose match
RELATED_INTEREST_TERMS: Mapping[str, FrozenSet[str]] = _freeze({
    "artificial intelligence": ["ai", "machine learning", "ml", "neural", "deep learning"],
    "web development": ["frontend", "backend", "fullstack", "web", "javascript", "react"],
    "mobile development": ["mobile", "ios", "android", "app", "react native"],
    "data science": ["data", "analytics", "statistics", "python", "sql"],
    "fintech": ["finance", "banking", "payment", "trading", "financial"],
    "healthcare tech": ["health", "medical", "patient", "clinical"],
    "cybersecurity": ["security", "cyber", "encryption", "privacy"],
})

# Priority order matters: the first code found wins, not the first in the string.
STATE_CODES = (
    "ca", "ny", "tx", "fl", "wa", "ma", "il", "pa", "oh", "ga",
    "nc", "mi", "nj", "va", "tn", "in", "az", "mo", "md", "wi",
    "mn", "co", "al", "sc", "la", "ky", "or", "ok", "ct", "ia",
    "ms", "ar", "ks", "ut", "nv", "nm", "ne", "wv", "id", "hi",
    "nh", "me", "ri", "mt", "de", "sd", "nd", "ak", "vt", "wy",
)


def normalize(text: Optional[str]) -> str:
    """Lower-case only. Whitespace and punctuation are kept as-is."""
    if text is None:
        return ""
    return text.lower()


def tokens_overlap(a: str, b: str) -> bool:
    """True if the tokens are equal or either contains the other.

    Short tokens over-match (e.g. "js" inside "javascript-heavy"); this is
    accepted behavior.
    """
    a, b = normalize(a), normalize(b)
    return a == b or a in b or b in a


def are_synonyms(a: str, b: str) -> bool:
    a, b = normalize(a), normalize(b)
    for canonical, aliases in SYNONYMS.items():
        if (canonical == a and b in aliases) or (canonical == b and a in aliases):
            return True
    return False


def related_interest_terms(interest: str) -> Optional[FrozenSet[str]]:
    """Related substrings for a known interest, or None for unknown ones."""
    return RELATED_INTEREST_TERMS.get(normalize(interest))


def extract_state_code(location: Optional[str]) -> Optional[str]:
    """
    Find a two-letter US state code in a location string.

    This is a substring heuristic, not a geocoder: "Portland, OR" yields
    "la" because "la" precedes "or" in STATE_CODES.

    Returns:
        The first code of STATE_CODES contained in the location, or None
    """
    loc = normalize(location)
    for code in STATE_CODES:
        if code in loc:
            return code
    return None
