"""Reference resolution — classify relation definitions and pull out tokens.

Everything here is a pure ``str -> value`` function.  The token scan is a
heuristic for drawing edges, not a grammar: it never raises and never
deduplicates.
"""

from __future__ import annotations

import re


RESERVED_WORDS = frozenset({"or", "and", "from", "with"})

_COMPUTED_MARKERS = (" or ", " and ", " from ")

# identifier, optional "#relation", optional " with condition"; the
# surrounding list brackets are matched but left outside the token.
_REFERENCE_RE = re.compile(
    r"\[?([a-zA-Z_][a-zA-Z0-9_]*(?:#[a-zA-Z_][a-zA-Z0-9_]*)?(?:\s+with\s+[a-zA-Z_][a-zA-Z0-9_]*)?)\]?"
)
_CONDITION_QUALIFIER_RE = re.compile(r"\swith\s+([a-zA-Z_][a-zA-Z0-9_]*)")


def is_computed(definition: str) -> bool:
    """True if the relation combines (``or``/``and``) or indirects (``from``)."""
    return any(marker in definition for marker in _COMPUTED_MARKERS)


def extract_references(definition: str) -> list[str]:
    """Return raw reference tokens in the order they appear.

    >>> extract_references("[user, organization#member] or editor")
    ['user', 'organization#member', 'editor']
    """
    refs: list[str] = []
    for match in _REFERENCE_RE.finditer(definition):
        ref = match.group(1)
        if ref not in RESERVED_WORDS:
            refs.append(ref)
    return refs


def extract_type_name(ref: str) -> str:
    """Normalize a single raw token to the type (node key) it points at.

    ``[user]`` -> ``user``, ``organization#member`` -> ``organization``,
    ``user with time_valid`` -> ``user``.
    """
    ref = ref.strip()
    if ref.startswith("["):
        ref = ref[1:]
    if ref.endswith("]"):
        ref = ref[:-1]
    ref = ref.split("#", 1)[0]
    ref = ref.split(" with ", 1)[0]
    return ref.strip()


def extract_condition_name(ref: str) -> str | None:
    """Return the condition named by a ``... with <condition>`` token, if any."""
    match = _CONDITION_QUALIFIER_RE.search(ref)
    if match is None:
        return None
    return match.group(1)
