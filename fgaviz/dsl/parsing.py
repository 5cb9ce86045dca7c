"""Model text extraction — convert raw DSL text into graph nodes.

Best-effort and display-only: anything that does not look like a type
header, a relation definition or a condition block is skipped.
"""

from __future__ import annotations

import logging
import re

from .models import ConditionNode, ParsedModel, RelationEntry, TypeNode
from .references import extract_references, is_computed


log = logging.getLogger(__name__)


# The expression runs to the first closing brace, so a body that itself
# contains "}" is cut short.
_CONDITION_RE = re.compile(
    r"condition\s+(\w+)\(([^)]+)\)\s*\{([^}]+)\}",
    re.DOTALL,
)


def parse_model(text: str) -> ParsedModel:
    """Extract both node lists from one text buffer."""
    return ParsedModel(
        types=extract_types(text),
        conditions=extract_conditions(text),
    )


def extract_types(text: str) -> list[TypeNode]:
    """Scan line by line for ``type`` headers and their ``define`` lines."""
    types: list[TypeNode] = []
    current: TypeNode | None = None

    for line in text.splitlines():
        trimmed = line.strip()

        if trimmed.startswith("type "):
            current = TypeNode(name=trimmed[5:].strip())
            types.append(current)
        elif trimmed.startswith("define ") and current is not None:
            rel = _parse_relation(trimmed[7:])
            if rel is None:
                log.debug("Skipped define line without a relation name: %r", trimmed)
            else:
                current.relations.append(rel)
        elif trimmed.startswith("define "):
            log.debug("Skipped define line outside a type: %r", trimmed)

    return types


def _parse_relation(body: str) -> RelationEntry | None:
    """Split ``name: definition`` at the first colon."""
    colon = body.find(":")
    if colon <= 0:
        return None
    definition = body[colon + 1:].strip()
    return RelationEntry(
        name=body[:colon].strip(),
        definition=definition,
        is_computed=is_computed(definition),
        references=extract_references(definition),
        truncated=definition,
    )


def extract_conditions(text: str) -> list[ConditionNode]:
    """Find ``condition name(params) { expression }`` blocks in file order."""
    return [
        ConditionNode(
            name=m.group(1),
            params=m.group(2).strip(),
            expression=m.group(3).strip(),
        )
        for m in _CONDITION_RE.finditer(text)
    ]
