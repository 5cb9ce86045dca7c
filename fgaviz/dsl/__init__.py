"""Model text — dataclasses, extraction, reference resolution, formatting."""

from .models import (
    NodeKind, RelationEntry, TypeNode, ConditionNode, ParsedModel,
)
from .parsing import parse_model, extract_types, extract_conditions
from .references import (
    is_computed, extract_references, extract_type_name, extract_condition_name,
)
from .formatting import format_model
from .samples import DEFAULT_MODEL

__all__ = [
    # Models
    "NodeKind", "RelationEntry", "TypeNode", "ConditionNode", "ParsedModel",
    # Extraction
    "parse_model", "extract_types", "extract_conditions",
    # References
    "is_computed", "extract_references", "extract_type_name",
    "extract_condition_name",
    # Formatting / samples
    "format_model", "DEFAULT_MODEL",
]
