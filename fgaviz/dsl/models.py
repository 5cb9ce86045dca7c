"""Graph model dataclasses — what the extractor produces."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class NodeKind(Enum):
    TYPE = "type"
    CONDITION = "condition"


CONDITION_KEY_PREFIX = "condition:"


@dataclass
class RelationEntry:
    name: str
    definition: str
    is_computed: bool = False
    references: list[str] = field(default_factory=list)   # raw tokens, not normalized
    truncated: str = ""         # filled in at render time


@dataclass
class TypeNode:
    name: str
    relations: list[RelationEntry] = field(default_factory=list)
    x: float = 0.0
    y: float = 0.0

    kind = NodeKind.TYPE

    @property
    def key(self) -> str:
        return self.name


@dataclass
class ConditionNode:
    name: str
    params: str
    expression: str
    x: float = 0.0
    y: float = 0.0

    kind = NodeKind.CONDITION

    @property
    def key(self) -> str:
        return CONDITION_KEY_PREFIX + self.name


GraphNode = TypeNode | ConditionNode


@dataclass
class ParsedModel:
    """Result of one extraction pass over the model text."""
    types: list[TypeNode]
    conditions: list[ConditionNode]

    @property
    def nodes(self) -> list[GraphNode]:
        """Types first (file order), then conditions (file order)."""
        return [*self.types, *self.conditions]
