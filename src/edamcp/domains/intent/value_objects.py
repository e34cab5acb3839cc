"""Intent Domain Value Objects.

Immutable types that carry no identity. Equality is structural.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Tuple

HIGH_CONFIDENCE = "high"
MEDIUM_CONFIDENCE = "medium"
LOW_CONFIDENCE = "low"

WORKFLOW_TOOL = "workflow"


def tokenize(text: str) -> FrozenSet[str]:
    """Lowercased whitespace-separated token set of ``text``.

    Examples:
        >>> sorted(tokenize("Go to  the Documentation"))
        ['documentation', 'go', 'the', 'to']
    """
    return frozenset(text.lower().split())


@dataclass(frozen=True)
class Example:
    """One canned query with the operation it stands for.

    Attributes:
        query: The example sentence.
        interpretation: Short human description of the operation.
        tool: Suggested tool name, or ``"workflow"`` for multi-step examples.
        params: Suggested arguments (``{"steps": [...]}`` for workflows).
    """
    query: str
    interpretation: str
    tool: str
    params: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def tokens(self) -> FrozenSet[str]:
        return tokenize(self.query)

    @property
    def is_workflow(self) -> bool:
        return self.tool == WORKFLOW_TOOL

    def suggested_params(self) -> Dict[str, Any]:
        """Deep copy of the params, safe to hand out to callers."""
        return copy.deepcopy(self.params)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "interpretation": self.interpretation,
            "tool": self.tool,
            "params": self.suggested_params(),
        }


@dataclass(frozen=True)
class SlotGroup:
    """An ordered keyword-to-value table with a fixed default.

    The first ``(value, keywords)`` entry with any keyword contained in the
    query wins; otherwise ``default`` is returned.
    """
    entries: Tuple[Tuple[str, Tuple[str, ...]], ...]
    default: str

    def detect(self, query: str) -> str:
        for value, keywords in self.entries:
            if any(keyword in query for keyword in keywords):
                return value
        return self.default

    @property
    def values(self) -> Tuple[str, ...]:
        return tuple(value for value, _ in self.entries)


def similarity(query_tokens: FrozenSet[str], example_tokens: FrozenSet[str]) -> float:
    """``|Q ∩ E| / max(|Q|, |E|)``; 0.0 when both sets are empty."""
    denominator = max(len(query_tokens), len(example_tokens))
    if denominator == 0:
        return 0.0
    return len(query_tokens & example_tokens) / denominator
