"""Intent Domain Service.

Maps a free-text request onto a suggested tool call. Resolution is
advisory and never touches the platform: it either finds a close corpus
example, or classifies the request through the ordered rule table, or
falls back to generic guidance. It is deterministic and always succeeds.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from edamcp.domains.shared.kernel import OperationResult

from .corpus import DEFAULT_EXAMPLES
from .rules import AVAILABLE_TOOLS, INTENT_RULES, IntentRule
from .value_objects import (
    HIGH_CONFIDENCE,
    LOW_CONFIDENCE,
    MEDIUM_CONFIDENCE,
    Example,
    similarity,
    tokenize,
)

logger = logging.getLogger(__name__)

MATCH_THRESHOLD = 0.5
FALLBACK_EXAMPLE_COUNT = 10


class IntentResolver:
    """Resolves natural-language requests in three stages.

    Stage A scores every example by token overlap and accepts the best one
    when its score is strictly above ``MATCH_THRESHOLD``; ties go to the
    earliest example. Stage B walks ``rules`` in order and answers with the
    first matching category. Otherwise a low-confidence fallback is returned.
    """

    def __init__(
        self,
        examples: Sequence[Example] = DEFAULT_EXAMPLES,
        rules: Sequence[IntentRule] = INTENT_RULES,
    ) -> None:
        self._examples: Tuple[Example, ...] = tuple(examples)
        self._rules: Tuple[IntentRule, ...] = tuple(rules)

    @property
    def examples(self) -> Tuple[Example, ...]:
        return self._examples

    @property
    def rules(self) -> Tuple[IntentRule, ...]:
        return self._rules

    def resolve(
        self, query: str, context: Optional[Mapping[str, Any]] = None
    ) -> OperationResult:
        normalized = query.lower()

        match = self.best_example(normalized)
        if match is not None:
            example, score = match
            logger.debug("Query matched example %r (score=%.2f)", example.query, score)
            return OperationResult.ok(
                {
                    "interpretation": example.interpretation,
                    "suggestedTool": example.tool,
                    "suggestedParams": example.suggested_params(),
                    "matchedExample": example.query,
                    "score": score,
                    "confidence": HIGH_CONFIDENCE,
                }
            )

        for rule in self._rules:
            if rule.predicate(normalized):
                logger.debug("Query classified as %s", rule.category)
                data = rule.builder(normalized, context, self._examples)
                data["category"] = rule.category
                data["confidence"] = MEDIUM_CONFIDENCE
                return OperationResult.ok(data)

        logger.debug("No intent rule matched query %r", query)
        return OperationResult.ok(self._fallback(query))

    def best_example(self, query: str) -> Optional[Tuple[Example, float]]:
        """Highest-scoring example above the threshold, first one on ties."""
        query_tokens = tokenize(query)
        best: Optional[Example] = None
        best_score = 0.0
        for example in self._examples:
            score = similarity(query_tokens, example.tokens)
            if score > best_score:
                best, best_score = example, score
        if best is None or best_score <= MATCH_THRESHOLD:
            return None
        return best, best_score

    def _fallback(self, query: str) -> Dict[str, Any]:
        return {
            "interpretation": "Query understood but needs clarification",
            "originalQuery": query,
            "suggestions": [
                "Try rephrasing your query",
                "Use specific keywords like: create, verify, upload, navigate",
                "Mention the verification type: formal, equivalence, power, security, fpga",
            ],
            "exampleQueries": [
                {"query": example.query, "action": example.interpretation}
                for example in self._examples[:FALLBACK_EXAMPLE_COUNT]
            ],
            "availableTools": list(AVAILABLE_TOOLS),
            "confidence": LOW_CONFIDENCE,
        }
