"""Intent Bounded Context.

Turns free-text requests about the platform into suggested tool calls:
close corpus example first, then an ordered keyword rule table, then a
generic fallback.
"""
from .value_objects import (
    HIGH_CONFIDENCE, LOW_CONFIDENCE, MEDIUM_CONFIDENCE,
    Example, SlotGroup, similarity, tokenize,
)
from .corpus import DEFAULT_EXAMPLES
from .rules import INTENT_RULES, IntentRule
from .services import MATCH_THRESHOLD, IntentResolver

__all__ = [
    "HIGH_CONFIDENCE", "LOW_CONFIDENCE", "MEDIUM_CONFIDENCE",
    "Example", "SlotGroup", "similarity", "tokenize",
    "DEFAULT_EXAMPLES",
    "INTENT_RULES", "IntentRule",
    "MATCH_THRESHOLD", "IntentResolver",
]
