# myschool_backend/search/confidence.py

"""
Result Confidence Policy

Purpose:
- Decide when a resolved destination may be asserted confidently
- Map numeric confidence to a UI label

Confidence != probability
Confidence = which tier matched, and how cleanly

Used by the chat layer ONLY (the engine never consults it).
"""

from typing import Dict

from myschool_backend.search.priority_search import SearchResult


# ============================================================
# CONFIG
# ============================================================

LOW_CONFIDENCE_THRESHOLD = 0.3
LOW_CONFIDENCE_CATEGORIES = frozenset({"none", "search"})

HIGH_CONFIDENCE = 0.85
MEDIUM_CONFIDENCE = 0.5


# ============================================================
# PUBLIC API
# ============================================================

def is_low_confidence(result: SearchResult) -> bool:
    """
    True when the caller should show nearest matches
    instead of asserting a destination.
    """
    if result.confidence < LOW_CONFIDENCE_THRESHOLD:
        return True
    return result.category in LOW_CONFIDENCE_CATEGORIES


def confidence_level(value: float) -> str:
    value = max(0.0, min(1.0, float(value)))
    if value >= HIGH_CONFIDENCE:
        return "high"
    if value >= MEDIUM_CONFIDENCE:
        return "medium"
    return "low"


def describe_confidence(result: SearchResult) -> Dict[str, object]:
    return {
        "confidence": round(result.confidence, 2),
        "level": confidence_level(result.confidence),
        "low_confidence": is_low_confidence(result),
    }
