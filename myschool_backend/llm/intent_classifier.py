# myschool_backend/llm/intent_classifier.py

"""
Conversational Intent Classification for the MySchool assistant

Responsibilities:
- Ask the Net LLM for a short reply + search framing
- Sanitize whatever comes back (types, ranges, labels)
- NEVER raise: any failure becomes a marked fallback result

Design rules:
- The classifier phrases messages and decides greeting vs search
- It NEVER decides URLs, categories or confidence (search engine does)
"""

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

from myschool_backend.llm.net_loader import (
    NetAuthError,
    NetProviderError,
    NetRateLimitError,
    NetUsageError,
    chat_completion_json,
)
from myschool_backend.llm.prompts import build_intent_messages


# ============================================================
# TYPES
# ============================================================

SearchType = Literal["greeting", "direct_search", "class_subject", "invalid"]

SEARCH_TYPES = ("greeting", "direct_search", "class_subject", "invalid")


@dataclass
class IntentResult:
    message: str
    search_query: Optional[str] = None
    search_type: SearchType = "direct_search"
    class_num: Optional[int] = None
    subject: Optional[str] = None
    suggestions: List[str] = field(default_factory=list)
    is_fallback: bool = False


# ============================================================
# CONFIG
# ============================================================

INTENT_MAX_TOKENS = 300
INTENT_TEMPERATURE = 0.3

DEFAULT_MESSAGE = "How can I help?"
FALLBACK_MESSAGE = "How can I help you today?"
DEFAULT_SUGGESTIONS = ["Animals", "Class 5 Maths", "Exam Tips"]

MAX_SUGGESTIONS = 5
MIN_CLASS, MAX_CLASS = 1, 10

_NET_ERRORS = (NetUsageError, NetAuthError, NetRateLimitError, NetProviderError)


# ============================================================
# SANITIZERS
# ============================================================

def _clean_str(value) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    if not value or value.lower() in ("null", "none"):
        return None
    return value


def _clean_class_num(value) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    try:
        num = int(str(value).strip())
    except ValueError:
        return None
    return num if MIN_CLASS <= num <= MAX_CLASS else None


def _clean_search_type(value) -> SearchType:
    label = (_clean_str(value) or "").lower()
    return label if label in SEARCH_TYPES else "direct_search"  # type: ignore


def _clean_suggestions(value) -> List[str]:
    if not isinstance(value, list):
        return []
    out = [s for s in (_clean_str(v) for v in value) if s]
    return out[:MAX_SUGGESTIONS]


def parse_intent_payload(payload: Dict) -> IntentResult:
    """
    Turn raw classifier JSON (camelCase keys) into an IntentResult.
    """
    return IntentResult(
        message=_clean_str(payload.get("message")) or DEFAULT_MESSAGE,
        search_query=_clean_str(payload.get("searchQuery")),
        search_type=_clean_search_type(payload.get("searchType")),
        class_num=_clean_class_num(payload.get("classNum")),
        subject=(_clean_str(payload.get("subject")) or "").lower() or None,
        suggestions=_clean_suggestions(payload.get("suggestions")),
    )


def fallback_intent() -> IntentResult:
    return IntentResult(
        message=FALLBACK_MESSAGE,
        search_type="greeting",
        suggestions=list(DEFAULT_SUGGESTIONS),
        is_fallback=True,
    )


# ============================================================
# PUBLIC API
# ============================================================

class IntentClassifier:

    def __init__(
        self,
        max_tokens: int = INTENT_MAX_TOKENS,
        temperature: float = INTENT_TEMPERATURE,
    ):
        self.max_tokens = max_tokens
        self.temperature = temperature

    def classify(
        self,
        message: str,
        history: Optional[List[Dict[str, str]]] = None,
    ) -> IntentResult:
        if not message or not message.strip():
            return fallback_intent()

        try:
            payload = chat_completion_json(
                build_intent_messages(message, history),
                "intent",
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except _NET_ERRORS as e:
            print(f"⚠️ [INTENT] Net call failed: {e}")
            return fallback_intent()

        result = parse_intent_payload(payload)
        print(
            f"🧭 [INTENT] type={result.search_type} | query={result.search_query!r} | "
            f"class={result.class_num} | subject={result.subject}"
        )
        return result


def classify_intent(
    message: str,
    history: Optional[List[Dict[str, str]]] = None,
) -> IntentResult:
    return IntentClassifier().classify(message, history)
