# myschool_backend/llm/intent_rules.py
"""
Rule-based Greeting Detection for the MySchool assistant

Purpose:
- Catch plain greetings before any network call
- Provide fast deterministic routing
- NEVER block resource searches

NO ML
NO LLM
NO SEARCH
"""

import re
from typing import Literal, Optional

from myschool_backend.llm.text_normalizer import token_count


Intent = Literal["greeting"]


# ------------------------------------------------------------
# STATIC PATTERNS
# ------------------------------------------------------------

GREETING_PATTERNS = (
    re.compile(r"^(hi|hello|hey|hii+|helo|hai|hola)\b"),
    re.compile(r"^good\s*(morning|afternoon|evening|night)"),
    re.compile(r"^(what'?s?\s*up|sup|yo|howdy|greetings|namaste)\b"),
    re.compile(r"^(how\s*are\s*you|how\s*r\s*u)\b"),
)

# A greeting followed by a request is still a search
# ("hi, show me class 5 maths")
MAX_GREETING_TOKENS = 4


# ------------------------------------------------------------
# DETECTORS
# ------------------------------------------------------------
def is_greeting(text: Optional[str]) -> bool:
    if not text:
        return False

    t = text.strip().lower()
    if not t:
        return False

    if token_count(t) > MAX_GREETING_TOKENS:
        return False

    return any(p.search(t) for p in GREETING_PATTERNS)


def detect_rule_intent(text: Optional[str]) -> Optional[Intent]:
    """
    Deterministic intent, or None to let the classifier and engine decide.
    """
    if is_greeting(text):
        return "greeting"
    return None
