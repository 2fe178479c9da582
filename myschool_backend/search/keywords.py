# myschool_backend/search/keywords.py

"""
Query Keyword Extraction

Purpose:
- Tokenize a query the same way everywhere in the pipeline
- Drop stop words / filler so scoring only sees content words
- Expose the trailing search term ("class 5 maths lion" -> "lion")

Design Rules:
- Deterministic
- NO spelling correction here
- NO knowledge base access
"""

import re
from typing import Iterable, List, Optional

from myschool_backend.search.vocabulary import STOP_WORDS


# ============================================================
# CONFIG
# ============================================================

MIN_KEYWORD_LENGTH = 3

_TOKEN_PATTERN = re.compile(r"[a-z0-9']+")


# ============================================================
# TOKENIZATION
# ============================================================

def tokenize(text: str) -> List[str]:
    """
    Lowercased alphanumeric tokens.
    Punctuation and non-Latin script are dropped.
    """
    if not text:
        return []
    return _TOKEN_PATTERN.findall(text.lower())


def extract_keywords(
    text: str,
    stop_words: Iterable[str] = STOP_WORDS,
) -> List[str]:
    """
    Content keywords in order of appearance, without duplicates.
    Pure numbers are kept out (they belong to the class extractor).
    """
    stop = set(stop_words)

    seen = set()
    out: List[str] = []
    for t in tokenize(text):
        if len(t) < MIN_KEYWORD_LENGTH or t in stop or t.isdigit():
            continue
        if t not in seen:
            seen.add(t)
            out.append(t)

    return out


def last_keyword(text: str) -> Optional[str]:
    keywords = extract_keywords(text)
    return keywords[-1] if keywords else None


def contains_phrase(text: str, phrase: str) -> bool:
    """
    Word-bounded phrase containment ("maths" does not contain "math").
    """
    if not text or not phrase:
        return False
    pattern = r"(?<![a-z0-9])" + re.escape(phrase.lower()) + r"(?![a-z0-9])"
    return re.search(pattern, text.lower()) is not None
