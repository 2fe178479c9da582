# myschool_backend/search/class_subject.py

"""
Class / Subject Extraction

One canonical place that understands:
- "class 5", "5th class", "grade 7", "std-3", "class five"
- "age 8" / "8 years old"  (age - 5 = class)
- which subject a query is about, with a minimum-score gate

Class numbers are ALWAYS None or 1..10.
"""

import re
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from myschool_backend.search.keywords import last_keyword
from myschool_backend.search.knowledge_base import KnowledgeBase, Subject
from myschool_backend.search.scoring import score_keywords


# ============================================================
# CONFIG
# ============================================================

MIN_CLASS = 1
MAX_CLASS = 10

MIN_AGE = 5
MAX_AGE = 15
AGE_OFFSET = 5

SUBJECT_MIN_SCORE = 3.0

_GRADE_WORD = r"(?:class|grade|std|standard)"

_NUMBER_WORDS = {
    "one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10,
}

AGE_PATTERNS = (
    re.compile(r"\bage\s*[:\-]?\s*(\d{1,2})\b", re.IGNORECASE),
    re.compile(r"\b(\d{1,2})\s*(?:years?|yrs?)(?:\s*old)?\b", re.IGNORECASE),
)

CLASS_PATTERNS = (
    re.compile(r"\b(\d{1,2})\s*(?:st|nd|rd|th)?\s*" + _GRADE_WORD + r"\b", re.IGNORECASE),
    re.compile(r"\b" + _GRADE_WORD + r"\s*[-:#]?\s*(\d{1,2})\b", re.IGNORECASE),
)

CLASS_WORD_PATTERN = re.compile(
    r"\b" + _GRADE_WORD + r"\s+(" + "|".join(_NUMBER_WORDS) + r")\b",
    re.IGNORECASE,
)


# ============================================================
# RESULT TYPE
# ============================================================

@dataclass(frozen=True)
class ClassSubject:
    class_num: Optional[int]
    subject: Optional[str]
    last_token: Optional[str] = None


# ============================================================
# CLASS NUMBER
# ============================================================

def _valid_class(value: int) -> Optional[int]:
    if MIN_CLASS <= value <= MAX_CLASS:
        return value
    return None


def extract_class_number(query: str) -> Optional[int]:
    """
    First pattern producing a class in range wins.
    Out-of-range numbers fall through to the next pattern.
    """
    if not query:
        return None

    for pattern in AGE_PATTERNS:
        m = pattern.search(query)
        if not m:
            continue
        age = int(m.group(1))
        if MIN_AGE <= age <= MAX_AGE:
            class_num = _valid_class(age - AGE_OFFSET)
            if class_num is not None:
                return class_num

    for pattern in CLASS_PATTERNS:
        for m in pattern.finditer(query):
            class_num = _valid_class(int(m.group(1)))
            if class_num is not None:
                return class_num

    m = CLASS_WORD_PATTERN.search(query)
    if m:
        return _NUMBER_WORDS[m.group(1).lower()]

    return None


# ============================================================
# SUBJECT
# ============================================================

def score_subjects(query: str, subjects: Mapping[str, Subject]) -> Dict[str, float]:
    return {
        name: score_keywords(query, subject.keywords)
        for name, subject in subjects.items()
    }


def extract_subject(
    query: str,
    subjects: Mapping[str, Subject],
    min_score: float = SUBJECT_MIN_SCORE,
) -> Optional[str]:
    """
    Highest-scoring subject, or None below the gate.
    Table order breaks ties.
    """
    if not query:
        return None

    best_name: Optional[str] = None
    best_score = 0.0

    for name, score in score_subjects(query, subjects).items():
        if score > best_score:
            best_name, best_score = name, score

    if best_score < min_score:
        return None

    return best_name


# ============================================================
# PUBLIC API
# ============================================================

def extract_class_and_subject(
    query: str,
    kb: Optional[KnowledgeBase] = None,
) -> ClassSubject:
    if kb is None:
        from myschool_backend.search.knowledge_base import get_knowledge_base
        kb = get_knowledge_base()

    return ClassSubject(
        class_num=extract_class_number(query),
        subject=extract_subject(query, kb.subjects),
        last_token=last_keyword(query),
    )
