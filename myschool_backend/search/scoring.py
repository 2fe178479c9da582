# myschool_backend/search/scoring.py

"""
Weighted Keyword Scoring

Shared by:
- subject detection (class/subject extractor)
- named-section matching (priority search, tier 5)

Score = sum over keywords of the FIRST signal that fires:
- whole query equals keyword          -> EXACT_WEIGHT
- keyword phrase inside the query     -> PHRASE_WEIGHT
- per (query word, keyword word) pair:
    substring containment             -> SUBSTRING_WEIGHT
    same Soundex code                 -> PHONETIC_WEIGHT
    similarity >= LOOSE_FUZZY         -> similarity
"""

from typing import Iterable

from myschool_backend.search.edit_distance import LOOSE_FUZZY, similarity
from myschool_backend.search.keywords import contains_phrase, extract_keywords, tokenize
from myschool_backend.search.phonetic import phonetic_match


# ============================================================
# WEIGHTS
# ============================================================

EXACT_WEIGHT = 10.0
PHRASE_WEIGHT = 5.0
SUBSTRING_WEIGHT = 2.0
PHONETIC_WEIGHT = 1.5

MIN_SUBSTRING_LENGTH = 3
MIN_PHONETIC_LENGTH = 4


# ============================================================
# PUBLIC API
# ============================================================

def score_keywords(query: str, keywords: Iterable[str]) -> float:
    q = " ".join(tokenize(query))
    if not q:
        return 0.0

    words = extract_keywords(q)
    total = 0.0

    for kw in keywords:
        kw = kw.lower().strip()
        if not kw:
            continue

        if q == kw:
            total += EXACT_WEIGHT
            continue

        if contains_phrase(q, kw):
            total += PHRASE_WEIGHT
            continue

        for word in words:
            for kw_word in kw.split():
                total += _word_score(word, kw_word)

    return round(total, 4)


def _word_score(word: str, kw_word: str) -> float:
    if (
        len(kw_word) >= MIN_SUBSTRING_LENGTH
        and (kw_word in word or word in kw_word)
    ):
        return SUBSTRING_WEIGHT

    if (
        len(word) >= MIN_PHONETIC_LENGTH
        and len(kw_word) >= MIN_PHONETIC_LENGTH
        and phonetic_match(word, kw_word)
    ):
        return PHONETIC_WEIGHT

    sim = similarity(word, kw_word)
    if sim >= LOOSE_FUZZY:
        return sim

    return 0.0
