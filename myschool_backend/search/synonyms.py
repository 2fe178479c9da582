# myschool_backend/search/synonyms.py

"""
Synonym Expansion

Turns one (corrected) query into a list of alternative search terms
so the remote search can be retried on aliases:

    "exam"  ->  ["exam", "test", "exams", "examination", "quiz", "assessment"]

Order:
- original query first
- then, per content word: the word, its group key, the group's terms
Duplicates are dropped, first occurrence wins.
"""

from typing import List

from myschool_backend.search.edit_distance import TYPO_FUZZY, similarity
from myschool_backend.search.keywords import extract_keywords, tokenize
from myschool_backend.search.vocabulary import DEFAULT_LEXICON, Lexicon


def _matching_groups(word: str, lexicon: Lexicon) -> List[str]:
    """
    Keys of every synonym group the word belongs to,
    exactly or by a close fuzzy match.
    """
    exact: List[str] = []
    fuzzy: List[str] = []

    for key, terms in lexicon.synonyms.items():
        members = (key,) + tuple(terms)

        if word in members:
            exact.append(key)
            continue

        if any(
            " " not in m and similarity(word, m) >= TYPO_FUZZY
            for m in members
        ):
            fuzzy.append(key)

    return exact + fuzzy


def expand_with_synonyms(
    query: str,
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> List[str]:
    normalized = " ".join(tokenize(query))
    if not normalized:
        return []

    expanded: List[str] = [normalized]

    for word in extract_keywords(normalized, lexicon.stop_words):
        expanded.append(word)
        for key in _matching_groups(word, lexicon):
            expanded.append(key)
            expanded.extend(lexicon.synonyms[key])

    return list(dict.fromkeys(expanded))
