# myschool_backend/search/spelling.py

"""
Spelling Correction

Maps a free-text query, token by token, onto known portal words:

1. skip short / stop-word / non-alphabetic tokens
2. exact misspelling dictionary hit
3. already a known word -> keep
4. nearest dictionary key or value by edit distance
5. Soundex fallback against dictionary targets
6. otherwise keep the token

Guarantees:
- Same token count and order as the input
- Never raises; worst case returns the input (lowercased)
- Correcting a corrected query changes nothing
"""

from functools import lru_cache
from typing import Iterable, Optional, Tuple

from myschool_backend.search.edit_distance import levenshtein
from myschool_backend.search.phonetic import soundex
from myschool_backend.search.vocabulary import DEFAULT_LEXICON, Lexicon


# ============================================================
# CONFIG
# ============================================================

MIN_TOKEN_LENGTH = 3        # shorter tokens are never touched
MIN_FUZZY_LENGTH = 4        # fuzzy / phonetic only from here
STRICT_TIER_MAX_LENGTH = 5  # tokens up to this length use the strict budget

STRICT_DISTANCE_BUDGET = 2  # distance must be < budget
LOOSE_DISTANCE_BUDGET = 3

MIN_PHONETIC_LENGTH = 4     # token must be longer than 3 characters


# ============================================================
# CORRECTOR
# ============================================================

class SpellingCorrector:

    def __init__(
        self,
        lexicon: Lexicon = DEFAULT_LEXICON,
        vocabulary: Iterable[str] = (),
    ):
        self.lexicon = lexicon
        self.misspellings = lexicon.misspellings
        self.stop_words = lexicon.stop_words

        known = set(lexicon.known_words())
        known.update(w.lower() for w in vocabulary if w and w.isalpha())
        self.known_words = frozenset(known)

        # Table order decides ties, so keep it stable
        self._targets: Tuple[str, ...] = tuple(dict.fromkeys(self.misspellings.values()))
        # Known words are only ever kept, never used as correction targets
        self._candidates: Tuple[Tuple[str, str], ...] = tuple(
            list(self.misspellings.items())
            + [(t, t) for t in self._targets]
        )
        self._target_codes: Tuple[Tuple[str, str], ...] = tuple(
            (soundex(t), t) for t in self._targets
        )

    # --------------------------------------------------------
    # PUBLIC API
    # --------------------------------------------------------

    def correct(self, query: str) -> str:
        if not query:
            return ""

        tokens = query.lower().split()
        return " ".join(self.correct_token(t) for t in tokens)

    def correct_token(self, token: str) -> str:
        if self._skip(token):
            return token

        mapped = self.misspellings.get(token)
        if mapped is not None:
            return mapped

        if token in self.known_words:
            return token

        if len(token) < MIN_FUZZY_LENGTH:
            return token

        nearest = self._nearest(token)
        if nearest is not None:
            return nearest

        if len(token) >= MIN_PHONETIC_LENGTH:
            code = soundex(token)
            for target_code, target in self._target_codes:
                if target_code == code:
                    return target

        return token

    # --------------------------------------------------------
    # INTERNALS
    # --------------------------------------------------------

    def _skip(self, token: str) -> bool:
        if len(token) < MIN_TOKEN_LENGTH:
            return True
        if token in self.stop_words:
            return True
        # digits, punctuation, non-Latin script
        return not (token.isascii() and token.isalpha())

    def _budget(self, token: str) -> int:
        if len(token) <= STRICT_TIER_MAX_LENGTH:
            return STRICT_DISTANCE_BUDGET
        return LOOSE_DISTANCE_BUDGET

    def _nearest(self, token: str) -> Optional[str]:
        best: Optional[str] = None
        best_distance = self._budget(token)

        for misspelled, correct in self._candidates:
            # cheap length guard: distance >= length difference
            if abs(len(misspelled) - len(token)) >= best_distance:
                continue
            dist = levenshtein(token, misspelled)
            if dist < best_distance:
                best_distance = dist
                best = correct

        return best


# ============================================================
# MODULE HELPERS
# ============================================================

@lru_cache(maxsize=1)
def get_default_corrector() -> SpellingCorrector:
    from myschool_backend.search.knowledge_base import get_knowledge_base

    return SpellingCorrector(DEFAULT_LEXICON, get_knowledge_base().vocabulary())


def correct_spelling(query: str) -> str:
    return get_default_corrector().correct(query)
