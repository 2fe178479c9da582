# myschool_backend/search/gibberish.py

"""
Gibberish Detection (last-resort gate)

Flags only the most obvious non-queries:
- fewer than 2 characters
- no letters at all
- no vowels at all
- keyboard mashing ("asdf", "qwer", ...) in a short string
  or in a single unbroken token

Real-but-rare words pass. Run AFTER every real match has failed.
"""

import re
from typing import Iterable

from myschool_backend.search.vocabulary import KEYBOARD_MASH


MIN_LENGTH = 2
SHORT_QUERY_LENGTH = 6

_LETTER = re.compile(r"[a-z]")
_VOWEL = re.compile(r"[aeiou]")


def is_meaningless(
    query: str,
    mash_patterns: Iterable[str] = KEYBOARD_MASH,
) -> bool:
    q = (query or "").strip().lower()

    if len(q) < MIN_LENGTH:
        return True

    if not _LETTER.search(q):
        return True

    if not _VOWEL.search(q):
        return True

    single_token = len(q.split()) == 1
    if len(q) < SHORT_QUERY_LENGTH or single_token:
        return any(p in q for p in mash_patterns)

    return False
