# myschool_backend/search/phonetic.py

"""
Phonetic Coding (Soundex)

Purpose:
- Encode a word as a 4-character pronunciation code
- Let "fruts" / "fruits" or "elefant" / "elephant" compare equal

Design Rules:
- Case-insensitive, letters only
- Always returns a code (never raises)
- NO dictionary lookups here
"""

import re


# ============================================================
# CONFIG
# ============================================================

CODE_LENGTH = 4
EMPTY_CODE = "0000"

_NON_LETTERS = re.compile(r"[^A-Z]")

_DIGIT_CLASSES = {
    "B": "1", "F": "1", "P": "1", "V": "1",
    "C": "2", "G": "2", "J": "2", "K": "2",
    "Q": "2", "S": "2", "X": "2", "Z": "2",
    "D": "3", "T": "3",
    "L": "4",
    "M": "5", "N": "5",
    "R": "6",
}


# ============================================================
# PUBLIC API
# ============================================================

def soundex(word: str) -> str:
    """
    Soundex code: first letter + up to 3 consonant-class digits.

    Vowels and h/w/y carry no digit and do not break a run,
    so "Pfister" and "Pister" both encode to P236.
    """
    letters = _NON_LETTERS.sub("", (word or "").upper())
    if not letters:
        return EMPTY_CODE

    first = letters[0]
    code = first
    previous = _DIGIT_CLASSES.get(first, "")

    for ch in letters[1:]:
        if len(code) >= CODE_LENGTH:
            break

        digit = _DIGIT_CLASSES.get(ch, "")
        if not digit:
            continue

        if digit != previous:
            code += digit
        previous = digit

    return (code + "0" * CODE_LENGTH)[:CODE_LENGTH]


def phonetic_match(a: str, b: str) -> bool:
    return soundex(a) == soundex(b)
