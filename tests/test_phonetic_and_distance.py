"""
Soundex coding and edit-distance matching.
"""

import pytest

from myschool_backend.search.edit_distance import (
    GENERAL_FUZZY,
    TYPO_FUZZY,
    is_fuzzy_match,
    levenshtein,
    similarity,
)
from myschool_backend.search.phonetic import phonetic_match, soundex


# ============================================================
# SOUNDEX
# ============================================================

@pytest.mark.parametrize("word, code", [
    ("Robert", "R163"),
    ("Rupert", "R163"),
    ("Ashcraft", "A261"),
    ("Pfister", "P236"),
    ("a", "A000"),
])
def test_soundex_known_codes(word, code):
    assert soundex(word) == code


def test_soundex_empty_and_non_letters():
    assert soundex("") == "0000"
    assert soundex("1234 !!") == "0000"
    assert soundex(None) == "0000"


def test_soundex_ignores_case_and_symbols():
    assert soundex("monkey") == soundex("MON-KEY")
    assert len(soundex("supercalifragilistic")) == 4


def test_phonetic_match_is_symmetric():
    pairs = [("elephant", "elefant"), ("fruits", "fruts"), ("lion", "tiger")]
    for a, b in pairs:
        assert phonetic_match(a, b) == phonetic_match(b, a)

    assert phonetic_match("elephant", "elefant")
    assert not phonetic_match("lion", "tiger")


# ============================================================
# LEVENSHTEIN
# ============================================================

def test_levenshtein_basics():
    assert levenshtein("kitten", "sitting") == 3
    assert levenshtein("", "abc") == 3
    assert levenshtein("abc", "") == 3
    assert levenshtein("same", "same") == 0


def test_levenshtein_is_case_insensitive():
    assert levenshtein("Monkey", "monkey") == 0


def test_levenshtein_metric_properties():
    words = ["maths", "mats", "math", "science", "scince", ""]
    for a in words:
        for b in words:
            assert levenshtein(a, b) == levenshtein(b, a)
            assert (levenshtein(a, b) == 0) == (a == b)
            for c in words:
                assert levenshtein(a, c) <= levenshtein(a, b) + levenshtein(b, c)


def test_similarity_range_and_empty():
    assert similarity("", "") == 1.0
    assert similarity("abc", "xyz") == 0.0
    assert 0.0 <= similarity("science", "scince") <= 1.0
    assert similarity("science", "scince") == pytest.approx(1 - 1 / 7)


def test_fuzzy_threshold_is_caller_supplied():
    # "scince" ~ 0.857
    assert is_fuzzy_match("science", "scince", TYPO_FUZZY)
    assert is_fuzzy_match("science", "scince", GENERAL_FUZZY)
    assert not is_fuzzy_match("science", "scince", 0.9)
