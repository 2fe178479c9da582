"""
Query processing helpers: keywords, spelling, synonyms, class/subject, gibberish.
"""

import pytest

from myschool_backend.search.class_subject import (
    extract_class_and_subject,
    extract_class_number,
    extract_subject,
)
from myschool_backend.search.gibberish import is_meaningless
from myschool_backend.search.keywords import contains_phrase, extract_keywords, last_keyword, tokenize
from myschool_backend.search.scoring import EXACT_WEIGHT, PHRASE_WEIGHT, score_keywords
from myschool_backend.search.synonyms import expand_with_synonyms
from myschool_backend.search.vocabulary import DEFAULT_LEXICON, MISSPELLINGS


# ============================================================
# KEYWORDS / SCORING
# ============================================================

def test_tokenize_and_keywords():
    assert tokenize("Class-5, MATHS!") == ["class", "5", "maths"]
    assert extract_keywords("show me the monkey images please") == ["monkey", "images"]
    assert last_keyword("class 5 maths lion") == "lion"
    assert last_keyword("the a an") is None


def test_contains_phrase_is_word_bounded():
    assert contains_phrase("class 5 maths", "maths")
    assert not contains_phrase("class 5 maths", "math")


def test_score_keywords_weights():
    assert score_keywords("maths", ["maths"]) == EXACT_WEIGHT
    assert score_keywords("class 5 maths", ["maths"]) == PHRASE_WEIGHT
    assert score_keywords("", ["maths"]) == 0.0
    assert score_keywords("class 5 maths", ["maths", "math"]) > PHRASE_WEIGHT


# ============================================================
# SPELLING
# ============================================================

@pytest.mark.parametrize("query, expected", [
    ("monky", "monkey"),
    ("scince", "science"),
    ("Monky Imges", "monkey images"),
    ("elefent", "elephant"),
    ("smrat wal", "smart wall"),
    ("class 5 mats", "class 5 maths"),
])
def test_spelling_corrections(corrector, query, expected):
    assert corrector.correct(query) == expected


@pytest.mark.parametrize("query", [
    "hello", "bat", "class 5", "xyz123", "జంతువుల",
    # ordinary words near a portal word stay as typed
    "year", "read", "boat", "coat",
])
def test_spelling_leaves_safe_tokens_alone(corrector, query):
    assert corrector.correct(query) == query.lower()


def test_spelling_preserves_token_count(corrector):
    query = "plz show monky and elefent imges for clas 3"
    assert len(corrector.correct(query).split()) == len(query.split())


def test_spelling_is_idempotent(corrector):
    queries = ["monky", "scince exm tps", "puzles and rhyms", "fruts vegtables", "clas 7 englsh"]
    for q in queries:
        once = corrector.correct(q)
        assert corrector.correct(once) == once


def test_dictionary_targets_are_not_misspellings():
    for target in MISSPELLINGS.values():
        assert target not in MISSPELLINGS


def test_empty_query(corrector):
    assert corrector.correct("") == ""


# ============================================================
# SYNONYMS
# ============================================================

def test_expand_exam():
    assert expand_with_synonyms("exam") == [
        "exam", "test", "exams", "examination", "quiz", "assessment",
    ]


def test_expand_keeps_query_first_and_unique():
    out = expand_with_synonyms("Class 5 Maths")
    assert out[0] == "class 5 maths"
    assert "mathematics" in out
    assert len(out) == len(set(out))


def test_expand_fuzzy_group_member():
    # "maths" -> group "maths"; "math" matches exactly as a member
    assert "maths" in expand_with_synonyms("math")


def test_expand_empty():
    assert expand_with_synonyms("") == []
    assert expand_with_synonyms("  ;; ") == []


# ============================================================
# CLASS / SUBJECT
# ============================================================

@pytest.mark.parametrize("query, class_num", [
    ("class 5 maths", 5),
    ("class 7", 7),
    ("5th class science", 5),
    ("grade-3 english", 3),
    ("std 10", 10),
    ("class five", 5),
    ("worksheets for age 8", 3),
    ("my kid is 10 years old", 5),
    ("class 12", None),
    ("class 0", None),
    ("age 30", None),
    ("monkey", None),
])
def test_extract_class_number(query, class_num):
    assert extract_class_number(query) == class_num


def test_extract_class_and_subject(kb):
    cs = extract_class_and_subject("class 5 maths", kb)
    assert (cs.class_num, cs.subject) == (5, "maths")

    cs = extract_class_and_subject("class 7", kb)
    assert (cs.class_num, cs.subject) == (7, None)

    cs = extract_class_and_subject("class 8 science lion", kb)
    assert cs.subject == "science"
    assert cs.last_token == "lion"


def test_subject_gate(kb):
    assert extract_subject("maths", kb.subjects) == "maths"
    assert extract_subject("monkey", kb.subjects) is None
    assert extract_subject("", kb.subjects) is None


# ============================================================
# GIBBERISH
# ============================================================

@pytest.mark.parametrize("query", [";lkjasdf", "", "a", "123", "bcdfg", "asdfgh", "  "])
def test_meaningless(query):
    assert is_meaningless(query, DEFAULT_LEXICON.keyboard_mash)


@pytest.mark.parametrize("query", ["xyz123 science stuff", "monkey", "class 5 maths", "photosynthesis"])
def test_not_meaningless(query):
    assert not is_meaningless(query, DEFAULT_LEXICON.keyboard_mash)
