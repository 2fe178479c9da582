"""
Priority search engine: tier precedence, concrete routing scenarios,
determinism and the never-empty guarantee.
"""

import pytest

from myschool_backend.search.confidence import (
    confidence_level,
    describe_confidence,
    is_low_confidence,
)

BASE = "https://portal.myschoolct.com"


def top(engine, query):
    results = engine.resolve(query)
    assert len(results) == 1
    return results[0]


# ============================================================
# CONCRETE SCENARIOS
# ============================================================

def test_misspelled_animal_routes_to_image_bank(engine):
    assert engine.prepare("monky") == "monkey"

    r = top(engine, "monky")
    assert r.tier == 2
    assert r.category == "image_bank"
    assert r.confidence == pytest.approx(0.95)
    assert r.url == f"{BASE}/views/academic/imagebank/animals?main=2&mu=0"
    assert r.name == "Monkey Images"


def test_class_and_subject(engine):
    r = top(engine, "class 5 maths")
    assert r.tier == 3
    assert r.category == "class_subject"
    assert r.confidence == pytest.approx(0.95)
    assert r.url == f"{BASE}/views/academic/class/class-5?main=1&mu=mat"
    assert r.name == "Class 5 Maths"


def test_class_only(engine):
    r = top(engine, "class 7")
    assert r.tier == 4
    assert r.category == "class_subject"
    assert 0.85 <= r.confidence <= 0.9
    assert r.url == f"{BASE}/views/academic/class/class-7"


def test_one_click_exact(engine):
    r = top(engine, "smart wall")
    assert r.tier == 1
    assert r.category == "one_click"
    assert r.confidence == pytest.approx(0.99)
    assert r.name == "Smart Wall"


def test_keyboard_mash_hits_terminal_fallback(engine):
    r = top(engine, ";lkjasdf")
    assert r.tier == 7
    assert r.category == "none"
    assert r.confidence == 0.0
    assert r.url == f"{BASE}/views/academic"


def test_gibberish_token_does_not_suppress_text_search(engine):
    r = top(engine, "xyz123 science stuff")
    assert r.category == "search"
    assert r.tier == 6
    assert r.confidence == pytest.approx(0.5)
    assert r.url == f"{BASE}/views/sections/result?text=xyz123%20science%20stuff"


# ============================================================
# OTHER TIERS
# ============================================================

def test_visual_fillers_are_ignored(engine):
    r = top(engine, "show me monkey images")
    assert r.category == "image_bank"


def test_misspelled_one_click(engine):
    r = top(engine, "smrat wal")
    assert r.category == "one_click"
    assert r.name == "Smart Wall"


def test_one_click_is_exact_only(engine):
    # a common word inside a one-click keyword must not hijack routing
    r = top(engine, "wall")
    assert r.category != "one_click"


def test_named_section(engine):
    r = top(engine, "rhymes")
    assert r.tier == 5
    assert r.category == "section"
    assert r.name == "Edutainment"
    assert 0.5 <= r.confidence <= 0.8


def test_age_phrase_survives_correction(engine):
    assert engine.prepare("maths for 8 year old") == "maths for 8 year old"

    r = top(engine, "maths for 8 year old")
    assert r.tier == 3
    assert r.category == "class_subject"
    assert r.url == f"{BASE}/views/academic/class/class-3?main=1&mu=mat"


@pytest.mark.parametrize("query", ["read", "boat", "coat"])
def test_common_words_do_not_become_image_bank_hits(engine, query):
    assert engine.prepare(query) == query
    assert top(engine, query).category != "image_bank"


def test_empty_query_is_terminal(engine):
    r = top(engine, "")
    assert r.category == "none"


# ============================================================
# INVARIANTS
# ============================================================

QUERIES = [
    "monky", "class 5 maths", "class 7", "smart wall", ";lkjasdf",
    "xyz123 science stuff", "rhymes", "", "photosynthesis", "mcq",
]


@pytest.mark.parametrize("query", QUERIES)
def test_resolve_never_empty_and_deterministic(engine, query):
    first = engine.resolve(query, limit=3)
    second = engine.resolve(query, limit=3)
    assert first
    assert first == second


@pytest.mark.parametrize("query", QUERIES)
def test_confidence_bounds(engine, query):
    for r in engine.resolve(query, limit=5):
        assert 0.0 <= r.confidence <= 1.0
        assert 1 <= r.tier <= 7


def test_confidence_ordering_across_tiers(engine):
    curated = [top(engine, q) for q in ("smart wall", "class 5 maths", "monky")]
    search = top(engine, "xyz123 science stuff")
    nothing = top(engine, ";lkjasdf")

    for r in curated:
        assert r.confidence > search.confidence
    assert search.confidence > nothing.confidence


def test_prepare_is_idempotent(engine):
    for q in QUERIES:
        once = engine.prepare(q)
        assert engine.prepare(once) == once


# ============================================================
# SUGGESTIONS
# ============================================================

def test_suggest_best_tier_first(engine):
    results = engine.suggest("monkey")
    assert results
    assert results[0].category == "image_bank"
    assert len({r.url for r in results}) == len(results)


def test_suggest_never_empty(engine):
    results = engine.suggest(";lkjasdf")
    assert len(results) == 1
    assert results[0].category == "none"


# ============================================================
# CONFIDENCE POLICY
# ============================================================

def test_low_confidence_policy(engine):
    assert not is_low_confidence(top(engine, "smart wall"))
    assert is_low_confidence(top(engine, "xyz123 science stuff"))
    assert is_low_confidence(top(engine, ";lkjasdf"))


def test_confidence_levels():
    assert confidence_level(0.99) == "high"
    assert confidence_level(0.6) == "medium"
    assert confidence_level(0.0) == "low"
    assert confidence_level(5) == "high"


def test_describe_confidence(engine):
    d = describe_confidence(top(engine, "class 7"))
    assert d == {"confidence": 0.9, "level": "high", "low_confidence": False}


# ============================================================
# MODULE HELPERS (packaged knowledge base)
# ============================================================

def test_module_level_helpers():
    from myschool_backend.search.priority_search import resolve
    from myschool_backend.search.spelling import correct_spelling

    assert correct_spelling("monky imges") == "monkey images"
    assert resolve("class 7")[0].tier == 4
    assert resolve("xyz123 science stuff", limit=3)
