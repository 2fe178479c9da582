# myschool_backend/search/priority_search.py

"""
Priority Search Engine

Turns a user query into a ranked, NON-EMPTY list of portal destinations.

Tiers (evaluated strictly in order, first non-empty tier wins):
1. one_click      exact one-click resource keyword     0.99
2. image_bank     curated visual term (fuzzy/phonetic)  0.95
3. class_subject  class number + gated subject          0.95
4. class_subject  class number only                     0.90
5. section        named non-academic section            0.50 - 0.80
6. search         free-text portal search               0.50
7. none           browse landing page (gibberish)       0.00

Rules:
- Scores NEVER cross tier boundaries
- Inside a tier, the highest raw score wins (table order on ties)
- Pure and deterministic for a fixed knowledge base + lexicon
"""

import os
from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Callable, List, Literal, Optional, Tuple
from urllib.parse import quote

from myschool_backend.search.class_subject import extract_class_and_subject
from myschool_backend.search.edit_distance import LOOSE_FUZZY, TYPO_FUZZY, similarity
from myschool_backend.search.gibberish import is_meaningless
from myschool_backend.search.keywords import tokenize
from myschool_backend.search.knowledge_base import (
    ImageCategory,
    KnowledgeBase,
    get_knowledge_base,
)
from myschool_backend.search.phonetic import phonetic_match
from myschool_backend.search.scoring import score_keywords
from myschool_backend.search.spelling import SpellingCorrector
from myschool_backend.search.vocabulary import DEFAULT_LEXICON, Lexicon


# ============================================================
# TYPES
# ============================================================

Category = Literal[
    "one_click",
    "image_bank",
    "class_subject",
    "section",
    "search",
    "none",
]


@dataclass(frozen=True)
class SearchResult:
    name: str
    description: str
    url: str
    category: Category
    confidence: float
    tier: int
    score: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


# ============================================================
# CONFIG
# ============================================================

SEARCH_DEBUG = os.getenv("MYSCHOOL_SEARCH_DEBUG", "false").lower() == "true"

ONE_CLICK_CONFIDENCE = 0.99
ONE_CLICK_SUGGESTION_CONFIDENCE = 0.95
IMAGE_BANK_CONFIDENCE = 0.95
CLASS_SUBJECT_CONFIDENCE = 0.95
CLASS_ONLY_CONFIDENCE = 0.9
SECTION_BASE_CONFIDENCE = 0.5
SECTION_MAX_CONFIDENCE = 0.8
SECTION_SCORE_SCALE = 40.0
SEARCH_CONFIDENCE = 0.5
NO_MATCH_CONFIDENCE = 0.0

SECTION_MIN_SCORE = 3.0

MIN_VISUAL_FUZZY_LENGTH = 4
UNKNOWN_SUBJECT_CODE = "unknown"

DEFAULT_SUGGESTION_LIMIT = 4


# ============================================================
# ENGINE
# ============================================================

class PrioritySearchEngine:

    def __init__(
        self,
        kb: KnowledgeBase,
        lexicon: Lexicon = DEFAULT_LEXICON,
        corrector: Optional[SpellingCorrector] = None,
    ):
        self.kb = kb
        self.lexicon = lexicon
        self.corrector = corrector or SpellingCorrector(lexicon, kb.vocabulary())

        self._tiers: Tuple[Callable[[str], List[SearchResult]], ...] = (
            self._one_click,
            self._image_bank,
            self._class_subject,
            self._class_only,
            self._section,
            self._text_search,
            self._no_match,
        )

    # --------------------------------------------------------
    # PUBLIC API
    # --------------------------------------------------------

    def prepare(self, query: str) -> str:
        """
        Normalize + spell-correct. Safe on already-corrected input.
        """
        normalized = " ".join(tokenize(query or ""))
        return self.corrector.correct(normalized)

    def resolve(self, query: str, limit: int = 1) -> List[SearchResult]:
        q = self.prepare(query)

        for tier in self._tiers:
            results = tier(q)
            if results:
                if SEARCH_DEBUG:
                    top = results[0]
                    print(
                        f"🔎 [SEARCH] '{query}' -> '{q}' | tier={top.tier} | "
                        f"{top.category} | {top.confidence}"
                    )
                return results[:max(1, limit)]

        # unreachable: the last tier always answers
        return self._no_match(q)

    def suggest(self, query: str, limit: int = DEFAULT_SUGGESTION_LIMIT) -> List[SearchResult]:
        """
        Nearest curated matches across tiers 1-5, best tier first.
        Falls back to resolve() so the list is never empty.
        """
        q = self.prepare(query)

        collected: List[SearchResult] = []
        seen_urls = set()

        for tier in self._tiers[:5]:
            for r in tier(q):
                if r.category == "one_click":
                    r = _with_confidence(r, ONE_CLICK_SUGGESTION_CONFIDENCE)
                if r.url in seen_urls:
                    continue
                seen_urls.add(r.url)
                collected.append(r)

        if not collected:
            return self.resolve(query, limit=1)

        collected.sort(key=lambda r: (r.tier, -r.score))
        return collected[:max(1, limit)]

    # --------------------------------------------------------
    # TIER 1: ONE CLICK (exact only)
    # --------------------------------------------------------

    def _one_click(self, q: str) -> List[SearchResult]:
        if not q:
            return []

        compact = q.replace(" ", "")
        out: List[SearchResult] = []

        for resource in self.kb.one_click_resources:
            for kw in resource.keywords:
                if q == kw or compact == kw.replace(" ", ""):
                    out.append(SearchResult(
                        name=resource.name,
                        description=resource.description or ", ".join(resource.keywords[:5]),
                        url=self.kb.url(resource.url),
                        category="one_click",
                        confidence=ONE_CLICK_CONFIDENCE,
                        tier=1,
                        score=1.0,
                    ))
                    break

        return out

    # --------------------------------------------------------
    # TIER 2: IMAGE BANK (visual terms)
    # --------------------------------------------------------

    def _visual_phrase(self, q: str) -> str:
        ignore = self.lexicon.visual_fillers | self.lexicon.stop_words
        return " ".join(w for w in q.split() if w not in ignore)

    def _image_bank(self, q: str) -> List[SearchResult]:
        phrase = self._visual_phrase(q)
        if not phrase:
            return []

        matches: List[Tuple[float, str, ImageCategory]] = []

        for category in self.kb.image_bank.categories.values():
            best_score, best_term = 0.0, ""
            for term in (category.name.lower(),) + category.keywords:
                score = _visual_score(phrase, term)
                if score > best_score:
                    best_score, best_term = score, term
            if best_score > 0:
                matches.append((best_score, best_term, category))

        # stable sort keeps table order on equal scores
        matches.sort(key=lambda m: -m[0])

        out: List[SearchResult] = []
        for score, term, category in matches:
            if term == category.name.lower() or term in _plural_forms(category.name.lower()):
                name = f"{category.name} Images"
            else:
                name = f"{term.title()} Images"
            url = self.kb.url(
                self.kb.paths.image_bank.format(path=category.path, mu=category.mu)
            )
            out.append(SearchResult(
                name=name,
                description=f"Browse {category.name.lower()} pictures in the Image Bank",
                url=url,
                category="image_bank",
                confidence=IMAGE_BANK_CONFIDENCE,
                tier=2,
                score=round(score, 4),
            ))

        return out

    # --------------------------------------------------------
    # TIER 3 / 4: CLASS (+ SUBJECT)
    # --------------------------------------------------------

    def _class_subject(self, q: str) -> List[SearchResult]:
        cs = extract_class_and_subject(q, self.kb)
        if cs.class_num is None or cs.subject is None:
            return []

        subject = self.kb.subjects.get(cs.subject)
        if subject is None or subject.code == UNKNOWN_SUBJECT_CODE:
            return []

        label = cs.subject.capitalize()
        url = self.kb.url(
            self.kb.paths.class_subject.format(class_num=cs.class_num, code=subject.code)
        )
        return [SearchResult(
            name=f"Class {cs.class_num} {label}",
            description=f"Access Class {cs.class_num} {cs.subject} curriculum",
            url=url,
            category="class_subject",
            confidence=CLASS_SUBJECT_CONFIDENCE,
            tier=3,
            score=1.0,
        )]

    def _class_only(self, q: str) -> List[SearchResult]:
        cs = extract_class_and_subject(q, self.kb)
        if cs.class_num is None:
            return []

        url = self.kb.url(self.kb.paths.class_landing.format(class_num=cs.class_num))
        return [SearchResult(
            name=f"Class {cs.class_num} Resources",
            description=f"All Class {cs.class_num} resources",
            url=url,
            category="class_subject",
            confidence=CLASS_ONLY_CONFIDENCE,
            tier=4,
            score=1.0,
        )]

    # --------------------------------------------------------
    # TIER 5: NAMED SECTIONS
    # --------------------------------------------------------

    def _section(self, q: str) -> List[SearchResult]:
        if not q:
            return []

        scored = []
        for _, section in self.kb.non_academic_sections():
            score = score_keywords(q, section.keywords)
            if score >= SECTION_MIN_SCORE:
                scored.append((score, section))

        scored.sort(key=lambda s: -s[0])

        return [
            SearchResult(
                name=section.name,
                description=section.description,
                url=self.kb.url(section.url),
                category="section",
                confidence=_section_confidence(score),
                tier=5,
                score=score,
            )
            for score, section in scored
        ]

    # --------------------------------------------------------
    # TIER 6 / 7: TEXT SEARCH + TERMINAL FALLBACK
    # --------------------------------------------------------

    def _text_search(self, q: str) -> List[SearchResult]:
        if is_meaningless(q, self.lexicon.keyboard_mash):
            return []

        url = self.kb.url(self.kb.paths.search.format(query=quote(q, safe="")))
        return [SearchResult(
            name=f"Search: {q}",
            description=f"Searching for {q} across all resources",
            url=url,
            category="search",
            confidence=SEARCH_CONFIDENCE,
            tier=6,
        )]

    def _no_match(self, q: str) -> List[SearchResult]:
        return [SearchResult(
            name="Browse Academic Resources",
            description="Explore all resources",
            url=self.kb.url(self.kb.paths.browse),
            category="none",
            confidence=NO_MATCH_CONFIDENCE,
            tier=7,
        )]


# ============================================================
# HELPERS
# ============================================================

def _plural_forms(word: str) -> Tuple[str, ...]:
    """
    Naive singular/plural folds: "fishes" <-> "fish", "birds" <-> "bird".
    """
    forms = [word]
    if word.endswith("es") and len(word) > 4:
        forms.append(word[:-2])
    if word.endswith("s") and len(word) > 3:
        forms.append(word[:-1])
    else:
        forms.append(word + "s")
    return tuple(forms)


def _visual_score(phrase: str, term: str) -> float:
    if phrase == term or term in _plural_forms(phrase) or phrase in _plural_forms(term):
        return 1.0

    if len(phrase) < MIN_VISUAL_FUZZY_LENGTH or len(term) < MIN_VISUAL_FUZZY_LENGTH:
        return 0.0

    sim = similarity(phrase, term)
    if sim >= TYPO_FUZZY:
        return sim

    if (
        " " not in phrase
        and " " not in term
        and sim >= LOOSE_FUZZY
        and phonetic_match(phrase, term)
    ):
        return sim

    return 0.0


def _section_confidence(score: float) -> float:
    value = SECTION_BASE_CONFIDENCE + score / SECTION_SCORE_SCALE
    return round(min(SECTION_MAX_CONFIDENCE, value), 2)


def _with_confidence(result: SearchResult, confidence: float) -> SearchResult:
    data = result.to_dict()
    data["confidence"] = confidence
    return SearchResult(**data)


# ============================================================
# MODULE HELPERS
# ============================================================

@lru_cache(maxsize=1)
def get_engine() -> PrioritySearchEngine:
    from myschool_backend.search.spelling import get_default_corrector

    return PrioritySearchEngine(
        get_knowledge_base(),
        DEFAULT_LEXICON,
        corrector=get_default_corrector(),
    )


def resolve(query: str, limit: int = 1) -> List[SearchResult]:
    return get_engine().resolve(query, limit=limit)
