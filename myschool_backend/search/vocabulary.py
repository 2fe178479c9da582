# myschool_backend/search/vocabulary.py

"""
Static Word Tables (Lexicon)

Holds the hand-curated tables used by the query pipeline:
- MISSPELLINGS       misspelled token -> canonical token
- SYNONYM_GROUPS     canonical term -> equivalent terms
- STOP_WORDS         words that never drive matching
- KEYBOARD_MASH      substrings of obvious keyboard mashing
- VISUAL_FILLERS     "images of ..." style words around a visual term
- FALLBACK_SEARCHES  topic -> last-resort remote search terms

Tables are frozen at import and NEVER mutated at runtime.
Pass a different Lexicon to the pipeline to change them.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple


# ============================================================
# MISSPELLING DICTIONARY
# ============================================================

MISSPELLINGS: Mapping[str, str] = MappingProxyType({
    # puzzles
    "puzle": "puzzle", "puzel": "puzzle", "puzzl": "puzzle", "puzzel": "puzzle",
    "puzles": "puzzles", "puzzels": "puzzles",
    # images
    "imges": "images", "imags": "images", "imagse": "images", "iamges": "images",
    "pictres": "pictures", "picutres": "pictures", "picturs": "pictures",
    # charts
    "chrat": "chart", "cahrt": "chart", "chrts": "charts", "chrats": "charts",
    # animals
    "animls": "animals", "anmals": "animals", "animales": "animals", "animlas": "animals",
    "monky": "monkey", "monkee": "monkey", "mokey": "monkey",
    "elephent": "elephant", "elefant": "elephant", "elepant": "elephant",
    "tigar": "tiger", "tigor": "tiger", "lian": "lion", "loin": "lion",
    "giraf": "giraffe", "jiraffe": "giraffe", "zebraa": "zebra",
    "buterfly": "butterfly", "butterfli": "butterfly", "paroat": "parrot",
    "pecock": "peacock", "peacok": "peacock",
    # maths
    "mathss": "maths", "mats": "maths", "mahs": "maths", "mathes": "maths",
    "mathmatics": "mathematics", "mathametics": "mathematics",
    # science
    "scince": "science", "sceince": "science", "sciense": "science", "sicence": "science",
    # english
    "englsh": "english", "engish": "english", "enlgish": "english", "inglish": "english",
    # exams
    "exm": "exam", "exma": "exam", "examm": "exam", "exsam": "exam",
    # tips
    "tps": "tips", "tipss": "tips", "tisp": "tips",
    # worksheets
    "workshet": "worksheet", "workseet": "worksheet", "worksehet": "worksheet",
    "worsheet": "worksheet", "workshets": "worksheets",
    # syllabus
    "sylabus": "syllabus", "sillabus": "syllabus", "syllbus": "syllabus", "syllabu": "syllabus",
    # fruits
    "fruts": "fruits", "fruist": "fruits", "frutis": "fruits", "fruites": "fruits",
    "fruite": "fruits",
    # one click words
    "smrat": "smart", "samrt": "smart", "smrt": "smart",
    "wll": "wall", "wal": "wall", "walll": "wall",
    "bnk": "bank", "bnak": "bank", "bakn": "bank",
    "mcqs": "mcq", "mcss": "mcq",
    # languages
    "telgu": "telugu", "telegu": "telugu", "telugue": "telugu",
    "hindhi": "hindi", "hindee": "hindi",
    # poems / rhymes / stories
    "poam": "poem", "pome": "poem", "poams": "poems", "pomes": "poems",
    "rhyms": "rhymes", "rymes": "rhymes", "storys": "stories", "stores": "stories",
    # class
    "clas": "class", "clss": "class", "classs": "class", "grde": "grade",
    # resources / videos
    "resourse": "resource", "resorce": "resource", "resourc": "resource",
    "vido": "video", "vidoe": "video", "vidoes": "videos", "vidos": "videos",
})


# ============================================================
# SYNONYM GROUPS
# ============================================================

SYNONYM_GROUPS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    # subjects
    "maths": ("math", "mathematics", "arithmetic", "calculation"),
    "science": ("physics", "chemistry", "biology", "experiments"),
    "english": ("grammar", "vocabulary", "spelling", "reading"),
    "social": ("history", "geography", "civics", "social studies"),
    "computer": ("computers", "coding", "programming", "computing"),
    "evs": ("environment", "environmental studies", "nature"),
    # assessment
    "exam": ("test", "exams", "examination", "quiz", "assessment"),
    "worksheet": ("worksheets", "practice sheet", "activity sheet", "exercise"),
    "tips": ("tricks", "guide", "hints", "strategies"),
    # media
    "images": ("pictures", "photos", "pics", "visuals", "image"),
    "video": ("videos", "clip", "movie", "animation"),
    "stories": ("story", "tales", "fables", "pictorial stories"),
    "rhymes": ("rhyme", "poems", "poem", "songs", "nursery rhymes"),
    "puzzles": ("puzzle", "riddles", "brain teasers", "quizzes"),
    # visual topics
    "animals": ("animal", "wildlife", "pets", "zoo"),
    "birds": ("bird", "parrot", "peacock", "sparrow"),
    "flowers": ("flower", "rose", "lotus", "sunflower"),
    "fruits": ("fruit", "mango", "apple", "banana"),
    "vegetables": ("vegetable", "veggies", "carrot", "potato"),
    "insects": ("insect", "bugs", "butterfly", "ant"),
    # actions / careers
    "career": ("careers", "jobs", "profession", "employment"),
    "games": ("game", "play", "fun activities", "activities"),
    "drawing": ("draw", "colouring", "coloring", "sketch", "art"),
})


# ============================================================
# STOP WORDS / FILLERS
# ============================================================

STOP_WORDS: FrozenSet[str] = frozenset({
    "a", "an", "the", "and", "or", "of", "for", "to", "in", "on", "at",
    "is", "are", "was", "were", "be", "i", "me", "my", "we", "you", "your",
    "please", "show", "give", "want", "need", "find", "get", "some", "any",
    "about", "with", "can", "could", "would", "what", "which", "where",
    "how", "do", "does", "this", "that", "these", "those", "all", "from",
    "by", "search", "looking", "look", "see", "tell", "open", "related",
})

VISUAL_FILLERS: FrozenSet[str] = frozenset({
    "image", "images", "picture", "pictures", "photo", "photos",
    "pic", "pics", "drawing", "drawings", "clipart", "visual", "visuals",
})

KEYBOARD_MASH: Tuple[str, ...] = ("xyz", "qwer", "asdf", "zxcv", "hjkl", "bnm")


# ============================================================
# REMOTE SEARCH FALLBACKS (BY TOPIC)
# ============================================================

FALLBACK_SEARCHES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "default": ("animals", "flowers", "shapes", "numbers", "colors"),
    "science": ("animals", "plants", "nature"),
    "maths": ("numbers", "shapes", "geometry"),
})


# ============================================================
# LEXICON BUNDLE
# ============================================================

@dataclass(frozen=True)
class Lexicon:
    """
    Immutable bundle of every static word table the pipeline reads.
    """
    misspellings: Mapping[str, str] = field(default_factory=lambda: MISSPELLINGS)
    synonyms: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: SYNONYM_GROUPS
    )
    stop_words: FrozenSet[str] = STOP_WORDS
    visual_fillers: FrozenSet[str] = VISUAL_FILLERS
    keyboard_mash: Tuple[str, ...] = KEYBOARD_MASH
    fallback_searches: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: FALLBACK_SEARCHES
    )

    def known_words(self) -> FrozenSet[str]:
        """
        Single-word canonical forms: dictionary targets + synonym terms.
        """
        words = set(self.misspellings.values())
        for key, terms in self.synonyms.items():
            words.add(key)
            words.update(terms)
        return frozenset(w for w in words if " " not in w)


DEFAULT_LEXICON = Lexicon()
