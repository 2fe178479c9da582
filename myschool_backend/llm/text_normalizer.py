# myschool_backend/llm/text_normalizer.py
"""
Text Normalizer for the MySchool assistant

Purpose:
- Clean raw chat text BEFORE greeting rules, classification and search
- Applied to every chat message (translated or not)
- Keep behavior deterministic and lightweight

NO intent logic
NO network
NO side effects
"""

import re
from typing import Optional


# ------------------------------------------------------------
# CONFIG
# ------------------------------------------------------------

# Text that needs no translation
ENGLISH_TEXT_PATTERN = re.compile(r"^[A-Za-z0-9\s.,!?'-]+$")

# Chat shorthand -> words the search tables know
CHAT_SHORTHAND = {
    "pic": "picture", "pics": "pictures", "pix": "pictures",
    "img": "image", "imgs": "images",
    "vid": "video", "vids": "videos",
    "plz": "please", "pls": "please",
    "u": "you", "r": "are", "ur": "your",
    "std": "class", "gr": "grade",
    "thx": "thanks", "ty": "thanks",
}

_RUN_PATTERN = re.compile(r"(.)\1{2,}")
_REPEATED_MARKS = re.compile(r"[!?]{2,}")
_CLUTTER_PATTERN = re.compile(r"[^\w\s\?\!\.']")
_SPACE_PATTERN = re.compile(r"\s{2,}")
_TRAILING_MARKS = re.compile(r"^(.*?)([.!?]*)$")


# ------------------------------------------------------------
# CORE NORMALIZATION
# ------------------------------------------------------------
def _expand_shorthand(token: str) -> str:
    # "pics?" keeps its trailing mark
    word, marks = _TRAILING_MARKS.match(token).groups()
    return CHAT_SHORTHAND.get(word, word) + marks


def normalize_text(text: Optional[str]) -> str:
    """
    Normalizes a chat message for the portal pipeline.

    Steps:
    1. Lowercase + trim (None -> "")
    2. Stretched letters folded ("hiiii" -> "hi")
    3. "!!!" / "??" folded to one mark
    4. Separators dropped ("class-5" -> "class 5")
    5. Chat shorthand expanded ("pics" -> "pictures", "std" -> "class")
    """

    if text is None:
        return ""

    text = str(text).lower().strip()
    text = _RUN_PATTERN.sub(r"\1", text)
    text = _REPEATED_MARKS.sub(lambda m: m.group(0)[0], text)
    text = _CLUTTER_PATTERN.sub(" ", text)
    text = _SPACE_PATTERN.sub(" ", text).strip()

    return " ".join(_expand_shorthand(t) for t in text.split())


# ------------------------------------------------------------
# LIGHT UTILITIES
# ------------------------------------------------------------
def token_count(text: str) -> int:
    if not text:
        return 0
    return len(text.split())


def looks_english(text: Optional[str]) -> bool:
    """
    True when text is plain ASCII words/digits/punctuation.
    Used to skip the translator entirely.
    """
    if not text or not text.strip():
        return True
    return bool(ENGLISH_TEXT_PATTERN.match(text))
