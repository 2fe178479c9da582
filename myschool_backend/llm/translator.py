# myschool_backend/llm/translator.py

"""
Query Translator

Purpose:
- Turn non-English chat input (Telugu, Hindi, Gujarati, ...) into English
- Extract one search keyword alongside the translation

Rules:
- English / ASCII input NEVER touches the network
- Any failure returns the original text untranslated
"""

from dataclasses import dataclass
from typing import Optional

from myschool_backend.llm.net_loader import (
    NetAuthError,
    NetProviderError,
    NetRateLimitError,
    NetUsageError,
    chat_completion_json,
)
from myschool_backend.llm.prompts import build_translation_messages
from myschool_backend.llm.text_normalizer import looks_english


# ============================================================
# TYPES
# ============================================================

@dataclass
class Translation:
    translated_text: str
    keyword: str
    translated: bool = False


# ============================================================
# CONFIG
# ============================================================

TRANSLATE_MAX_TOKENS = 150
TRANSLATE_TEMPERATURE = 0.3

ENGLISH_HINTS = ("en", "en-us", "en-gb", "english")

_NET_ERRORS = (NetUsageError, NetAuthError, NetRateLimitError, NetProviderError)


def passthrough(text: str) -> Translation:
    return Translation(translated_text=text, keyword=text, translated=False)


# ============================================================
# PUBLIC API
# ============================================================

class Translator:

    def __init__(
        self,
        max_tokens: int = TRANSLATE_MAX_TOKENS,
        temperature: float = TRANSLATE_TEMPERATURE,
    ):
        self.max_tokens = max_tokens
        self.temperature = temperature

    def translate(self, text: str, source_language: Optional[str] = None) -> Translation:
        text = text or ""

        if (source_language or "").strip().lower() in ENGLISH_HINTS:
            return passthrough(text)

        if looks_english(text):
            return passthrough(text)

        try:
            payload = chat_completion_json(
                build_translation_messages(text, source_language),
                "translate",
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except _NET_ERRORS as e:
            print(f"⚠️ [TRANSLATE] Net call failed, using original text: {e}")
            return passthrough(text)

        translated = str(payload.get("translatedText") or "").strip() or text
        keyword = str(payload.get("keyword") or "").strip() or translated

        print(f"🌍 [TRANSLATE] '{text}' -> '{translated}' (keyword='{keyword}')")

        return Translation(
            translated_text=translated,
            keyword=keyword,
            translated=translated != text,
        )


def translate(text: str, source_language: Optional[str] = None) -> Translation:
    return Translator().translate(text, source_language)
