# myschool_backend/llm/orchestrator.py

"""
orchestrator.py

Chat reconciliation for the MySchool assistant.

Pipeline:
  message -> translate -> normalize -> spell-correct
          -> greeting rules -> classifier -> priority search
          -> remote thumbnails -> ChatReply

Authority:
- Search engine  : resource URL, category, confidence
- Classifier     : reply wording, greeting vs search
- Remote search  : thumbnails only

Every collaborator is injected and may fail independently;
handle() NEVER raises.
"""

from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from myschool_backend.llm.intent_classifier import (
    DEFAULT_SUGGESTIONS,
    IntentClassifier,
    IntentResult,
    fallback_intent,
)
from myschool_backend.llm.intent_rules import detect_rule_intent
from myschool_backend.llm.text_normalizer import normalize_text
from myschool_backend.llm.translator import Translation, Translator, passthrough
from myschool_backend.portal.remote_search import RemoteSearchClient
from myschool_backend.search.confidence import confidence_level, is_low_confidence
from myschool_backend.search.priority_search import (
    PrioritySearchEngine,
    SearchResult,
    get_engine,
)
from myschool_backend.search.synonyms import expand_with_synonyms


# ============================================================
# CONFIG
# ============================================================

GREETING_MESSAGE = (
    "Hello! I'm your MySchool Assistant. "
    "How can I help you find educational resources today?"
)
GREETING_SUGGESTIONS = ["Search for animals", "Class 5 Maths", "Browse flowers"]

FALLBACK_REPLY = "How can I help you find resources?"

MAX_SUGGESTIONS = 4
MAX_EXPANSION_SEARCHES = 4
THUMBNAIL_SIZE = 6


# ============================================================
# RESPONSE MODELS
# ============================================================

class Thumbnail(BaseModel):
    url: str
    thumbnail: str = ""
    title: str = ""
    category: str = ""


class ChatReply(BaseModel):
    response: str
    resource_url: str = ""
    resource_name: str = ""
    resource_description: str = ""
    suggestions: List[str] = Field(default_factory=list)
    search_type: str = "greeting"
    confidence: Optional[float] = None
    confidence_level: Optional[str] = None
    low_confidence: bool = False
    corrected_query: Optional[str] = None
    translated_query: Optional[str] = None
    thumbnails: List[Thumbnail] = Field(default_factory=list)


def fallback_reply() -> ChatReply:
    return ChatReply(
        response=FALLBACK_REPLY,
        suggestions=list(DEFAULT_SUGGESTIONS),
        search_type="greeting",
    )


# ============================================================
# ASSISTANT
# ============================================================

class ChatAssistant:

    def __init__(
        self,
        engine: PrioritySearchEngine,
        classifier: IntentClassifier,
        translator: Translator,
        remote_search: Optional[RemoteSearchClient] = None,
    ):
        self.engine = engine
        self.classifier = classifier
        self.translator = translator
        self.remote_search = remote_search

    # --------------------------------------------------------
    # PUBLIC API
    # --------------------------------------------------------

    def handle(
        self,
        message: str,
        history: Optional[List[Dict[str, str]]] = None,
        language: Optional[str] = None,
    ) -> ChatReply:
        try:
            return self._handle(message, history or [], language)
        except Exception as e:
            print(f"❌ [CHAT] Unhandled error, returning fallback: {e}")
            return fallback_reply()

    # --------------------------------------------------------
    # PIPELINE
    # --------------------------------------------------------

    def _handle(
        self,
        message: str,
        history: List[Dict[str, str]],
        language: Optional[str],
    ) -> ChatReply:

        if not message or not message.strip():
            return fallback_reply()

        print(f"\n🎯 [CHAT] Message: '{message}'")

        translation = self._translate(message, language)
        normalized = normalize_text(translation.translated_text)
        corrected = self.engine.prepare(normalized)

        # 1️⃣ Deterministic greetings (classifier only phrases the reply)
        if detect_rule_intent(normalized) == "greeting":
            intent = self._classify(normalized, history)
            print("👋 [CHAT] Greeting (rules)")
            return self._greeting_reply(intent)

        # 2️⃣ Classifier greetings (ignored when the classifier failed)
        intent = self._classify(corrected or normalized, history)
        if intent.search_type == "greeting" and not intent.is_fallback:
            print("👋 [CHAT] Greeting (classifier)")
            return self._greeting_reply(intent)

        # 3️⃣ Engine resolution (+ low-confidence alternates)
        top = self._reconcile(corrected, intent, translation)
        low = is_low_confidence(top)

        print(
            f"🔗 [CHAT] '{corrected}' -> {top.category} (tier {top.tier}) | "
            f"{top.confidence} | {top.url}"
        )

        # 4️⃣ Thumbnails
        thumbnails = self._thumbnails(corrected) if top.category != "none" else []

        return ChatReply(
            response=self._response_text(top, intent, corrected, low),
            resource_url=top.url,
            resource_name=top.name,
            resource_description=top.description,
            suggestions=self._suggestions(top, intent, corrected, low),
            search_type=_search_type(top),
            confidence=top.confidence,
            confidence_level=confidence_level(top.confidence),
            low_confidence=low,
            corrected_query=corrected if corrected != normalized else None,
            translated_query=translation.translated_text if translation.translated else None,
            thumbnails=thumbnails,
        )

    # --------------------------------------------------------
    # COLLABORATORS (each fails independently)
    # --------------------------------------------------------

    def _translate(self, message: str, language: Optional[str]) -> Translation:
        try:
            return self.translator.translate(message, language)
        except Exception as e:
            print(f"⚠️ [CHAT] Translator failed: {e}")
            return passthrough(message)

    def _classify(self, text: str, history: List[Dict[str, str]]) -> IntentResult:
        try:
            return self.classifier.classify(text, history)
        except Exception as e:
            print(f"⚠️ [CHAT] Classifier failed: {e}")
            return fallback_intent()

    def _thumbnails(self, query: str) -> List[Thumbnail]:
        if self.remote_search is None or not query:
            return []

        try:
            expansions = expand_with_synonyms(query, self.engine.lexicon)[1:]
            _, results = self.remote_search.search_with_fallbacks(
                query,
                expansions[:MAX_EXPANSION_SEARCHES],
                size=THUMBNAIL_SIZE,
            )
        except Exception as e:
            print(f"⚠️ [CHAT] Remote search failed: {e}")
            return []

        return [
            Thumbnail(
                url=r.path,
                thumbnail=r.thumbnail,
                title=r.title,
                category=r.category,
            )
            for r in results
        ]

    # --------------------------------------------------------
    # RECONCILIATION
    # --------------------------------------------------------

    def _reconcile(
        self,
        corrected: str,
        intent: IntentResult,
        translation: Translation,
    ) -> SearchResult:
        """
        The engine's answer for the corrected text stands unless it is
        low-confidence AND an alternate phrasing lands on a better tier.
        """
        top = self.engine.resolve(corrected)[0]
        if not is_low_confidence(top):
            return top

        for candidate in _alternate_queries(corrected, intent, translation):
            alt = self.engine.resolve(candidate)[0]
            if alt.tier < top.tier:
                print(f"🔁 [CHAT] Alternate '{candidate}' improved tier {top.tier} -> {alt.tier}")
                return alt

        return top

    # --------------------------------------------------------
    # WORDING
    # --------------------------------------------------------

    def _greeting_reply(self, intent: IntentResult) -> ChatReply:
        message = GREETING_MESSAGE
        if not intent.is_fallback and intent.message:
            message = intent.message

        return ChatReply(
            response=message,
            suggestions=list(GREETING_SUGGESTIONS),
            search_type="greeting",
        )

    def _response_text(
        self,
        top: SearchResult,
        intent: IntentResult,
        corrected: str,
        low: bool,
    ) -> str:
        if top.category == "none":
            return (
                "I couldn't understand that. "
                "Try one of the suggestions below or browse all resources."
            )

        if low:
            return (
                f"I couldn't find an exact match for \"{corrected}\". "
                "Here is a portal search, or try one of these:"
            )

        if not intent.is_fallback and intent.message:
            return intent.message

        return f"Here's {top.name}!"

    def _suggestions(
        self,
        top: SearchResult,
        intent: IntentResult,
        corrected: str,
        low: bool,
    ) -> List[str]:
        if low:
            nearest = [
                r.name
                for r in self.engine.suggest(corrected, limit=MAX_SUGGESTIONS + 1)
                if r.url != top.url
            ]
            return nearest[:MAX_SUGGESTIONS] or list(DEFAULT_SUGGESTIONS)

        if not intent.is_fallback:
            return intent.suggestions[:MAX_SUGGESTIONS]

        return []


# ============================================================
# HELPERS
# ============================================================

def _alternate_queries(
    corrected: str,
    intent: IntentResult,
    translation: Translation,
) -> Tuple[str, ...]:
    candidates = []
    if not intent.is_fallback and intent.search_query:
        candidates.append(normalize_text(intent.search_query))
    if translation.keyword:
        candidates.append(normalize_text(translation.keyword))

    return tuple(
        c for c in dict.fromkeys(candidates)
        if c and c != corrected
    )


def _search_type(result: SearchResult) -> str:
    if result.category == "class_subject":
        return "class_subject"
    if result.category == "none":
        return "invalid"
    return "direct_search"


# ============================================================
# DEFAULT WIRING
# ============================================================

@lru_cache(maxsize=1)
def get_chat_assistant() -> ChatAssistant:
    return ChatAssistant(
        engine=get_engine(),
        classifier=IntentClassifier(),
        translator=Translator(),
        remote_search=RemoteSearchClient(),
    )
