# myschool_backend/portal/remote_search.py

"""
Portal Global Search client

Purpose:
- Fetch thumbnail results from the portal's own search API
- Walk a fallback chain until something comes back

Rules:
- Network / HTTP / payload errors NEVER propagate: they become []
- Only ever used for thumbnails, never for routing
"""

import os
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

import requests

from myschool_backend.search.vocabulary import DEFAULT_LEXICON, Lexicon


# ============================================================
# CONFIG
# ============================================================

PORTAL_API = os.getenv(
    "MYSCHOOL_PORTAL_API",
    "https://portal.myschoolct.com/api/rest/search/global",
)

PORTAL_TIMEOUT = float(os.getenv("MYSCHOOL_PORTAL_TIMEOUT", "5"))

REMOTE_SEARCH_ENABLED = os.getenv("MYSCHOOL_REMOTE_SEARCH", "true").lower() == "true"

DEFAULT_SIZE = 6

FALLBACK_TOPICS = ("science", "maths")
DEFAULT_TOPIC = "default"


# ============================================================
# TYPES
# ============================================================

@dataclass(frozen=True)
class PortalResult:
    title: str
    path: str
    thumbnail: str = ""
    category: str = ""
    kind: str = ""
    tags: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["tags"] = list(self.tags)
        return data


# ============================================================
# PAYLOAD PARSING
# ============================================================

def _result_items(body) -> List[Dict]:
    """
    The portal answers either a bare list or an envelope
    ({"results": [...]}, {"data": [...]}, {"data": {"results": [...]}}).
    """
    if isinstance(body, list):
        return [i for i in body if isinstance(i, dict)]

    if isinstance(body, dict):
        for key in ("results", "data", "items"):
            value = body.get(key)
            if isinstance(value, (list, dict)):
                return _result_items(value)

    return []


def parse_portal_results(body) -> List[PortalResult]:
    out: List[PortalResult] = []

    for item in _result_items(body):
        title = str(item.get("title") or item.get("name") or "").strip()
        path = str(item.get("path") or item.get("url") or "").strip()
        if not title or not path:
            continue

        tags = item.get("tags") or []
        if isinstance(tags, str):
            tags = [tags]

        out.append(PortalResult(
            title=title,
            path=path,
            thumbnail=str(item.get("thumbnail") or ""),
            category=str(item.get("category") or ""),
            kind=str(item.get("type") or ""),
            tags=tuple(str(t) for t in tags if t),
        ))

    return out


def fallback_topic(query: str) -> str:
    q = (query or "").lower()
    for topic in FALLBACK_TOPICS:
        if topic in q:
            return topic
    return DEFAULT_TOPIC


# ============================================================
# CLIENT
# ============================================================

class RemoteSearchClient:

    def __init__(
        self,
        api_url: str = PORTAL_API,
        timeout: float = PORTAL_TIMEOUT,
        lexicon: Lexicon = DEFAULT_LEXICON,
        enabled: bool = REMOTE_SEARCH_ENABLED,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self.lexicon = lexicon
        self.enabled = enabled

    def search(self, query: str, size: int = DEFAULT_SIZE) -> List[PortalResult]:
        query = (query or "").strip()
        if not self.enabled or not query:
            return []

        try:
            response = requests.get(
                self.api_url,
                params={"query": query, "size": size},
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as e:
            print(f"❌ [PORTAL] '{query}' failed: {e}")
            return []

        results = parse_portal_results(body)[:size]
        print(f"🔍 [PORTAL] '{query}' -> {len(results)} results")
        return results

    def search_with_fallbacks(
        self,
        query: str,
        expansions: Optional[Iterable[str]] = None,
        size: int = DEFAULT_SIZE,
    ) -> Tuple[str, List[PortalResult]]:
        """
        Order: query -> synonym expansions -> topic fallback terms.
        Returns the first (query_used, results) with results,
        else (query, []).
        """
        tried = set()
        topic_terms = self.lexicon.fallback_searches.get(fallback_topic(query), ())
        if not topic_terms:
            topic_terms = self.lexicon.fallback_searches.get(DEFAULT_TOPIC, ())

        for candidate in [query, *(expansions or []), *topic_terms]:
            candidate = (candidate or "").strip()
            if not candidate or candidate in tried:
                continue
            tried.add(candidate)

            results = self.search(candidate, size=size)
            if results:
                return candidate, results

        return query, []
