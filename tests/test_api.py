"""
HTTP transport: routes, payload shapes, dependency wiring.
Collaborators that would hit the network are replaced with fakes.
"""

import pytest
from fastapi.testclient import TestClient

from myschool_backend.api.main import app
from myschool_backend.llm.intent_classifier import fallback_intent
from myschool_backend.llm.orchestrator import ChatAssistant, get_chat_assistant
from myschool_backend.llm.translator import passthrough
from myschool_backend.search.priority_search import get_engine


class OfflineClassifier:
    def classify(self, message, history=None):
        return fallback_intent()


class OfflineTranslator:
    def translate(self, text, source_language=None):
        return passthrough(text)


@pytest.fixture
def client(engine):
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_chat_assistant] = lambda: ChatAssistant(
        engine, OfflineClassifier(), OfflineTranslator(), None
    )
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ============================================================
# HEALTH
# ============================================================

def test_root(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["service"] == "MySchool Assistant"


def test_health(client):
    data = client.get("/health").json()
    assert data["services"]["knowledge_base"] == "ok"
    assert data["services"]["net_key"] == "missing"


# ============================================================
# CHAT
# ============================================================

def test_chat_routes_query(client):
    r = client.post("/chat", json={"message": "class 5 maths", "session_id": "s1"})
    assert r.status_code == 200

    data = r.json()
    assert data["session_id"] == "s1"
    assert data["search_type"] == "class_subject"
    assert data["resource_url"] == "https://portal.myschoolct.com/views/academic/class/class-5?main=1&mu=mat"
    assert data["confidence"] == pytest.approx(0.95)
    assert data["thumbnails"] == []


def test_chat_generates_session_id(client):
    data = client.post("/chat", json={"message": "hello"}).json()
    assert data["session_id"]
    assert data["search_type"] == "greeting"


def test_chat_accepts_history(client):
    history = [
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "Hello!"},
    ]
    r = client.post("/chat", json={"message": "monky", "history": history, "language": "en"})
    assert r.status_code == 200
    assert r.json()["corrected_query"] == "monkey"


def test_chat_rejects_bad_history_role(client):
    r = client.post("/chat", json={"message": "x", "history": [{"role": "system", "content": "x"}]})
    assert r.status_code == 422


def test_autocomplete(client):
    data = client.get("/chat/autocomplete", params={"query": "monkey"}).json()
    assert data["resources"]
    assert data["resources"][0]["category"] == "image_bank"


def test_autocomplete_short_query(client):
    assert client.get("/chat/autocomplete", params={"query": "m"}).json() == {"resources": []}
    assert client.get("/chat/autocomplete").json() == {"resources": []}


# ============================================================
# SEARCH
# ============================================================

def test_search_resolve(client):
    data = client.post("/search/resolve", json={"query": "smart wall", "limit": 3}).json()
    top = data["results"][0]
    assert top["category"] == "one_click"
    assert top["level"] == "high"
    assert top["low_confidence"] is False


def test_search_resolve_limit_bounds(client):
    assert client.post("/search/resolve", json={"query": "x", "limit": 0}).status_code == 422


def test_search_correct(client):
    data = client.post("/search/correct", json={"query": "Monky Imges"}).json()
    assert data["corrected"] == "monkey images"
    assert data["changed"] is True

    data = client.post("/search/correct", json={"query": "class 5"}).json()
    assert data["changed"] is False


def test_search_expand(client):
    data = client.post("/search/expand", json={"query": "exam"}).json()
    assert data["expansions"][0] == "exam"
    assert "quiz" in data["expansions"]


def test_search_extract(client):
    data = client.post("/search/extract", json={"query": "class 8 science lion"}).json()
    assert data == {
        "query": "class 8 science lion",
        "class_num": 8,
        "subject": "science",
        "last_token": "lion",
    }
