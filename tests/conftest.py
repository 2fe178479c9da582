"""
Shared fixtures: the packaged knowledge base and an engine built on it.
Nothing here touches the network.
"""

import pytest

from myschool_backend.search.knowledge_base import DEFAULT_KB_PATH, load_knowledge_base
from myschool_backend.search.priority_search import PrioritySearchEngine
from myschool_backend.search.spelling import SpellingCorrector
from myschool_backend.search.vocabulary import DEFAULT_LEXICON


@pytest.fixture(scope="session")
def kb():
    return load_knowledge_base(DEFAULT_KB_PATH)


@pytest.fixture(scope="session")
def corrector(kb):
    return SpellingCorrector(DEFAULT_LEXICON, kb.vocabulary())


@pytest.fixture(scope="session")
def engine(kb, corrector):
    return PrioritySearchEngine(kb, DEFAULT_LEXICON, corrector=corrector)


@pytest.fixture(autouse=True)
def _no_net_keys(monkeypatch):
    """Tests never see a real provider key unless they set one."""
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    monkeypatch.delenv("MYSCHOOL_NET_PROVIDER", raising=False)
