"""
Knowledge base loading + validation.
A broken taxonomy must fail loudly with KnowledgeBaseError.
"""

import copy
import json

import pytest
from pydantic import ValidationError

from myschool_backend.search.knowledge_base import (
    DEFAULT_KB_PATH,
    KnowledgeBaseError,
    load_knowledge_base,
    parse_knowledge_base,
)


@pytest.fixture
def raw_kb():
    return json.loads(DEFAULT_KB_PATH.read_text(encoding="utf-8"))


def test_packaged_kb_loads(kb):
    assert kb.base_url == "https://portal.myschoolct.com"
    assert kb.subjects["maths"].code == "mat"
    assert kb.subjects["science"].code == "sci"
    assert any(r.name == "Smart Wall" for r in kb.one_click_resources)
    assert "animals" in kb.image_bank.categories
    assert "academic" not in dict(kb.non_academic_sections())


def test_kb_is_frozen(kb):
    with pytest.raises(ValidationError):
        kb.base_url = "https://example.com"


def test_url_join(kb):
    assert kb.url("/views/academic") == "https://portal.myschoolct.com/views/academic"
    assert kb.url("views/academic") == "https://portal.myschoolct.com/views/academic"
    assert kb.url("https://other.example/x") == "https://other.example/x"


def test_vocabulary_words(kb):
    vocab = kb.vocabulary()
    assert "monkey" in vocab
    assert "maths" in vocab
    assert all(" " not in w for w in vocab)


def test_env_path(monkeypatch, tmp_path, raw_kb):
    path = tmp_path / "kb.json"
    raw_kb["base_url"] = "https://staging.example/"
    path.write_text(json.dumps(raw_kb), encoding="utf-8")

    monkeypatch.setenv("MYSCHOOL_KB_PATH", str(path))
    kb = load_knowledge_base()
    assert kb.base_url == "https://staging.example"


def test_missing_file(tmp_path):
    with pytest.raises(KnowledgeBaseError):
        load_knowledge_base(tmp_path / "nope.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "kb.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(KnowledgeBaseError):
        load_knowledge_base(path)


def test_not_an_object():
    with pytest.raises(KnowledgeBaseError):
        parse_knowledge_base(["a", "b"])


def test_missing_academic(raw_kb):
    data = copy.deepcopy(raw_kb)
    del data["sections"]["academic"]
    with pytest.raises(KnowledgeBaseError):
        parse_knowledge_base(data)


def test_empty_subjects(raw_kb):
    data = copy.deepcopy(raw_kb)
    data["sections"]["academic"]["subsections"]["grades"]["subjects"] = {}
    with pytest.raises(KnowledgeBaseError):
        parse_knowledge_base(data)


def test_missing_subject_code(raw_kb):
    data = copy.deepcopy(raw_kb)
    del data["sections"]["academic"]["subsections"]["grades"]["subjects"]["maths"]["code"]
    with pytest.raises(KnowledgeBaseError):
        parse_knowledge_base(data)


def test_empty_one_click(raw_kb):
    data = copy.deepcopy(raw_kb)
    data["sections"]["academic"]["subsections"]["one_click_resources"]["resources"] = []
    with pytest.raises(KnowledgeBaseError):
        parse_knowledge_base(data)


def test_empty_keywords(raw_kb):
    data = copy.deepcopy(raw_kb)
    data["image_bank"]["categories"]["animals"]["keywords"] = []
    with pytest.raises(KnowledgeBaseError):
        parse_knowledge_base(data)


def test_keywords_are_normalized(raw_kb):
    data = copy.deepcopy(raw_kb)
    data["image_bank"]["categories"]["animals"]["keywords"] = ["  Monkey ", "DOG", ""]
    kb = parse_knowledge_base(data)
    assert kb.image_bank.categories["animals"].keywords == ("monkey", "dog")
