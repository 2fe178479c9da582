"""
Text normalization and deterministic greeting rules.
"""

import pytest

from myschool_backend.llm.intent_rules import detect_rule_intent, is_greeting
from myschool_backend.llm.text_normalizer import looks_english, normalize_text, token_count


def test_normalize_text():
    assert normalize_text(None) == ""
    assert normalize_text("  Hiiii!!!  ") == "hi!"
    assert normalize_text("Class-5;  MATHS??") == "class 5 maths?"
    assert normalize_text("what's up") == "what's up"


@pytest.mark.parametrize("text, expected", [
    ("monkey pics", "monkey pictures"),
    ("plz show imgs of lions!!", "please show images of lions!"),
    ("std 5 maths", "class 5 maths"),
    ("how r u", "how are you"),
    ("pics?", "pictures?"),
    ("picnic ideas", "picnic ideas"),
])
def test_normalize_expands_chat_shorthand(text, expected):
    assert normalize_text(text) == expected


def test_shorthand_greeting_still_detected():
    assert is_greeting(normalize_text("how r u"))


def test_token_count():
    assert token_count("") == 0
    assert token_count("class 5 maths") == 3


@pytest.mark.parametrize("text, expected", [
    ("monkey images", True),
    ("it's class 5!", True),
    ("", True),
    ("జంతువుల చిత్రాలు", False),
    ("कक्षा 5 गणित", False),
])
def test_looks_english(text, expected):
    assert looks_english(text) is expected


@pytest.mark.parametrize("text", [
    "hi", "Hello", "hey there", "hii", "good morning", "Good evening teacher",
    "namaste", "how are you", "what's up",
])
def test_greetings(text):
    assert is_greeting(text)
    assert detect_rule_intent(text) == "greeting"


@pytest.mark.parametrize("text", [
    "high school science", "history", "hi show me class 5 maths worksheets",
    "monkey", "", None,
])
def test_not_greetings(text):
    assert not is_greeting(text)
    assert detect_rule_intent(text) is None
