import re

import pytest

from kindroid_core.domain.exceptions import ValidationError
from kindroid_core.domain.models import ConversationMessage
from kindroid_core.providers.requester import (
    encode_uri_component,
    hash_requester_id,
    requester_id_for,
)


def test_encode_uri_component_matches_js():
    assert encode_uri_component("Ann Q.") == "Ann%20Q."
    assert encode_uri_component("a/b?c=d&e") == "a%2Fb%3Fc%3Dd%26e"
    assert encode_uri_component("it's(ok)!~*") == "it's(ok)!~*"
    assert encode_uri_component("李雷") == "%E6%9D%8E%E9%9B%B7"


def test_hash_requester_id_known_values():
    assert hash_requester_id("Ann Q.") == "QW5uJTIwUS4"
    assert hash_requester_id("a/b?c=d&e") == "YSUyRmIlM0ZjJTNEZCUyNmU"
    assert hash_requester_id("it's(ok)!~*") == "aXQncyhvaykhfio"
    assert hash_requester_id("李雷") == "JUU2JTlEJThFJUU5JTlCJUI3"


def test_hash_requester_id_truncates_to_32():
    assert hash_requester_id("x" * 40) == "eHh4" * 8


@pytest.mark.parametrize(
    "username",
    ["", "Ann Q.", "李雷", "🙂 emoji + spaces", "a/b?c=d&e#f", "x" * 500, "+/=="],
)
def test_hash_requester_id_shape(username):
    value = hash_requester_id(username)
    assert re.fullmatch(r"[A-Za-z0-9]*", value)
    assert len(value) <= 32


def test_hash_requester_id_empty_username():
    assert hash_requester_id("") == ""


def test_requester_id_uses_last_username_only():
    a = [
        {"username": "bob", "text": "one"},
        {"username": "Ann Q.", "text": "two"},
    ]
    b = [ConversationMessage(username="Ann Q.", text="something else")]
    assert requester_id_for(a) == requester_id_for(b) == hash_requester_id("Ann Q.")
    assert requester_id_for(a) == requester_id_for(a)


def test_requester_id_empty_conversation():
    with pytest.raises(ValidationError) as exc:
        requester_id_for([])
    assert exc.value.message == "Conversation array cannot be empty"


def test_requester_id_missing_username():
    with pytest.raises(ValidationError) as exc:
        requester_id_for([{"text": "hi"}])
    assert exc.value.code == "MISSING_USERNAME"


def test_hash_requester_id_length_from_registry(monkeypatch):
    from dataclasses import replace

    from kindroid_core.providers import registry, requester

    monkeypatch.setattr(requester, "KINDROID_CONFIG", replace(registry.KINDROID_CONFIG, requester_id_max_length=8))
    assert hash_requester_id("x" * 40) == "eHh4eHh4"
