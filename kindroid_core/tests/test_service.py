import asyncio

import pytest

from kindroid_core import call_kindroid_ai, acall_kindroid_ai
from kindroid_core.config.settings import Settings
from kindroid_core.domain.exceptions import ValidationError
from kindroid_core.domain.models import KindroidRateLimited, KindroidSuccess
from kindroid_core.providers import create_client
from kindroid_core.providers.kindroid_client import KindroidClient


class Resp:
    def __init__(self, status_code, body=None):
        self.status_code = status_code
        self._body = body
        self.text = ""

    def json(self):
        return self._body


def test_create_client_explicit_settings():
    cfg = Settings(kindroid_infer_url="https://api.kindroid.test/infer", kindroid_api_key="kn_key")
    assert isinstance(create_client(cfg), KindroidClient)


def test_create_client_from_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("KINDROID_INFER_URL", "https://api.kindroid.test/infer")
    monkeypatch.setenv("KINDROID_API_KEY", "kn_key")
    assert isinstance(create_client(), KindroidClient)


def test_create_client_missing_config(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("KINDROID_INFER_URL", raising=False)
    monkeypatch.delenv("KINDROID_API_KEY", raising=False)
    monkeypatch.delenv("KINDROID_CONFIG_FILE", raising=False)
    with pytest.raises(ValidationError):
        create_client()


def test_call_kindroid_ai_scenario(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("KINDROID_INFER_URL", "https://api.kindroid.test/infer")
    monkeypatch.setenv("KINDROID_API_KEY", "kn_key")
    captured = {}

    class Client:
        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, url, json=None, headers=None, **_):
            captured.update(url=url, json=json, headers=headers)
            return Resp(200, {"reply": "hello"})

    monkeypatch.setattr("httpx.Client", Client)
    res = call_kindroid_ai("abc123", [{"username": "Ann Q.", "message": "hi"}])
    assert res == KindroidSuccess(reply="hello")
    assert captured["url"] == "https://api.kindroid.test/infer"
    assert captured["json"] == {
        "share_code": "abc123",
        "conversation": [{"username": "Ann Q.", "message": "hi"}],
        "enable_filter": False,
    }
    assert captured["headers"]["Authorization"] == "Bearer kn_key"


def test_acall_kindroid_ai_rate_limited(monkeypatch):
    class AsyncClient:
        def __init__(self, *a, **kw):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, *a):
            return False

        async def post(self, *a, **kw):
            return Resp(429)

    monkeypatch.setattr("httpx.AsyncClient", AsyncClient)
    cfg = Settings(kindroid_infer_url="https://api.kindroid.test/infer", kindroid_api_key="kn_key")
    res = asyncio.run(
        acall_kindroid_ai("abc123", [{"username": "Ann Q.", "message": "hi"}], cfg=cfg)
    )
    assert isinstance(res, KindroidRateLimited)
