"""Tests for journal_chat.core.llm.client (streaming over a mocked litellm)."""

import json
import sys
import types
import urllib.error
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from journal_chat.core.exceptions import LLMError
from journal_chat.core.llm.client import LLMClient

# litellm is mocked so no provider is contacted.
_litellm_mock = types.ModuleType("litellm")
_litellm_mock.acompletion = MagicMock()


@pytest.fixture(autouse=True)
def _mock_litellm():
    """Inject our mock litellm into sys.modules for all tests."""
    old = sys.modules.get("litellm")
    sys.modules["litellm"] = _litellm_mock
    _litellm_mock.acompletion = MagicMock()
    yield
    if old is not None:
        sys.modules["litellm"] = old
    else:
        sys.modules.pop("litellm", None)


def _chunk(text):
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=text))])


def _stream(*texts):
    async def _gen():
        for text in texts:
            yield _chunk(text)
        # usage-only trailer with no choices
        yield SimpleNamespace(choices=[])

    async def _acompletion(**kwargs):
        _stream.last_kwargs = kwargs
        return _gen()

    return _acompletion


class TestLLMClientInit:
    def test_bare_model_is_local(self):
        client = LLMClient("llama3.2:latest")
        assert client.model == "ollama/llama3.2:latest"
        assert client.provider == "local"

    def test_set_model(self):
        client = LLMClient("llama3.2:latest")
        client.set_model("mistral")
        assert client.model == "ollama/mistral"

    def test_api_base_trailing_slash(self):
        client = LLMClient("phi3", api_base="http://localhost:11434/")
        assert client.api_base == "http://localhost:11434"


class TestAstream:
    @pytest.mark.asyncio
    async def test_accumulates_chunks(self):
        _litellm_mock.acompletion = _stream("Hel", "lo", None, "!")
        seen = []
        client = LLMClient("llama3.2", api_base="http://localhost:11434")
        text = await client.astream([{"role": "user", "content": "hi"}], on_chunk=seen.append)
        assert text == "Hello!"
        assert seen == ["Hel", "lo", "!"]

    @pytest.mark.asyncio
    async def test_passes_stream_kwargs(self):
        _litellm_mock.acompletion = _stream("ok")
        client = LLMClient("llama3.2", api_base="http://localhost:11434")
        messages = [{"role": "user", "content": "hi"}]
        await client.astream(messages)
        kwargs = _stream.last_kwargs
        assert kwargs["model"] == "ollama/llama3.2"
        assert kwargs["messages"] == messages
        assert kwargs["stream"] is True
        assert kwargs["api_base"] == "http://localhost:11434"

    @pytest.mark.asyncio
    async def test_hosted_model_has_no_api_base(self):
        _litellm_mock.acompletion = _stream("ok")
        client = LLMClient("gpt-4o", api_base="http://localhost:11434")
        await client.astream([{"role": "user", "content": "hi"}])
        assert "api_base" not in _stream.last_kwargs

    @pytest.mark.asyncio
    async def test_should_stop_ends_stream(self):
        _litellm_mock.acompletion = _stream("one ", "two ", "three")
        seen = []

        def _stop():
            return len(seen) >= 2

        client = LLMClient("llama3.2")
        text = await client.astream([], on_chunk=seen.append, should_stop=_stop)
        assert text == "one two "

    @pytest.mark.asyncio
    async def test_provider_error_becomes_llm_error(self):
        async def _boom(**kwargs):
            raise ConnectionError("ollama is not running")

        _litellm_mock.acompletion = _boom
        client = LLMClient("llama3.2")
        with pytest.raises(LLMError, match="ollama is not running"):
            await client.astream([{"role": "user", "content": "hi"}])


class TestListModels:
    def test_lists_ollama_tags(self):
        payload = json.dumps({"models": [{"name": "llama3.2:latest"}, {"name": "mistral:7b"}, {}]}).encode()
        client = LLMClient("llama3.2", api_base="http://localhost:11434")
        with patch("journal_chat.core.llm.client._http_get", return_value=payload) as http_get:
            assert client.list_models() == ["llama3.2:latest", "mistral:7b"]
        http_get.assert_called_once_with("http://localhost:11434/api/tags")

    def test_unreachable_server(self):
        client = LLMClient("llama3.2", api_base="http://localhost:11434")
        with patch(
            "journal_chat.core.llm.client._http_get",
            side_effect=urllib.error.URLError("connection refused"),
        ):
            with pytest.raises(LLMError, match="Could not list models"):
                client.list_models()

    def test_hosted_provider_reports_configured_model(self):
        client = LLMClient("gpt-4o", api_base="http://localhost:11434")
        assert client.list_models() == ["gpt-4o"]
