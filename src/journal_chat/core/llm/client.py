"""
LLM Client — streaming chat over LiteLLM.

Wraps ``litellm.acompletion(stream=True)`` so the chat session can render a
reply as it arrives and abandon it early when the user asks to stop.
"""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from collections.abc import Callable
from typing import Any

from loguru import logger

from journal_chat.core.exceptions import LLMError

from .config import infer_provider, ollama_model_name


def _http_get(url: str, timeout: int = 10) -> bytes:
    req = urllib.request.Request(url=url, headers={"Accept": "application/json"})
    with urllib.request.urlopen(req, timeout=timeout) as resp:
        return resp.read()


class LLMClient:
    """
    Streaming chat client backed by LiteLLM.

    Model names follow litellm conventions; bare names are treated as local
    Ollama models:
      - Local:     ``"llama3.2:latest"`` or ``"ollama/llama3.2:latest"``
      - OpenAI:    ``"gpt-4o"``
      - Anthropic: ``"anthropic/claude-sonnet-4-20250514"``

    The client does not keep conversation history; callers pass the full
    message list on every call.
    """

    def __init__(
        self,
        model: str,
        api_base: str | None = None,
        temperature: float = 0.7,
        timeout: int = 180,
    ):
        self.model = ollama_model_name(model)
        self.provider = infer_provider(self.model)
        self.api_base = api_base.rstrip("/") if api_base else None
        self.temperature = temperature
        self.timeout = timeout

        logger.debug(f"LLMClient: model={self.model} provider={self.provider}")

    def set_model(self, model: str) -> None:
        """Switch the model used for subsequent calls."""
        self.model = ollama_model_name(model)
        self.provider = infer_provider(self.model)
        logger.info(f"LLMClient: switched model to {self.model}")

    def _build_completion_kwargs(self, messages: list[dict[str, Any]]) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "timeout": self.timeout,
            "stream": True,
        }
        # api_base only applies to self-hosted servers
        if self.api_base and self.provider == "local":
            kwargs["api_base"] = self.api_base
        return kwargs

    async def astream(
        self,
        messages: list[dict[str, Any]],
        *,
        on_chunk: Callable[[str], None] | None = None,
        should_stop: Callable[[], bool] | None = None,
    ) -> str:
        """Stream a completion and return the accumulated text.

        Args:
            messages: Full message list (context + history + new user turn).
            on_chunk: Called with each content delta as it arrives.
            should_stop: Polled before each chunk; returning True abandons
                the stream and returns what has been received so far.

        Raises:
            LLMError: If the provider call fails.
        """
        import litellm

        kwargs = self._build_completion_kwargs(messages)
        content_parts: list[str] = []

        try:
            stream = await litellm.acompletion(**kwargs)
            async for chunk in stream:
                if should_stop and should_stop():
                    logger.debug("Stream stopped by caller")
                    break
                if not chunk.choices:
                    continue
                delta = getattr(chunk.choices[0], "delta", None)
                text = getattr(delta, "content", None) if delta is not None else None
                if text:
                    content_parts.append(text)
                    if on_chunk:
                        on_chunk(text)
        except LLMError:
            raise
        except Exception as e:
            logger.error(f"LLM error ({type(e).__name__}): {e}")
            raise LLMError(f"Completion failed for {self.model}: {e}") from e

        return "".join(content_parts)

    def list_models(self) -> list[str]:
        """List models available to this client.

        For a local Ollama server this asks ``/api/tags``; hosted providers
        only report the configured model.

        Raises:
            LLMError: If the Ollama server cannot be reached or answers garbage.
        """
        if self.provider != "local" or not self.api_base:
            return [self.model]

        url = f"{self.api_base}/api/tags"
        try:
            data = json.loads(_http_get(url).decode("utf-8", errors="ignore"))
        except (urllib.error.URLError, OSError, json.JSONDecodeError) as e:
            raise LLMError(f"Could not list models from {url}: {e}") from e

        return [m["name"] for m in data.get("models", []) if m.get("name")]
