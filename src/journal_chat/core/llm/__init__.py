"""LLM access through litellm: a streaming chat client and model helpers."""

from .client import LLMClient
from .config import infer_provider, ollama_model_name

__all__ = ["LLMClient", "infer_provider", "ollama_model_name"]
