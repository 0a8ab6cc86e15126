"""
LLM configuration — model naming helpers.

Journal chat is meant to run against a local Ollama server, so bare model
names that no hosted provider claims (``llama3.2:latest``) are treated as
Ollama models.
"""

OLLAMA_PREFIX = "ollama/"

_PROVIDER_PREFIXES: dict[str, str] = {
    "ollama/": "local",
    "ollama_chat/": "local",
    "anthropic/": "anthropic",
    "gemini/": "gemini",
    "deepseek/": "deepseek",
    "xai/": "xai",
    "groq/": "groq",
    "openai/": "openai",
}


def infer_provider(model_name: str) -> str:
    """Infer provider from a litellm model string."""
    for prefix, provider in _PROVIDER_PREFIXES.items():
        if model_name.startswith(prefix):
            return provider
    # Substring-based fallbacks
    if any(k in model_name for k in ("gpt-", "o1", "o3", "o4")):
        return "openai"
    if "claude" in model_name:
        return "anthropic"
    return "local"


def ollama_model_name(model_name: str) -> str:
    """Return a litellm model string, prefixing bare local names with ``ollama/``.

    Hosted model names (``gpt-4o``, ``claude-3-haiku``) are left alone.
    """
    model_name = model_name.strip()
    if "/" in model_name or infer_provider(model_name) != "local":
        return model_name
    return f"{OLLAMA_PREFIX}{model_name}"
