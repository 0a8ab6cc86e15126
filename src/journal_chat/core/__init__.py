"""Core building blocks: configuration, errors, logging, LLM client and CLI."""
