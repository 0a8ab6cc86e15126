"""Journal Chat — talk to a local LLM about your dated journal notes."""

__version__ = "0.1.0"
