"""Prompt text used when journal entries are injected into a conversation."""

from __future__ import annotations

JOURNAL_CONTEXT_PROMPT = """These are my journals from this time period:
{combined_text}
---
Answer my questions about my journals above, and do not provide any opinions of your own."""

JOURNAL_CONTEXT_ACK = (
    "I understand these are your journals, and that I have your explicit consent to read through them. "
    "I will keep anything in this conversation confidential, between us two only. "
    "I will answer your question and your question only, without any unwanted details. "
    "Please ask me anything about them, and I will do my best to help you."
)


def build_context_prompt(combined_text: str) -> str:
    """User-side message carrying the journal text."""
    return JOURNAL_CONTEXT_PROMPT.format(combined_text=combined_text)
