"""Conversation history helpers shared by the router and the search sub-router."""

from dataclasses import dataclass
from typing import Any, Iterable


@dataclass(frozen=True)
class Message:
    """A prior conversation message. Only the content is read."""
    role: str
    content: str
    timestamp: float = 0.0


def message_content(message: Any) -> str:
    """Content of a history message given as a dict or an object."""
    if isinstance(message, dict):
        content = message.get("content")
    else:
        content = getattr(message, "content", None)
    return str(content) if content is not None else ""


def calculate_context_length(history: Iterable[Any] | None) -> int:
    """Total character length of history message contents."""
    if not history:
        return 0
    return sum(len(message_content(message)) for message in history)


def extract_query_context(history: Iterable[Any] | None, limit: int = 3) -> str:
    """Join the contents of the last few history messages."""
    if not history:
        return ""
    contents = [message_content(m) for m in history]
    return "\n".join(contents[-limit:])
