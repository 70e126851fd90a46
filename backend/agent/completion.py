"""
Completion Types

Prompt entries, the completion-service interface and its error types.
"""

from dataclasses import dataclass
from typing import Literal, Protocol


PromptRole = Literal["system", "user", "assistant"]


@dataclass
class ChatMessage:
    """One entry of an ordered prompt."""
    role: PromptRole
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


class CompletionConfigError(Exception):
    """The backend credential is missing. Not retried, shown verbatim."""


class CompletionError(Exception):
    """The backend call failed (network, auth, status, bad body)."""


class CompletionService(Protocol):
    async def complete(self, messages: list[ChatMessage]) -> str:
        """Return generated text for an ordered prompt."""
        ...
