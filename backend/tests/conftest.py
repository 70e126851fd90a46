"""
Shared fixtures for ResearchHub tests.
"""

import pytest

from agent.completion import ChatMessage, CompletionError
from services.store import Store


class FakeCompletion:
    """Records every prompt and answers with a canned reply or error."""

    def __init__(self, reply: str = "A grounded answer.", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[list[ChatMessage]] = []

    async def complete(self, messages: list[ChatMessage]) -> str:
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def store(tmp_path):
    return Store(tmp_path / "data")


@pytest.fixture
def fake_completion():
    return FakeCompletion()


@pytest.fixture
def failing_completion():
    return FakeCompletion(error=CompletionError("Groq error: 500 Internal Server Error"))
