"""
Groq Provider for PydanticAI

Chat completions through Groq's OpenAI-compatible API.
The API key comes from GROQ_API_KEY (a .env file is honoured).
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv
load_dotenv()  # Ensure .env is loaded

import httpx
from openai import APIError, AsyncOpenAI
from pydantic_ai.direct import model_request
from pydantic_ai.exceptions import AgentRunError
from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelResponse,
    SystemPromptPart,
    TextPart,
    UserPromptPart,
)
from pydantic_ai.models import Model
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider

from agent.completion import ChatMessage, CompletionConfigError, CompletionError

logger = logging.getLogger(__name__)


# Groq configuration
GROQ_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_GROQ_MODEL = "llama-3.3-70b-versatile"
MAX_TOKENS = 1024

PLACEHOLDER_API_KEY = "your_groq_api_key_here"
MISSING_KEY_MESSAGE = "Groq API key not configured. Please set GROQ_API_KEY in your .env file."
EMPTY_REPLY = "No response from AI."


def get_groq_provider(api_key: str, base_url: Optional[str] = None) -> OpenAIProvider:
    """Create an OpenAIProvider configured for Groq, without client-side retries."""
    return OpenAIProvider(
        openai_client=AsyncOpenAI(
            api_key=api_key,
            base_url=base_url or os.getenv("GROQ_BASE_URL", GROQ_BASE_URL),
            max_retries=0,
        )
    )


def get_groq_model(api_key: str, model_id: Optional[str] = None) -> OpenAIChatModel:
    """
    Get a PydanticAI model configured for Groq.

    Args:
        api_key: Groq API key
        model_id: Model ID to use (default: GROQ_MODEL or llama-3.3-70b-versatile)
    """
    if model_id is None:
        model_id = os.getenv("GROQ_MODEL", DEFAULT_GROQ_MODEL)

    provider = get_groq_provider(api_key)
    return OpenAIChatModel(model_id, provider=provider)


def to_model_messages(messages: list[ChatMessage]) -> list[ModelMessage]:
    """Convert role/content entries to PydanticAI messages, keeping order."""
    converted: list[ModelMessage] = []
    for msg in messages:
        if msg.role == "system":
            converted.append(ModelRequest(parts=[SystemPromptPart(content=msg.content)]))
        elif msg.role == "user":
            converted.append(ModelRequest(parts=[UserPromptPart(content=msg.content)]))
        elif msg.role == "assistant":
            converted.append(ModelResponse(parts=[TextPart(content=msg.content)]))
        else:
            raise ValueError(f"Unknown prompt role: {msg.role}")
    return converted


def response_text(response: ModelResponse) -> str:
    return "".join(p.content for p in response.parts if isinstance(p, TextPart))


class GroqCompletionService:
    """
    Completion Service backed by Groq.

    The credential is checked on every request so that a missing key is a
    CompletionConfigError, distinct from a CompletionError raised by the
    backend call itself.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_id: Optional[str] = None,
        model: Optional[Model] = None,
    ):
        self.api_key = api_key
        self.model_id = model_id
        self._model = model

    def _resolve_api_key(self) -> str:
        api_key = self.api_key if self.api_key is not None else os.getenv("GROQ_API_KEY", "")
        if not api_key or api_key == PLACEHOLDER_API_KEY:
            raise CompletionConfigError(MISSING_KEY_MESSAGE)
        return api_key

    def _get_model(self) -> Model:
        if self._model is None:
            self._model = get_groq_model(self._resolve_api_key(), self.model_id)
        return self._model

    async def complete(self, messages: list[ChatMessage]) -> str:
        model = self._get_model()

        try:
            response = await model_request(
                model,
                to_model_messages(messages),
                model_settings={"max_tokens": MAX_TOKENS},
            )
        except (AgentRunError, APIError, httpx.HTTPError) as e:
            logger.error(f"Groq completion error: {e}")
            raise CompletionError(f"Groq error: {e}") from e

        return response_text(response) or EMPTY_REPLY
