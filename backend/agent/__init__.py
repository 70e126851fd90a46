# Agent module: grounded chat over workspace papers

from agent.completion import (
    ChatMessage,
    CompletionConfigError,
    CompletionError,
    CompletionService,
)
from agent.grounding import (
    ChatTurnResult,
    ChatTurnState,
    GroundedChat,
)
from agent.prompts import get_system_prompt, render_grounding_context

__all__ = [
    "ChatMessage",
    "CompletionConfigError",
    "CompletionError",
    "CompletionService",
    "ChatTurnResult",
    "ChatTurnState",
    "GroundedChat",
    "get_system_prompt",
    "render_grounding_context",
]
