"""
Grounded Chat

Turns one user utterance into a persisted exchange with the completion
backend, grounded in the papers of the workspace.

Flow per turn:
    1. Persist the user message (never rolled back)
    2. Render the workspace's papers into the system prompt
    3. Take the 6 messages before the new one as history
    4. Send system + history + utterance to the Completion Service
    5. Persist the reply as an assistant message, or report the failure

Concurrent turns for the same workspace are not serialized here; callers
keep input disabled while a turn is awaiting its reply.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from agent.completion import (
    ChatMessage,
    CompletionConfigError,
    CompletionError,
    CompletionService,
)
from agent.prompts import get_system_prompt, recent_history
from services.conversation import ConversationManager
from services.papers import PaperManager
from services.records import Message

logger = logging.getLogger(__name__)

HISTORY_SIZE = 6
DEFAULT_ERROR_MESSAGE = "AI request failed"


class ChatTurnState(Enum):
    IDLE = "idle"
    SENDING = "sending"
    AWAITING_REPLY = "awaiting_reply"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class ChatTurnResult:
    """Outcome of one chat turn."""
    state: ChatTurnState
    user_message: Message
    assistant_message: Optional[Message] = None
    error: Optional[str] = None
    config_error: bool = False

    @property
    def ok(self) -> bool:
        return self.state == ChatTurnState.COMPLETED

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "user_message": self.user_message.to_dict(),
            "assistant_message": self.assistant_message.to_dict() if self.assistant_message else None,
            "error": self.error,
            "config_error": self.config_error,
        }


class GroundedChat:
    """Grounding and completion pipeline for workspace chat."""

    def __init__(
        self,
        papers: PaperManager,
        conversation: ConversationManager,
        completion: CompletionService,
        history_size: int = HISTORY_SIZE,
    ):
        self.papers = papers
        self.conversation = conversation
        self.completion = completion
        self.history_size = history_size

    def build_prompt(self, workspace_id: str, text: str) -> list[ChatMessage]:
        """
        Ordered prompt for a turn whose user message is already persisted.

        Returns system entry, then up to `history_size` prior messages in
        creation order, then the utterance itself.
        """
        system = ChatMessage(role="system", content=get_system_prompt(
            self.papers.list_by_workspace(workspace_id)
        ))
        history = [
            ChatMessage(role=m.role, content=m.content)
            for m in recent_history(
                self.conversation.list_by_workspace(workspace_id),
                self.history_size,
            )
        ]
        return [system, *history, ChatMessage(role="user", content=text)]

    async def send(self, workspace_id: str, text: str) -> ChatTurnResult:
        """
        Run one turn. The turn state is local to this call; the returned
        ChatTurnResult carries its final value.
        """
        state = ChatTurnState.SENDING
        user_message = self.conversation.append(workspace_id, "user", text)

        prompt = self.build_prompt(workspace_id, text)

        state = ChatTurnState.AWAITING_REPLY
        logger.info(f"Sending chat turn for workspace {workspace_id} ({len(prompt)} prompt entries)")
        try:
            reply = await self.completion.complete(prompt)
        except CompletionConfigError as e:
            logger.error(f"Completion backend not configured: {e}")
            state = ChatTurnState.FAILED
            return ChatTurnResult(
                state=state,
                user_message=user_message,
                error=str(e),
                config_error=True,
            )
        except CompletionError as e:
            state = ChatTurnState.FAILED
            return ChatTurnResult(
                state=state,
                user_message=user_message,
                error=str(e) or DEFAULT_ERROR_MESSAGE,
            )

        assistant_message = self.conversation.append(workspace_id, "assistant", reply)
        state = ChatTurnState.COMPLETED
        logger.debug(f"Chat turn for workspace {workspace_id} finished: {state.value}")
        return ChatTurnResult(
            state=state,
            user_message=user_message,
            assistant_message=assistant_message,
        )
