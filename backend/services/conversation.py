"""
Conversation Service

Chat history per workspace.

Reads return only the newest MAX_VISIBLE_MESSAGES. Older messages stay on
disk until the chat is cleared or the workspace is deleted.
"""

import logging

from services.records import ROLES, Message, Role
from services.store import MESSAGES, Store

logger = logging.getLogger(__name__)

MAX_VISIBLE_MESSAGES = 50


class ConversationManager:
    def __init__(self, store: Store):
        self.store = store

    def list_by_workspace(self, workspace_id: str) -> list[Message]:
        """The newest 50 messages of a workspace, oldest first."""
        messages = []
        for r in self.store.load(MESSAGES):
            if r.get("workspaceId") != workspace_id:
                continue
            if r.get("role") not in ROLES:
                logger.warning(f"Skipping message {r.get('id')} with invalid role {r.get('role')!r}")
                continue
            messages.append(Message.from_dict(r))
        return messages[-MAX_VISIBLE_MESSAGES:]

    def append(self, workspace_id: str, role: Role, content: str) -> Message:
        if role not in ROLES:
            raise ValueError(f"Invalid message role: {role}")

        records = self.store.load(MESSAGES)
        message = Message.create(self.store.new_id(), workspace_id, role, content)
        records.append(message.to_dict())
        self.store.save(MESSAGES, records)
        return message

    def clear(self, workspace_id: str) -> None:
        records = [r for r in self.store.load(MESSAGES) if r.get("workspaceId") != workspace_id]
        self.store.save(MESSAGES, records)
        logger.info(f"Cleared chat history for workspace {workspace_id}")
