"""
Application Session

Composes the ResearchHub services for one explicit session context.

Each AppSession owns its store, so several sessions over different data
directories are fully isolated. Validation that the UI shows to the user
(duplicate email, missing workspace, ...) is raised as SessionError with a
user-facing message.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx

from agent.completion import CompletionService
from agent.grounding import ChatTurnResult, GroundedChat
from agent.providers.groq import GroqCompletionService
from services.conversation import ConversationManager
from services.identity import IdentityManager
from services.papers import PaperManager
from services.records import Message, Paper, SessionUser, Workspace
from services.semantic_scholar import SearchResult, SemanticScholarClient
from services.store import Store
from services.workspaces import WorkspaceManager

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class SessionError(ValueError):
    """A user-facing validation failure."""


@dataclass
class WorkspaceSummary:
    workspace: Workspace
    paper_count: int


class AppSession:
    """
    One user's view of ResearchHub.

    Usage:
        session = AppSession(data_dir)
        session.register("Jane Doe", "jane@example.com", "secret1")
        session.login("jane@example.com", "secret1")
        ws = session.create_workspace("NLP Research")
        result = await session.chat(ws.id, "What are these papers about?")
    """

    def __init__(
        self,
        data_dir: Optional[str | Path] = None,
        completion: Optional[CompletionService] = None,
        search: Optional[SemanticScholarClient] = None,
    ):
        self.store = Store(data_dir)
        self.identity = IdentityManager(self.store)
        self.workspaces = WorkspaceManager(self.store)
        self.papers = PaperManager(self.store)
        self.conversation = ConversationManager(self.store)
        self.grounded_chat = GroundedChat(
            self.papers,
            self.conversation,
            completion or GroqCompletionService(),
        )
        self._search = search

    # ============ Authentication ============

    @property
    def current_user(self) -> Optional[SessionUser]:
        return self.identity.get_session()

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def _require_user(self) -> SessionUser:
        user = self.current_user
        if user is None:
            raise SessionError("Not signed in")
        return user

    def register(self, full_name: str, email: str, password: str) -> SessionUser:
        full_name = full_name.strip()
        email = email.strip()
        if not full_name or not email:
            raise SessionError("Name and email are required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise SessionError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if self.identity.find_by_email(email):
            raise SessionError("An account with this email already exists")

        user = self.identity.create_user(full_name, email, password)
        return user.without_secret()

    def login(self, email: str, password: str) -> SessionUser:
        user = self.identity.find_by_email(email.strip())
        if user is None or not self.identity.verify_password(user, password):
            raise SessionError("Invalid email or password")
        return self.identity.set_session(user)

    def logout(self) -> None:
        self.identity.clear_session()

    # ============ Workspaces ============

    def workspace_summaries(self) -> list[WorkspaceSummary]:
        user = self._require_user()
        return [
            WorkspaceSummary(workspace=ws, paper_count=self.papers.count_by_workspace(ws.id))
            for ws in self.workspaces.list_by_user(user.id)
        ]

    def create_workspace(self, name: str, description: str = "") -> Workspace:
        user = self._require_user()
        name = name.strip()
        if not name:
            raise SessionError("Workspace name is required")
        return self.workspaces.create(user.id, name, description.strip())

    def get_workspace(self, workspace_id: str) -> Workspace:
        workspace = self.workspaces.find_by_id(workspace_id)
        if workspace is None:
            raise SessionError("Workspace not found")
        return workspace

    def delete_workspace(self, workspace_id: str) -> None:
        self._require_user()
        self.workspaces.delete(workspace_id)

    # ============ Papers ============

    def list_papers(self, workspace_id: str) -> list[Paper]:
        return self.papers.list_by_workspace(workspace_id)

    async def search_papers(self, query: str) -> list[SearchResult]:
        query = query.strip()
        if not query:
            return []
        if self._search is not None:
            return await self._search.search(query)
        async with httpx.AsyncClient(timeout=30.0) as http_client:
            return await SemanticScholarClient(http_client).search(query)

    def import_paper(self, result: SearchResult, workspace_id: Optional[str]) -> Paper:
        user = self._require_user()
        if not workspace_id:
            raise SessionError("Select a workspace first")
        self.get_workspace(workspace_id)
        return self.papers.import_result(result, workspace_id, user.id)

    def remove_paper(self, paper_id: str) -> None:
        self._require_user()
        self.papers.delete(paper_id)

    # ============ Chat ============

    def messages(self, workspace_id: str) -> list[Message]:
        return self.conversation.list_by_workspace(workspace_id)

    async def chat(self, workspace_id: str, text: str) -> Optional[ChatTurnResult]:
        """Run one chat turn. Blank input is ignored and returns None."""
        self._require_user()
        text = text.strip()
        if not text:
            return None
        return await self.grounded_chat.send(workspace_id, text)

    def clear_chat(self, workspace_id: str) -> None:
        self._require_user()
        self.conversation.clear(workspace_id)
