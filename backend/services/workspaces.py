"""
Workspace Service

Workspace CRUD. Deleting a workspace cascades to its papers and messages.
"""

import logging
from typing import Optional

from services.records import Workspace
from services.store import MESSAGES, PAPERS, WORKSPACES, Store

logger = logging.getLogger(__name__)


class WorkspaceManager:
    def __init__(self, store: Store):
        self.store = store

    def _all(self) -> list[Workspace]:
        return [Workspace.from_dict(r) for r in self.store.load(WORKSPACES)]

    def list_by_user(self, user_id: str) -> list[Workspace]:
        """Workspaces owned by a user, in insertion order."""
        return [w for w in self._all() if w.user_id == user_id]

    def find_by_id(self, workspace_id: str) -> Optional[Workspace]:
        return next((w for w in self._all() if w.id == workspace_id), None)

    def create(self, user_id: str, name: str, description: str = "") -> Workspace:
        records = self.store.load(WORKSPACES)
        workspace = Workspace.create(self.store.new_id(), user_id, name, description)
        records.append(workspace.to_dict())
        self.store.save(WORKSPACES, records)
        logger.info(f"Created workspace {workspace.id} for user {user_id}")
        return workspace

    def delete(self, workspace_id: str) -> None:
        """
        Delete a workspace along with every paper and message it owns.

        All three replacements are computed before anything is written, and
        the workspace itself is written last: if a write fails the workspace
        is still listed and the delete can be retried.
        """
        workspaces = [r for r in self.store.load(WORKSPACES) if r.get("id") != workspace_id]
        papers = [r for r in self.store.load(PAPERS) if r.get("workspaceId") != workspace_id]
        messages = [r for r in self.store.load(MESSAGES) if r.get("workspaceId") != workspace_id]

        self.store.save(PAPERS, papers)
        self.store.save(MESSAGES, messages)
        self.store.save(WORKSPACES, workspaces)
        logger.info(f"Deleted workspace {workspace_id} with its papers and messages")
