"""
Paper Service

Papers imported into a workspace.
"""

import logging
from typing import TYPE_CHECKING

from services.records import Paper
from services.store import PAPERS, Store

if TYPE_CHECKING:
    from services.semantic_scholar import SearchResult

logger = logging.getLogger(__name__)


class PaperManager:
    def __init__(self, store: Store):
        self.store = store

    def list_by_workspace(self, workspace_id: str) -> list[Paper]:
        return [
            Paper.from_dict(r) for r in self.store.load(PAPERS)
            if r.get("workspaceId") == workspace_id
        ]

    def count_by_workspace(self, workspace_id: str) -> int:
        return len(self.list_by_workspace(workspace_id))

    def save(
        self,
        *,
        title: str,
        authors: str,
        abstract: str,
        year: int | None,
        source_url: str,
        workspace_id: str,
        user_id: str,
    ) -> Paper:
        """Store a new paper and return it with its generated id."""
        records = self.store.load(PAPERS)
        paper = Paper(
            id=self.store.new_id(),
            title=title,
            authors=authors,
            abstract=abstract,
            year=year,
            source_url=source_url,
            workspace_id=workspace_id,
            user_id=user_id,
        )
        records.append(paper.to_dict())
        self.store.save(PAPERS, records)
        return paper

    def import_result(self, result: "SearchResult", workspace_id: str, user_id: str) -> Paper:
        paper = self.save(
            title=result.title,
            authors=result.authors,
            abstract=result.abstract,
            year=result.year,
            source_url=result.url,
            workspace_id=workspace_id,
            user_id=user_id,
        )
        logger.info(f"Imported paper {result.paper_id} into workspace {workspace_id}")
        return paper

    def delete(self, paper_id: str) -> None:
        records = [r for r in self.store.load(PAPERS) if r.get("id") != paper_id]
        self.store.save(PAPERS, records)
