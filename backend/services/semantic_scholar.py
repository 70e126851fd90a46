"""
Semantic Scholar API Client

Paper search used to import papers into a workspace.
API docs: https://api.semanticscholar.org/api-docs/
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


# API Configuration
S2_API_BASE = "https://api.semanticscholar.org/graph/v1"
S2_SEARCH_FIELDS = "title,authors,abstract,year,url"
DEFAULT_LIMIT = 10

SEARCH_FAILED_MESSAGE = "Search failed. Try again."


class PaperSearchError(Exception):
    """Search request failed (network error or non-success status)."""

    def __init__(self, message: str = SEARCH_FAILED_MESSAGE):
        super().__init__(message)


@dataclass
class SearchResult:
    """A normalized search hit, ready to import."""
    paper_id: str
    title: str
    authors: str
    abstract: str = ""
    year: Optional[int] = None
    url: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "SearchResult":
        """Create SearchResult from S2 API response."""
        names = [a.get("name", "") for a in (data.get("authors") or [])]
        authors = ", ".join(n for n in names if n)

        return cls(
            paper_id=data.get("paperId") or "",
            title=data.get("title") or "Untitled",
            authors=authors or "Unknown",
            abstract=data.get("abstract") or "",
            year=data.get("year") or None,
            url=data.get("url") or "",
        )

    def to_dict(self) -> dict:
        return {
            "paper_id": self.paper_id,
            "title": self.title,
            "authors": self.authors,
            "abstract": self.abstract,
            "year": self.year,
            "url": self.url,
        }


class SemanticScholarClient:
    """
    Client for the Semantic Scholar paper search endpoint.

    No retries: a failed request raises PaperSearchError straight away.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: Optional[str] = None,
    ):
        self.http_client = http_client
        self.api_key = api_key if api_key is not None else os.getenv("S2_API_KEY")

    def _get_headers(self) -> dict:
        """Get request headers."""
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    async def search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[SearchResult]:
        """
        Search for papers by free-text query.

        Args:
            query: Search query
            limit: Maximum results (1-100)

        Returns:
            List of normalized results

        Raises:
            PaperSearchError: on transport errors, non-success status or a
                body that is not the expected JSON
        """
        params = {
            "query": query,
            "limit": min(limit, 100),
            "fields": S2_SEARCH_FIELDS,
        }

        try:
            response = await self.http_client.get(
                f"{S2_API_BASE}/paper/search",
                params=params,
                headers=self._get_headers(),
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"S2 search error: {e}")
            raise PaperSearchError() from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"S2 search error: {e}")
            raise PaperSearchError() from e

        items = data.get("data") if isinstance(data, dict) else None
        return [SearchResult.from_api(p) for p in (items or []) if isinstance(p, dict)]
