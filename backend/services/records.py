"""
Records

Dataclasses for everything ResearchHub persists.
Stored documents use camelCase keys; attributes are snake_case.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal, Optional

Role = Literal["user", "assistant"]
ROLES = ("user", "assistant")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class SessionUser:
    """User as held by the session pointer (no password)."""
    id: str
    email: str
    full_name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "email": self.email, "fullName": self.full_name}

    @classmethod
    def from_dict(cls, data: dict) -> "SessionUser":
        return cls(
            id=data.get("id", ""),
            email=data.get("email", ""),
            full_name=data.get("fullName", ""),
        )


@dataclass
class User:
    id: str
    email: str
    password: str  # stored verbatim
    full_name: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "password": self.password,
            "fullName": self.full_name,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=data.get("id", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            full_name=data.get("fullName", ""),
        )

    def without_secret(self) -> SessionUser:
        return SessionUser(id=self.id, email=self.email, full_name=self.full_name)


@dataclass
class Workspace:
    id: str
    name: str
    description: str
    user_id: str
    created_at: str

    @classmethod
    def create(cls, id: str, user_id: str, name: str, description: str = "") -> "Workspace":
        return cls(
            id=id,
            name=name,
            description=description,
            user_id=user_id,
            created_at=_now(),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "userId": self.user_id,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Workspace":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            description=data.get("description", ""),
            user_id=data.get("userId", ""),
            created_at=data.get("createdAt", ""),
        )


@dataclass
class Paper:
    """An imported paper. `authors` is a flattened display string."""
    id: str
    title: str
    authors: str
    abstract: str
    year: Optional[int]
    source_url: str
    workspace_id: str
    user_id: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "authors": self.authors,
            "abstract": self.abstract,
            "year": self.year,
            "sourceUrl": self.source_url,
            "workspaceId": self.workspace_id,
            "userId": self.user_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Paper":
        return cls(
            id=data.get("id", ""),
            title=data.get("title", ""),
            authors=data.get("authors", ""),
            abstract=data.get("abstract", ""),
            year=data.get("year"),
            source_url=data.get("sourceUrl", ""),
            workspace_id=data.get("workspaceId", ""),
            user_id=data.get("userId", ""),
        )


@dataclass
class Message:
    id: str
    workspace_id: str
    role: Role
    content: str
    created_at: str

    @classmethod
    def create(cls, id: str, workspace_id: str, role: Role, content: str) -> "Message":
        return cls(
            id=id,
            workspace_id=workspace_id,
            role=role,
            content=content,
            created_at=_now(),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "workspaceId": self.workspace_id,
            "role": self.role,
            "content": self.content,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Message":
        return cls(
            id=data.get("id", ""),
            workspace_id=data.get("workspaceId", ""),
            role=data.get("role", "user"),
            content=data.get("content", ""),
            created_at=data.get("createdAt", ""),
        )
