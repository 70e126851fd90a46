"""
Identity Service

User records and the current-session pointer.
Email uniqueness is the caller's job: check find_by_email before create_user.
"""

import hmac
import logging
from typing import Optional

from services.records import SessionUser, User
from services.store import CURRENT_USER, USERS, Store

logger = logging.getLogger(__name__)


class IdentityManager:
    def __init__(self, store: Store):
        self.store = store

    def list_users(self) -> list[User]:
        return [User.from_dict(r) for r in self.store.load(USERS)]

    def find_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup."""
        wanted = email.lower()
        for user in self.list_users():
            if user.email.lower() == wanted:
                return user
        return None

    def create_user(self, full_name: str, email: str, password: str) -> User:
        users = self.store.load(USERS)
        user = User(
            id=self.store.new_id(),
            email=email,
            password=password,
            full_name=full_name,
        )
        users.append(user.to_dict())
        self.store.save(USERS, users)
        logger.info(f"Created user {user.id}")
        return user

    def verify_password(self, user: User, password: str) -> bool:
        return hmac.compare_digest(user.password.encode("utf-8"), password.encode("utf-8"))

    # ============ Session ============

    def set_session(self, user: User) -> SessionUser:
        """Persist the user, minus the password, as the current session."""
        session_user = user.without_secret()
        self.store.save_record(CURRENT_USER, session_user.to_dict())
        return session_user

    def get_session(self) -> Optional[SessionUser]:
        data = self.store.load_record(CURRENT_USER)
        if not data or not data.get("id"):
            return None
        return SessionUser.from_dict(data)

    def clear_session(self) -> None:
        self.store.remove(CURRENT_USER)
