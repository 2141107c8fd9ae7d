"""User lookups and the acting-principal record."""
from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from core.logging_config import get_logger
from core.models import User, UserRole
from core.utils import hash_password

LOGGER = get_logger(__name__)


class UserService:
    """Service for user records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_user(self, user_id: int) -> User:
        user = self.session.get(User, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def find_by_username(self, username: str) -> Optional[User]:
        return self.session.scalars(select(User).where(User.username == username)).first()

    def get_by_username(self, username: str) -> User:
        user = self.find_by_username(username)
        if user is None:
            raise NotFoundError("User", username)
        return user

    def create_user(
        self,
        username: str,
        password: str,
        name: str,
        email: str,
        phone: Optional[str] = None,
        profile_image: Optional[str] = None,
        role: str = UserRole.REALTOR.value,
    ) -> User:
        """Create a user. The password is stored hashed."""
        user = User(
            username=username,
            password=hash_password(password),
            name=name,
            email=email,
            phone=phone,
            profile_image=profile_image,
            role=role,
        )
        self.session.add(user)
        self.session.flush()
        LOGGER.info(f"Created user {username} (id={user.id})")
        return user
