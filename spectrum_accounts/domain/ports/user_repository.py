from __future__ import annotations

from typing import Optional, Protocol

from spectrum_accounts.domain.entities import User


class UserRepositoryPort(Protocol):
    async def create(self, user: User, password_hash: str) -> User:
        """
        Insert a new user and return the stored record (id and timestamps filled).
        Raise UserAlreadyExists if the email is taken.
        """

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Return None if not found."""

    async def get_by_email(self, email: str) -> Optional[User]:
        """Lookup by normalized email. Return None if not found."""

    async def get_by_email_with_hash(self, email: str) -> tuple[User, str] | None:
        """Like get_by_email, plus the stored password hash."""

    async def list_all(self, limit: int, offset: int = 0) -> list[User]:
        """Users ordered by id."""

    async def update_profile(
        self, user_id: int, *, email: str, phone: str, address: str
    ) -> Optional[User]:
        """
        Update contact details. Return None if the user does not exist.
        Raise UserAlreadyExists if the new email belongs to someone else.
        """

    async def update_password(self, user_id: int, password_hash: str) -> Optional[User]:
        """Return None if the user does not exist."""

    async def delete(self, user_id: int) -> bool:
        """True if a row was removed."""
