from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Lookups and deletes raise NotFoundError for missing users.
    upsert raises DuplicateError when the login name belongs to another user.
    """
    def get_all(self) -> list[User]:
        """Return all persisted users."""
        ...

    def get_by_id(self, user_id: int) -> User:
        """Find a user by ID."""
        ...

    def get_by_login_name(self, login_name: str) -> User:
        """Find a user by login name."""
        ...

    def upsert(self, user: User) -> User:
        """Insert the user if it has no ID, replace it otherwise.

        Assigns the ID on insert and stamps created_at/updated_at.
        Returns the persisted user.
        """
        ...

    def delete(self, user_id: int) -> None:
        """Delete a user by ID."""
        ...

    def clear(self) -> None:
        """Delete all users."""
        ...
