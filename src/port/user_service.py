from typing import Protocol
from domain.model.user import User


class UserOperations(Protocol):
    """Protocol for the user management operations exposed to the API layer."""
    def get_all(self) -> list[User]:
        ...

    def get_by_id(self, user_id: int) -> User:
        ...

    def get_by_name(self, login_name: str) -> User:
        ...

    def upsert(self, user: User) -> User:
        ...

    def delete(self, user_id: int) -> None:
        ...

    def clear(self) -> None:
        ...
