"""In-memory implementation of UserRepository for testing."""

from datetime import datetime, timezone
from itertools import count

from domain.model.errors import DuplicateError, NotFoundError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[int, User] = {}
        self._ids = count(1)

    # ── write operations ─────────────────────────────────────

    def upsert(self, user: User) -> User:
        if user.id is not None and user.id not in self.store:
            raise NotFoundError(f"User with ID {user.id} not found")

        if any(u.login_name == user.login_name and u.id != user.id for u in self.store.values()):
            raise DuplicateError(f"User with login name '{user.login_name}' already exists")

        now = datetime.now(timezone.utc)
        if user.id is None:
            saved = user.with_changes(id=next(self._ids), created_at=now, updated_at=now)
        else:
            saved = user.with_changes(created_at=self.store[user.id].created_at, updated_at=now)

        self.store[saved.id] = saved
        return saved

    def delete(self, user_id: int) -> None:
        if self.store.pop(user_id, None) is None:
            raise NotFoundError(f"User with ID {user_id} not found")

    def clear(self) -> None:
        self.store.clear()

    # ── read operations ──────────────────────────────────────

    def get_all(self) -> list[User]:
        return list(self.store.values())

    def get_by_id(self, user_id: int) -> User:
        user = self.store.get(user_id)
        if user is None:
            raise NotFoundError(f"User with ID {user_id} not found")
        return user

    def get_by_login_name(self, login_name: str) -> User:
        for user in self.store.values():
            if user.login_name == login_name:
                return user
        raise NotFoundError(f"User with login name '{login_name}' not found")
