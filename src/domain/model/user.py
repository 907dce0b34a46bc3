# domain/model/user.py

from dataclasses import dataclass, replace
from datetime import datetime


@dataclass(frozen=True)
class User:
    """Domain model representing a user.

    Immutable value object: use with_changes() to derive modified copies.
    Field formats (login name pattern, email syntax, name lengths) are
    validated at the API layer, not here.

    id, created_at and updated_at are None until the user is persisted;
    the repository assigns them.
    """
    login_name: str
    email_address: str
    first_name: str
    last_name: str
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def with_changes(self, **changes) -> 'User':
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)
