"""User service: create/update/delete business rules for users.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging

from domain.model.errors import DuplicateError
from domain.model.user import User
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Implements UserOperations on top of a UserRepository."""

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def clear(self) -> None:
        logger.warning("Clearing all users")
        self.repo.clear()

    def get_all(self) -> list[User]:
        logger.debug("Retrieving all users")
        return self.repo.get_all()

    def get_by_id(self, user_id: int) -> User:
        logger.debug("Retrieving user by ID", extra={"userId": user_id})
        return self.repo.get_by_id(user_id)

    def get_by_name(self, login_name: str) -> User:
        logger.debug("Retrieving user by login name", extra={"loginName": login_name})
        return self.repo.get_by_login_name(login_name)

    def upsert(self, user: User) -> User:
        """Create the user if it has no ID, update it otherwise.

        Returns the persisted User with ID and timestamps set.

        Raises:
            NotFoundError: user has an ID but no such user exists
            DuplicateError: login name already taken by another user
        """
        if user.id is None:
            logger.info("Creating user", extra={"loginName": user.login_name})
        else:
            logger.info("Updating user", extra={"userId": user.id})
            # must exist before the update
            self.repo.get_by_id(user.id)

        try:
            upserted = self.repo.upsert(user)
        except DuplicateError as e:
            logger.error("Failed to upsert user", extra={"loginName": user.login_name, "error": str(e)})
            raise

        logger.info("User upserted", extra={"userId": upserted.id})
        return upserted

    def delete(self, user_id: int) -> None:
        """Delete a user. Raises NotFoundError if it does not exist."""
        logger.info("Deleting user", extra={"userId": user_id})
        self.repo.delete(user_id)
        logger.info("User deleted", extra={"userId": user_id})
