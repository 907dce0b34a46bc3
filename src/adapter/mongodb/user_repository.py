"""MongoDB implementation of UserRepository."""

from datetime import datetime, timezone
from logging import getLogger
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb import COUNTERS_COLLECTION_NAME, USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError, NotFoundError
from domain.model.user import User

logger = getLogger(__name__)


def _now() -> datetime:
    """Current UTC time at BSON date resolution (milliseconds)."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _as_utc(value: datetime | None) -> datetime | None:
    # pymongo returns naive datetimes (UTC) unless the client is tz_aware
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]
        self.counters = db[COUNTERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('login_name', 1)], 'idx_users_login_name', unique=True)
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            login_name=doc['login_name'],
            email_address=doc['email_address'],
            first_name=doc['first_name'],
            last_name=doc['last_name'],
            created_at=_as_utc(doc.get('created_at')),
            updated_at=_as_utc(doc.get('updated_at')),
        )

    def _next_id(self) -> int:
        counter = self.counters.find_one_and_update(
            {'_id': USERS_COLLECTION_NAME},
            {'$inc': {'seq': 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return counter['seq']

    # ── write operations ─────────────────────────────────────

    def upsert(self, user: User) -> User:
        """Insert the user if it has no ID, replace its mutable fields otherwise."""
        try:
            if user.id is None:
                return self._insert(user)
            return self._update(user)
        except DuplicateKeyError:
            logger.warning("User upsert failed: login name already exists", extra={"loginName": user.login_name})
            raise DuplicateError(f"User with login name '{user.login_name}' already exists")
        except PyMongoError as e:
            logger.error("Failed to upsert user", extra={"loginName": user.login_name, "error": str(e)})
            raise

    def _insert(self, user: User) -> User:
        now = _now()
        user_doc = {
            '_id': self._next_id(),
            'login_name': user.login_name,
            'email_address': user.email_address,
            'first_name': user.first_name,
            'last_name': user.last_name,
            'created_at': now,
            'updated_at': now,
        }
        self.collection.insert_one(user_doc)
        logger.info("User created", extra={"userId": user_doc['_id'], "loginName": user.login_name})
        return self._to_domain(user_doc)

    def _update(self, user: User) -> User:
        doc = self.collection.find_one_and_update(
            {'_id': user.id},
            {'$set': {
                'login_name': user.login_name,
                'email_address': user.email_address,
                'first_name': user.first_name,
                'last_name': user.last_name,
                'updated_at': _now(),
            }},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise NotFoundError(f"User with ID {user.id} not found")
        logger.info("User updated", extra={"userId": user.id})
        return self._to_domain(doc)

    def delete(self, user_id: int) -> None:
        try:
            result = self.collection.delete_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise
        if result.deleted_count == 0:
            raise NotFoundError(f"User with ID {user_id} not found")

    def clear(self) -> None:
        result = self.collection.delete_many({})
        logger.warning("Users cleared", extra={"deletedCount": result.deleted_count})

    # ── read operations ──────────────────────────────────────

    def get_all(self) -> list[User]:
        return [self._to_domain(doc) for doc in self.collection.find().sort('_id', 1)]

    def get_by_id(self, user_id: int) -> User:
        doc = self.collection.find_one({'_id': user_id})
        if doc is None:
            raise NotFoundError(f"User with ID {user_id} not found")
        return self._to_domain(doc)

    def get_by_login_name(self, login_name: str) -> User:
        doc = self.collection.find_one({'login_name': login_name})
        if doc is None:
            raise NotFoundError(f"User with login name '{login_name}' not found")
        return self._to_domain(doc)
