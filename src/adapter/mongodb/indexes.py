"""MongoDB index management for the user store."""

from logging import getLogger

from pymongo.errors import PyMongoError

logger = getLogger(__name__)

_CONFLICT_MARKERS = ("already exists", "Conflict")


def _find_conflict(collection, keys: list, name: str) -> str | None:
    """Name of an index that clashes with (keys, name), if any.

    An index clashes when it has the requested name but other keys, or the
    requested keys under another name.
    """
    wanted = dict(keys)
    for idx_name, idx_info in collection.index_information().items():
        if idx_name == '_id_':
            continue
        if (idx_name == name) != (dict(idx_info.get('key', [])) == wanted):
            return idx_name
    return None


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, replacing a clashing one. False if the clash cannot be resolved."""
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        if not any(marker in str(e) for marker in _CONFLICT_MARKERS):
            raise

    conflict = _find_conflict(collection, keys, name)
    if conflict is None:
        logger.error("Failed to resolve index conflict", extra={"index": name})
        return False

    logger.warning("Replacing conflicting index", extra={"index": name, "replaced": conflict})
    collection.drop_index(conflict)
    collection.create_index(keys, name=name, **kwargs)
    return True


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.user_repository import MongoUserRepository

    return MongoUserRepository(db).ensure_indexes()
