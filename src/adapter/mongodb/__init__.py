from adapter.mongodb.connection import (
    COUNTERS_COLLECTION_NAME,
    DATABASE_NAME,
    USERS_COLLECTION_NAME,
)
