"""
MongoDB Connection Utility

MongoDB stores every classroom record:
- teachers: staff records (unique email and employeeId)
- students: learner records, each referencing one teacher by ObjectId
- users: GitHub accounts that have logged in (unique githubId)

Uniqueness is enforced by the indexes created in init_mongo_indexes(), so it
holds under concurrent writers.
"""
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.collection import Collection

from classroom_api.core.config import get_settings
from classroom_api.core.log import get_logger

settings = get_settings()
logger = get_logger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the classroom database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def set_mongo_db(db: Database) -> None:
    """Replace the active database (used by tests and scripts)."""
    global _db
    _db = db


def get_collection(name: str) -> Collection:
    """
    Get a specific collection.
    Collections we'll use:
    - teachers
    - students
    - users
    """
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.error("mongodb_connection_failed", error=str(e))
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "teachers": "teachers",
    "students": "students",
    "users": "users"
}


def init_mongo_indexes():
    """
    Create indexes for uniqueness and lookups.
    Call this once during app startup.
    """
    db = get_mongo_db()

    db[COLLECTIONS["teachers"]].create_index("email", unique=True)
    db[COLLECTIONS["teachers"]].create_index("employeeId", unique=True)

    db[COLLECTIONS["students"]].create_index("email", unique=True)
    # Students are looked up by teacher when joining
    db[COLLECTIONS["students"]].create_index("teacher")

    db[COLLECTIONS["users"]].create_index("githubId", unique=True)

    logger.info("mongodb_indexes_created")
