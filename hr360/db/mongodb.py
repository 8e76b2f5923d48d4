"""
MongoDB Connection Utility

MongoDB stores:
- AI flow outputs (one document per successful run)
- Raw resume uploads (before AI processing)
- Assessment sessions (generated tests with their answer keys)

The relational store stays the source of truth for applicant records;
these collections hold the schema-flexible documents around them.
"""
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from hr360.core.config import get_settings
from hr360.core.logging_config import get_logger

settings = get_settings()
logger = get_logger("hr360.db")

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri, serverSelectionTimeoutMS=5000)
    return _client


def get_mongo_db() -> Database:
    """Get the hr360_docs database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """
    Get a specific collection.
    Collections we use:
    - flow_runs: AI flow inputs/outputs
    - raw_resumes: Uploaded resume files (as text or data URI)
    - assessment_sessions: Generated aptitude/typing tests
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
    except PyMongoError as e:
        logger.error(f"MongoDB connection failed: {e}")
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "flow_runs": "flow_runs",
    "raw_resumes": "raw_resumes",
    "assessment_sessions": "assessment_sessions",
}


def init_mongo_indexes():
    """
    Create indexes for better query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()

    # Flow history is listed newest-first per flow
    db[COLLECTIONS["flow_runs"]].create_index([("flow", 1), ("created_at", -1)])

    db[COLLECTIONS["raw_resumes"]].create_index("applicant_id")

    db[COLLECTIONS["assessment_sessions"]].create_index("session_id", unique=True)
    db[COLLECTIONS["assessment_sessions"]].create_index("applicant_id")

    logger.info("MongoDB indexes created successfully")
