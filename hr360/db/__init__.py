"""
Database module - relational store (PostgreSQL) and MongoDB connections.
"""
from hr360.db.postgres import get_db_session, init_schema, test_postgres_connection
from hr360.db.mongodb import get_mongo_db, get_collection, test_mongo_connection

__all__ = [
    "get_db_session",
    "init_schema",
    "test_postgres_connection",
    "get_mongo_db",
    "get_collection",
    "test_mongo_connection"
]
