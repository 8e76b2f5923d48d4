#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the database, MongoDB and LLM connections are working.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from hr360.db.postgres import test_postgres_connection
from hr360.db.mongodb import test_mongo_connection
from hr360.services.llm_client import get_llm_client
from hr360.core.config import get_settings
from hr360.core.logging_config import setup_base_logging


def main():
    setup_base_logging()
    settings = get_settings()
    print("=" * 50)
    print("HR360 - CONNECTION CHECK")
    print("=" * 50)

    # Relational store
    print("\n[1] Checking database...")
    if settings.database_url:
        print(f"    URL: {settings.database_url.split('@')[-1]}")
    else:
        print(f"    URL: postgresql://{settings.postgres_user}:****@{settings.postgres_host}:{settings.postgres_port}/{settings.postgres_db}")
    if not settings.database_configured:
        print("    ⚠️  No credentials configured (analytics will serve demo data)")
    if test_postgres_connection():
        print("    ✅ Database: CONNECTED")
    else:
        print("    ❌ Database: FAILED")

    # MongoDB
    print("\n[2] Checking MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    if test_mongo_connection():
        print("    ✅ MongoDB: CONNECTED")
    else:
        print("    ❌ MongoDB: FAILED")

    # LLM (only if API key is set)
    print("\n[3] Checking LLM API...")
    if settings.llm_api_key:
        print(f"    Base URL: {settings.llm_base_url}")
        print(f"    Default model: {settings.llm_model}")
        for flow, model in settings.flow_models.items():
            print(f"    {flow}: {model}")
        if get_llm_client().test_connection():
            print("    ✅ LLM: CONNECTED")
        else:
            print("    ❌ LLM: FAILED")
    else:
        print("    ⚠️  LLM: API key not configured (AI flows will fail)")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
