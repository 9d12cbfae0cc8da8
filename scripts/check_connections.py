#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify MongoDB is reachable and GitHub OAuth is configured.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from classroom_api.core.config import get_settings
from classroom_api.db.mongodb import test_mongo_connection, init_mongo_indexes
from classroom_api.services.github_oauth import GitHubOAuthClient


def main():
    settings = get_settings()
    print("=" * 50)
    print("CLASSROOM API - CONNECTION CHECK")
    print("=" * 50)

    # MongoDB
    print("\n[1] Checking MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    if test_mongo_connection():
        print("    ✅ MongoDB: CONNECTED")
        init_mongo_indexes()
        print("    ✅ Indexes: CREATED")
    else:
        print("    ❌ MongoDB: FAILED")

    # GitHub OAuth (only the settings; the flow needs a browser)
    print("\n[2] Checking GitHub OAuth settings...")
    if settings.github_configured:
        print(f"    Callback URL: {settings.github_callback_url}")
        print(f"    Login URL: {GitHubOAuthClient(settings).authorize_url('check')}")
        print("    ✅ GitHub OAuth: CONFIGURED")
    else:
        print("    ⚠️  GitHub OAuth: GITHUB_CLIENT_ID / GITHUB_CLIENT_SECRET not set")

    print(f"\n    Auth required for writes: {settings.auth_enabled}")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
