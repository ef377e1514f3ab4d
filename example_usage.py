#!/usr/bin/env python3
"""
Basic usage examples for the DocumentDB client library.

This script demonstrates how to use the client library to make
authenticated requests to a DocumentDB account. Set
DOCDB_CONNECTION_STRING before running it.
"""

import datetime
import logging
import os
import sys

from docdb_client import (
    Session,
    DocDBClientError,
    RequestError,
    generate_auth_token,
    build_signature_payload,
    format_timestamp
)


def main():
    """Run basic usage examples."""

    print("=== DocumentDB Client Basic Usage Examples ===\n")

    # Create session
    print("1. Creating session from DOCDB_CONNECTION_STRING...")
    session = Session.from_env()
    print(f"   Session created for: {session.base_uri}\n")

    try:
        # Example 1: Signing without a request
        print("2. Generating an authorization token...")
        now = datetime.datetime.now(datetime.timezone.utc)
        payload = build_signature_payload("GET", "", "dbs", format_timestamp(now))
        token, timestamp = generate_auth_token("GET", "", "dbs", session.master_key, now=now)
        print(f"   Payload: {payload!r}")
        print(f"   Token: {token[:40]}...")
        print(f"   x-ms-date: {timestamp}")
        print()

        # Example 2: List databases
        print("3. Listing databases...")
        databases = session.list_databases()
        for database in databases:
            print(f"   - {database.id}")
        print()

        if not databases:
            print("   No databases, nothing more to show.")
            return

        # Example 3: Chained collection operations
        database = session.get_database(databases[0].id)
        print(f"4. Listing collections of {database.id}...")
        for collection in database.list_collections():
            fetched = database.get_collection(collection.id)
            print(f"   - {fetched.id} (rid {fetched.properties.get('_rid', 'unknown')})")
        print()

        # Example 4: Error handling demonstration
        print("5. Demonstrating error handling...")
        try:
            session.get_database("no-such-database")
        except RequestError as e:
            print(f"   ✓ Correctly surfaced {e.status_code} for a missing database")
        print()

        print("=== All Examples Completed Successfully! ===")

    except DocDBClientError as e:
        print(f"DocumentDB Client Error: {e}")
        sys.exit(1)
    finally:
        # Clean up
        session.close()


if __name__ == "__main__":
    if not os.environ.get("DOCDB_CONNECTION_STRING"):
        print("DOCDB_CONNECTION_STRING is not set. Export a connection string first:")
        print("> export DOCDB_CONNECTION_STRING='AccountEndpoint=https://<account>.documents.azure.com:443/;AccountKey=<key>;'")
        sys.exit(1)

    if "-v" in sys.argv:
        logging.basicConfig(level=logging.DEBUG)

    main()
