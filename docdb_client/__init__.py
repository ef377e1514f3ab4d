"""
DocumentDB Client Library

A Python client library that signs requests with the account master key
and lists, fetches and creates DocumentDB databases and collections.

Example usage:
    from docdb_client import Session

    with Session.from_connection_string(connection_string) as session:
        for database in session.list_databases():
            print(database.id, [c.id for c in database.list_collections()])
"""

from .session import Session, parse_connection_string
from .resources import Database, Collection
from .auth import (
    generate_auth_token,
    build_signature_payload,
    decode_master_key,
    format_timestamp
)
from .exceptions import (
    DocDBClientError,
    ConnectionStringError,
    ConfigurationError,
    KeyDecodeError,
    TransportError,
    RequestError,
    DecodeError
)
from .constants import (
    API_VERSION,
    DEFAULT_CONFIG,
    CONNECTION_STRING_ENV
)

__version__ = "1.0.0"
__all__ = [
    "Session",
    "parse_connection_string",
    "Database",
    "Collection",
    "generate_auth_token",
    "build_signature_payload",
    "decode_master_key",
    "format_timestamp",
    "DocDBClientError",
    "ConnectionStringError",
    "ConfigurationError",
    "KeyDecodeError",
    "TransportError",
    "RequestError",
    "DecodeError",
    "API_VERSION",
    "DEFAULT_CONFIG",
    "CONNECTION_STRING_ENV"
]
