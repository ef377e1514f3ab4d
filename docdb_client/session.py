"""
DocumentDB session: connection string handling and signed HTTP requests.

A session owns nothing but a reference to an HTTP client and the account
credentials. Databases and collections obtained from it keep a reference
back to the session, so chained calls authenticate with the same key.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

import requests

from .auth import generate_auth_token
from .constants import (
    HEADER_AUTHORIZATION,
    HEADER_MS_DATE,
    HEADER_MS_VERSION,
    HEADER_CONTENT_TYPE,
    CONTENT_TYPE_QUERY_JSON,
    RESOURCE_DATABASES,
    DATABASES_FIELD,
    ENDPOINT_PREFIX,
    KEY_SEPARATOR,
    CONNECTION_STRING_ENV,
    DEFAULT_CONFIG,
)
from .exceptions import (
    ConnectionStringError,
    ConfigurationError,
    TransportError,
    RequestError,
    DecodeError,
)
from .resources import Database, decode_entity, decode_entity_list

logger = logging.getLogger(__name__)


def parse_connection_string(connection_string: str) -> Tuple[str, str]:
    """
    Split a connection string into endpoint URI and master key.

    Accepts ``AccountEndpoint=<uri>;AccountKey=<key>;``. The endpoint is
    trimmed of ``/`` and ``;`` and the key of ``;``.

    Returns:
        Tuple of (base_uri, master_key)

    Raises:
        ConnectionStringError: If the ``AccountKey=`` separator is missing
            or either part is empty
    """
    parts = connection_string.split(KEY_SEPARATOR)
    if len(parts) != 2:
        raise ConnectionStringError(
            f"connection string must contain exactly one {KEY_SEPARATOR!r} separator"
        )

    endpoint, key = parts
    if endpoint.startswith(ENDPOINT_PREFIX):
        endpoint = endpoint[len(ENDPOINT_PREFIX):]
    uri = endpoint.strip("/;")
    key = key.strip(";")

    if not uri:
        raise ConnectionStringError("connection string has an empty AccountEndpoint")
    if not key:
        raise ConnectionStringError("connection string has an empty AccountKey")
    return uri, key


class Session:
    """
    Authenticated session against one DocumentDB account.

    The HTTP client may be shared between sessions. A client passed in by the
    caller is only referenced; one created here is closed by :meth:`close`.
    """

    def __init__(self, base_uri: str, master_key: str, http: Optional[requests.Session] = None, **config):
        """
        Initialize a session.

        Args:
            base_uri: Account endpoint, e.g. ``https://acct.documents.azure.com:443``
            master_key: Base64-encoded account master key
            http: Shared HTTP client (a new ``requests.Session`` if omitted)
            **config: Configuration options (timeout, api_version)
        """
        self._base_uri = base_uri.rstrip('/')
        self._master_key = master_key

        # Merge default config with user overrides
        self._config = {**DEFAULT_CONFIG, **config}
        self._validate_config()

        self._owns_http = http is None
        self._http = requests.Session() if http is None else http

    @classmethod
    def from_connection_string(cls, connection_string: str, http: Optional[requests.Session] = None, **config) -> "Session":
        """Create a session from an ``AccountEndpoint=...;AccountKey=...;`` string."""
        uri, key = parse_connection_string(connection_string)
        return cls(uri, key, http=http, **config)

    @classmethod
    def from_env(cls, var: str = CONNECTION_STRING_ENV, http: Optional[requests.Session] = None, **config) -> "Session":
        """
        Create a session from a connection string held in an environment variable.

        Raises:
            ConfigurationError: If the variable is unset or empty
        """
        connection_string = os.environ.get(var)
        if not connection_string:
            raise ConfigurationError(f"environment variable {var} is not set")
        return cls.from_connection_string(connection_string, http=http, **config)

    def _validate_config(self):
        """Validate session configuration."""
        if not self._base_uri:
            raise ConfigurationError("base_uri cannot be empty")

        if not self._master_key:
            raise ConfigurationError("master_key cannot be empty")

        if self._config['timeout'] is not None and self._config['timeout'] <= 0:
            raise ConfigurationError("timeout must be positive")

        if not self._config['api_version']:
            raise ConfigurationError("api_version cannot be empty")

    @property
    def base_uri(self) -> str:
        return self._base_uri

    @property
    def master_key(self) -> str:
        return self._master_key

    @property
    def http(self) -> requests.Session:
        return self._http

    @property
    def config(self) -> Dict[str, Any]:
        return dict(self._config)

    def __repr__(self):
        return f"Session(base_uri={self._base_uri!r})"

    def _signed_headers(self, verb: str, resource_id: str, resource_type: str) -> Dict[str, str]:
        token, timestamp = generate_auth_token(verb, resource_id, resource_type, self._master_key)
        # x-ms-date must be the exact string that was signed
        return {
            HEADER_AUTHORIZATION: token,
            HEADER_MS_DATE: timestamp,
            HEADER_MS_VERSION: self._config['api_version'],
        }

    def request(
        self,
        operation: str,
        verb: str,
        path: str,
        resource_id: str,
        resource_type: str,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Make a signed request and decode its JSON body.

        Args:
            operation: Human readable name used in error messages
            verb: HTTP method
            path: URL path relative to the account endpoint, e.g. ``dbs/mydb``
            resource_id: Resource link covered by the signature
            resource_type: Resource type covered by the signature
            json_data: JSON body to send (switches Content-Type to query+json)

        Returns:
            Decoded JSON object

        Raises:
            KeyDecodeError: If the master key is not valid base64
            TransportError: If the HTTP call fails
            RequestError: If the service answers with status >= 400
            DecodeError: If the body is not a JSON object
        """
        headers = self._signed_headers(verb, resource_id, resource_type)

        kwargs = {}
        if json_data is not None:
            headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_QUERY_JSON
            kwargs['data'] = json.dumps(json_data, separators=(',', ':')).encode('utf-8')

        url = f"{self._base_uri}/{path.lstrip('/')}"
        logger.debug("%s %s (%s)", verb, url, operation)

        try:
            response = self._http.request(
                verb, url, headers=headers, timeout=self._config['timeout'], **kwargs
            )
        except requests.RequestException as e:
            raise TransportError(f"HTTP request to {operation} failed: {e}") from e

        if response.status_code >= 400:
            logger.warning("%s %s returned status %s", verb, path, response.status_code)
            raise RequestError(operation, verb, path, response.status_code, response.text)

        try:
            body = response.json()
        except ValueError as e:
            raise DecodeError(f"Response to {operation} is not valid JSON: {e}") from e
        if not isinstance(body, dict):
            raise DecodeError(f"Response to {operation} is not a JSON object")
        return body

    def database(self, database_id: str) -> Database:
        """Return a handle to a database without fetching it."""
        return Database(database_id, self)

    def list_databases(self) -> List[Database]:
        """
        List the databases of the account.

        Returns:
            Databases in the order the service returned them
        """
        body = self.request(
            "list databases", "GET", RESOURCE_DATABASES, "", RESOURCE_DATABASES
        )
        return [
            Database(entity["id"], self, entity)
            for entity in decode_entity_list(body, DATABASES_FIELD, "list databases")
        ]

    def get_database(self, database_id: str) -> Database:
        """Fetch a single database by id."""
        operation = f"get database {database_id}"
        resource_id = f"{RESOURCE_DATABASES}/{database_id}"
        body = self.request(operation, "GET", resource_id, resource_id, RESOURCE_DATABASES)
        entity = decode_entity(body, operation)
        return Database(entity["id"], self, entity)

    def close(self):
        """Close the HTTP client if this session created it."""
        if self._owns_http and self._http:
            self._http.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
