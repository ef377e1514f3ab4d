"""
Constants for the DocumentDB client library.
Header names and resource types follow the DocumentDB REST API.
"""

# HTTP Headers
HEADER_AUTHORIZATION = "Authorization"
HEADER_MS_DATE = "x-ms-date"
HEADER_MS_VERSION = "x-ms-version"
HEADER_CONTENT_TYPE = "Content-Type"

# REST API version sent with every request
API_VERSION = "2015-12-16"

# Content type for write requests
CONTENT_TYPE_QUERY_JSON = "application/query+json"

# Master key token parts (type=master&ver=1.0&sig=...)
TOKEN_TYPE = "master"
TOKEN_VERSION = "1.0"

# Resource types
RESOURCE_DATABASES = "dbs"
RESOURCE_COLLECTIONS = "colls"

# Response list wrappers
DATABASES_FIELD = "Databases"
COLLECTIONS_FIELD = "DocumentCollections"

# Connection string markers
ENDPOINT_PREFIX = "AccountEndpoint="
KEY_SEPARATOR = "AccountKey="

# Environment variable read by Session.from_env()
CONNECTION_STRING_ENV = "DOCDB_CONNECTION_STRING"

# Default configuration values
DEFAULT_CONFIG = {
    'timeout': 30,              # HTTP timeout in seconds
    'api_version': API_VERSION,
}
