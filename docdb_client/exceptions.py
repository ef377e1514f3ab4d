"""
Custom exceptions for the DocumentDB client library.
"""


class DocDBClientError(Exception):
    """Base exception for DocumentDB client errors."""
    pass


class ConnectionStringError(DocDBClientError):
    """Raised when a connection string cannot be parsed."""
    pass


class ConfigurationError(DocDBClientError):
    """Raised when client configuration is invalid."""
    pass


class KeyDecodeError(DocDBClientError):
    """Raised when the master key is not valid base64."""
    pass


class TransportError(DocDBClientError):
    """Raised when the HTTP call itself fails (network, DNS, TLS)."""
    pass


class DecodeError(DocDBClientError):
    """Raised when a response body is not the expected JSON shape."""
    pass


class RequestError(DocDBClientError):
    """
    Raised when the service answers with a status code >= 400.

    The raw response body is kept as-is; the service returns its own JSON
    error document and no attempt is made to parse it.
    """

    def __init__(self, operation: str, verb: str, resource: str, status_code: int, body: str):
        self.operation = operation
        self.verb = verb
        self.resource = resource
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"Request to {operation} failed ({verb} {resource}, status {status_code}), "
            f"json returned was: {body}"
        )
