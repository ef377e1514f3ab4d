"""
Database and collection handles.

Both are immutable values. A handle reaches the account credentials through
its parent: a collection through its database, a database through its
session.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List

from .constants import (
    RESOURCE_DATABASES,
    RESOURCE_COLLECTIONS,
    COLLECTIONS_FIELD,
)
from .exceptions import DecodeError

if TYPE_CHECKING:
    from .session import Session


def decode_entity(body: Dict[str, Any], operation: str) -> Dict[str, Any]:
    """Check that a decoded body is a single entity carrying an ``id``."""
    if not isinstance(body, dict) or not isinstance(body.get("id"), str):
        raise DecodeError(f"Response to {operation} has no entity id")
    return body


def decode_entity_list(body: Dict[str, Any], wrapper: str, operation: str) -> List[Dict[str, Any]]:
    """Unwrap a list response such as ``{"Databases": [...]}``."""
    entities = body.get(wrapper)
    if not isinstance(entities, list):
        raise DecodeError(f"Response to {operation} has no {wrapper!r} list")
    return [decode_entity(entity, operation) for entity in entities]


@dataclass(frozen=True)
class Database:
    """A database in a DocumentDB account."""

    id: str
    session: "Session" = field(repr=False)
    properties: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def resource_id(self) -> str:
        return f"{RESOURCE_DATABASES}/{self.id}"

    def collection(self, collection_id: str) -> "Collection":
        """Return a handle to a collection without fetching it."""
        return Collection(collection_id, self)

    def list_collections(self) -> List["Collection"]:
        """List the collections of this database."""
        body = self.session.request(
            "list collections",
            "GET",
            f"{self.resource_id}/{RESOURCE_COLLECTIONS}",
            self.resource_id,
            RESOURCE_COLLECTIONS,
        )
        return [
            Collection(entity["id"], self, entity)
            for entity in decode_entity_list(body, COLLECTIONS_FIELD, "list collections")
        ]

    def get_collection(self, collection_id: str) -> "Collection":
        """Fetch a single collection of this database by id."""
        operation = f"get collection {collection_id}"
        resource_id = f"{self.resource_id}/{RESOURCE_COLLECTIONS}/{collection_id}"
        body = self.session.request(operation, "GET", resource_id, resource_id, RESOURCE_COLLECTIONS)
        entity = decode_entity(body, operation)
        return Collection(entity["id"], self, entity)

    def create_collection(self, collection_id: str) -> "Collection":
        """
        Create a collection in this database.

        The signature covers the parent database link, not the new
        collection's link, since the collection does not exist yet.

        Args:
            collection_id: Id of the collection to create

        Returns:
            The created collection as returned by the service
        """
        operation = f"create collection {collection_id}"
        body = self.session.request(
            operation,
            "POST",
            f"{self.resource_id}/{RESOURCE_COLLECTIONS}",
            self.resource_id,
            RESOURCE_COLLECTIONS,
            json_data={"id": collection_id},
        )
        entity = decode_entity(body, operation)
        return Collection(entity["id"], self, entity)


@dataclass(frozen=True)
class Collection:
    """A document collection inside a database."""

    id: str
    database: Database = field(repr=False)
    properties: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def session(self) -> "Session":
        return self.database.session

    @property
    def resource_id(self) -> str:
        return f"{self.database.resource_id}/{RESOURCE_COLLECTIONS}/{self.id}"
