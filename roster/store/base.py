"""
Document store interface.

Roster treats persistence as a key-addressed document store. Each document
lives in a named collection, carries a JSON-compatible ``data`` dict and a
``version`` that increments on every write. Writes that replace an existing
document are conditional on the version the caller read.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..errors import NotFoundError


class StoreError(Exception):
    """The backing store failed to complete a request."""


class WriteConflict(StoreError):
    """A conditional write found a different version than expected."""

    def __init__(self, collection: str, doc_id: str, expected_version: int) -> None:
        super().__init__(
            f"Version conflict on {collection}/{doc_id} (expected {expected_version})"
        )
        self.collection = collection
        self.doc_id = doc_id
        self.expected_version = expected_version


class Document(BaseModel):
    """A stored document and the version it was read at."""

    id: str
    collection: str
    version: int = 1
    data: Dict[str, Any] = Field(default_factory=dict)


class DocumentStore(ABC):
    """
    Abstract document store.

    Implementations must make ``replace`` an atomic compare-and-set on the
    document version.
    """

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Return the document or None if it does not exist."""

    async def get_required(self, collection: str, doc_id: str) -> Document:
        """
        Existence-checked read.

        Raises:
            NotFoundError: If the document does not exist
        """
        doc = await self.get(collection, doc_id)
        if doc is None:
            raise NotFoundError(f"The document {collection}/{doc_id} does not exist")
        return doc

    @abstractmethod
    async def create(
        self,
        collection: str,
        data: Dict[str, Any],
        doc_id: Optional[str] = None,
    ) -> Document:
        """Insert a new document at version 1, generating an ID when none is given."""

    @abstractmethod
    async def replace(
        self,
        collection: str,
        doc_id: str,
        data: Dict[str, Any],
        expected_version: int,
    ) -> Document:
        """
        Replace a document's data if its version still equals ``expected_version``.

        Raises:
            WriteConflict: If the document changed or disappeared since it was read
        """

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> bool:
        """Delete a document. Returns False if it did not exist."""

    @abstractmethod
    async def find(
        self,
        collection: str,
        field: str,
        value: Any,
        limit: int = 100,
    ) -> List[Document]:
        """Return documents whose top-level ``field`` equals ``value``."""

    @abstractmethod
    async def count(self, collection: str, field: str, value: Any) -> int:
        """Count every document whose top-level ``field`` equals ``value``."""

    async def close(self) -> None:
        """Release backend resources."""
