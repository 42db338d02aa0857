"""
In-process document store.

Used for development, examples and the test suite. Every
operation yields to the event loop first so concurrent read-modify-write
cycles interleave the way they would against a remote store.
"""

import asyncio
import copy
from typing import Any, Dict, List, Optional
from uuid import uuid4

from .base import Document, DocumentStore, WriteConflict


class InMemoryDocumentStore(DocumentStore):
    """
    Dict-backed DocumentStore with versioned compare-and-set.

    Example:
        ```python
        store = InMemoryDocumentStore()
        doc = await store.create("accounts", {"name": "Acme"})
        await store.replace("accounts", doc.id, {"name": "Acme Inc"}, doc.version)
        ```
    """

    def __init__(self) -> None:
        self._collections: Dict[str, Dict[str, Document]] = {}
        self._lock = asyncio.Lock()

    def _collection(self, name: str) -> Dict[str, Document]:
        return self._collections.setdefault(name, {})

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        await asyncio.sleep(0)
        doc = self._collection(collection).get(doc_id)
        return doc.model_copy(deep=True) if doc else None

    async def create(
        self,
        collection: str,
        data: Dict[str, Any],
        doc_id: Optional[str] = None,
    ) -> Document:
        await asyncio.sleep(0)
        async with self._lock:
            docs = self._collection(collection)
            doc_id = doc_id or str(uuid4())
            if doc_id in docs:
                raise WriteConflict(collection, doc_id, 0)
            doc = Document(
                id=doc_id,
                collection=collection,
                version=1,
                data=copy.deepcopy(data),
            )
            docs[doc_id] = doc
            return doc.model_copy(deep=True)

    async def replace(
        self,
        collection: str,
        doc_id: str,
        data: Dict[str, Any],
        expected_version: int,
    ) -> Document:
        await asyncio.sleep(0)
        async with self._lock:
            docs = self._collection(collection)
            current = docs.get(doc_id)
            if current is None or current.version != expected_version:
                raise WriteConflict(collection, doc_id, expected_version)
            doc = Document(
                id=doc_id,
                collection=collection,
                version=current.version + 1,
                data=copy.deepcopy(data),
            )
            docs[doc_id] = doc
            return doc.model_copy(deep=True)

    async def delete(self, collection: str, doc_id: str) -> bool:
        await asyncio.sleep(0)
        async with self._lock:
            return self._collection(collection).pop(doc_id, None) is not None

    async def find(
        self,
        collection: str,
        field: str,
        value: Any,
        limit: int = 100,
    ) -> List[Document]:
        await asyncio.sleep(0)
        matches = [
            doc.model_copy(deep=True)
            for doc in self._collection(collection).values()
            if doc.data.get(field) == value
        ]
        return matches[:limit]

    async def count(self, collection: str, field: str, value: Any) -> int:
        await asyncio.sleep(0)
        return sum(
            1 for doc in self._collection(collection).values() if doc.data.get(field) == value
        )
