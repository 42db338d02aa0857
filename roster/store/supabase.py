"""
Supabase-backed document store.

All collections share one PostgREST table:

    create table roster_documents (
        collection text not null,
        id text not null,
        data jsonb not null default '{}'::jsonb,
        version integer not null default 1,
        primary key (collection, id)
    );

Conditional replaces filter on ``version`` so the update only matches the
row the caller read; an empty result means another writer got there first.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import uuid4

from postgrest.exceptions import APIError

from ..utils.supabase import RosterSupabaseClient
from .base import Document, DocumentStore, StoreError, WriteConflict

logger = logging.getLogger(__name__)

# PostgreSQL unique_violation
UNIQUE_VIOLATION = "23505"


class SupabaseDocumentStore(DocumentStore):
    """DocumentStore over a single Supabase table."""

    def __init__(self, client: RosterSupabaseClient, table: str = "roster_documents") -> None:
        self.client = client
        self.table = table

    def _to_document(self, row: Dict[str, Any]) -> Document:
        return Document(
            id=row["id"],
            collection=row["collection"],
            version=row.get("version", 1),
            data=row.get("data") or {},
        )

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        try:
            result = await self.client.table(self.table).select("*").eq(
                "collection", collection
            ).eq("id", doc_id).execute()
        except APIError as e:
            raise StoreError(f"Failed to read {collection}/{doc_id}: {e.message}") from e

        if not result.data:
            return None

        return self._to_document(result.data[0])

    async def create(
        self,
        collection: str,
        data: Dict[str, Any],
        doc_id: Optional[str] = None,
    ) -> Document:
        doc_id = doc_id or str(uuid4())
        row = {
            "collection": collection,
            "id": doc_id,
            "data": data,
            "version": 1,
        }

        try:
            result = await self.client.table(self.table).insert(row).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise WriteConflict(collection, doc_id, 0) from e
            raise StoreError(f"Failed to create {collection}/{doc_id}: {e.message}") from e

        if not result.data:
            raise StoreError(f"Failed to create {collection}/{doc_id}")

        return self._to_document(result.data[0])

    async def replace(
        self,
        collection: str,
        doc_id: str,
        data: Dict[str, Any],
        expected_version: int,
    ) -> Document:
        try:
            result = await self.client.table(self.table).update({
                "data": data,
                "version": expected_version + 1,
            }).eq("collection", collection).eq("id", doc_id).eq(
                "version", expected_version
            ).execute()
        except APIError as e:
            raise StoreError(f"Failed to update {collection}/{doc_id}: {e.message}") from e

        if not result.data:
            logger.debug("Conditional update matched no row for %s/%s", collection, doc_id)
            raise WriteConflict(collection, doc_id, expected_version)

        return self._to_document(result.data[0])

    async def delete(self, collection: str, doc_id: str) -> bool:
        try:
            result = await self.client.table(self.table).delete().eq(
                "collection", collection
            ).eq("id", doc_id).execute()
        except APIError as e:
            raise StoreError(f"Failed to delete {collection}/{doc_id}: {e.message}") from e

        return bool(result.data)

    async def find(
        self,
        collection: str,
        field: str,
        value: Any,
        limit: int = 100,
    ) -> List[Document]:
        try:
            result = await self.client.table(self.table).select("*").eq(
                "collection", collection
            ).eq(f"data->>{field}", str(value)).limit(limit).execute()
        except APIError as e:
            raise StoreError(f"Failed to query {collection}: {e.message}") from e

        return [self._to_document(row) for row in result.data or []]

    async def count(self, collection: str, field: str, value: Any) -> int:
        try:
            result = await self.client.table(self.table).select(
                "id", count="exact"
            ).eq("collection", collection).eq(f"data->>{field}", str(value)).execute()
        except APIError as e:
            raise StoreError(f"Failed to count {collection}: {e.message}") from e

        return result.count or 0

    async def close(self) -> None:
        await self.client.close()
