"""
Roster document storage.

Abstract document store plus in-memory and Supabase backends.
"""

from ..config import RosterConfig
from .base import Document, DocumentStore, StoreError, WriteConflict
from .memory import InMemoryDocumentStore


async def create_store(config: RosterConfig) -> DocumentStore:
    """Build the document store selected by ``config.backend``."""
    if config.backend == "supabase":
        from ..utils.supabase import RosterSupabaseClient
        from .supabase import SupabaseDocumentStore

        client = await RosterSupabaseClient.create(config)
        return SupabaseDocumentStore(client, table=config.documents_table)

    return InMemoryDocumentStore()


__all__ = [
    "Document",
    "DocumentStore",
    "InMemoryDocumentStore",
    "StoreError",
    "WriteConflict",
    "create_store",
]
