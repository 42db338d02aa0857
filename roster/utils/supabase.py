"""
Supabase client wrapper for Roster.

Provides a thin wrapper around the Supabase AsyncClient with Roster-specific
configuration. Only the PostgREST table API is used; authentication stays
with the application's identity provider.
"""

from supabase import AsyncClient, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from ..config import RosterConfig


class RosterSupabaseClient:
    """
    Wrapper around Supabase AsyncClient configured with the service role key.

    Example:
        ```python
        config = RosterConfig(backend="supabase", ...)
        client = await RosterSupabaseClient.create(config)

        result = await client.table("roster_documents").select("*").execute()
        ```
    """

    def __init__(self, config: RosterConfig, client: AsyncClient) -> None:
        """
        Initialize the Roster Supabase client.

        Note:
            Use RosterSupabaseClient.create() instead of direct instantiation.
        """
        self.config = config
        self._client = client

    @classmethod
    async def create(cls, config: RosterConfig) -> "RosterSupabaseClient":
        """
        Create and initialize a RosterSupabaseClient.

        Args:
            config: Roster configuration with Supabase credentials

        Returns:
            Initialized RosterSupabaseClient
        """
        options = AsyncClientOptions(
            schema=config.db_schema,
            headers={
                "apikey": config.supabase_key,
                "Authorization": f"Bearer {config.supabase_key}",
            },
        )

        client = await acreate_client(
            config.supabase_url,
            config.supabase_key,
            options=options,
        )

        return cls(config=config, client=client)

    def table(self, table_name: str):
        """
        Create a query builder for a specific table.

        Example:
            ```python
            result = await client.table("roster_documents").select("*").eq(
                "collection", "accounts"
            ).execute()
            ```
        """
        return self._client.table(table_name)

    async def close(self) -> None:
        """
        Close the client and cleanup resources.

        The Supabase client holds no resources that need explicit release;
        this keeps the store lifecycle uniform across backends.
        """
        pass
