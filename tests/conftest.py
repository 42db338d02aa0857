"""
Pytest configuration and fixtures for Roster tests.

Provides a Roster wired to the in-memory store, a controllable clock,
a mock notification gateway and a mock Supabase client.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, Mock

import pytest

from roster.auth.models import CallerIdentity
from roster.client import Roster
from roster.config import RosterConfig
from roster.notifications import NotificationGateway
from roster.store import InMemoryDocumentStore
from roster.utils.supabase import RosterSupabaseClient

TEST_SALT = "test-salt-0123456789"


class FakeClock:
    """Settable UTC clock."""

    def __init__(self, now: datetime) -> None:
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


@pytest.fixture
def roster_config():
    """Create a test RosterConfig."""
    return RosterConfig(
        salt=TEST_SALT,
        invite_expire_hours=72,
        invite_url="https://app.example.com/invite",
        site_name="Example",
    )


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def notifier():
    """Mock invite email gateway."""
    return AsyncMock(spec=NotificationGateway)


@pytest.fixture
def roster(roster_config, store, notifier, clock):
    """Create a test Roster instance."""
    return Roster(config=roster_config, store=store, notifier=notifier, clock=clock)


async def create_user(roster, user_id, email, display_name=None):
    """Create a profile and return the matching caller identity."""
    await roster.users.create(email, display_name=display_name, user_id=user_id)
    return CallerIdentity(user_id=user_id, email=email, display_name=display_name)


async def seed(roster):
    """
    Seed an account owned by ``owner`` with ``jane`` as member.

    Returns:
        (account, {"owner": ..., "jane": ..., "bob": ...}) callers; bob has no access
    """
    owner = await create_user(roster, "owner", "owner@example.com", "Olivia Owner")
    jane = await create_user(roster, "jane", "jane@example.com", "Jane Doe")
    bob = await create_user(roster, "bob", "bob@example.com", "Bob Builder")

    account = await roster.accounts.create(owner, "Acme")
    await roster.memberships.add(account.id, jane.user_id)
    return account, {"owner": owner, "jane": jane, "bob": bob}


@pytest.fixture
async def seeded(roster):
    """An account owned by ``owner`` with ``jane`` as a plain member."""
    return await seed(roster)


@pytest.fixture
def seeded_sync(roster):
    """Same as ``seeded`` for synchronous tests (HTTP and CLI)."""
    return asyncio.run(seed(roster))


@pytest.fixture
def mock_supabase_client():
    """Create a mock Supabase client."""
    client = AsyncMock()

    # Store query builders by table name so we can configure them
    query_builders = {}

    def table_mock(table_name: str):
        if table_name not in query_builders:
            query_builder = Mock()
            # Make all methods return self for chaining
            query_builder.select = Mock(return_value=query_builder)
            query_builder.insert = Mock(return_value=query_builder)
            query_builder.update = Mock(return_value=query_builder)
            query_builder.delete = Mock(return_value=query_builder)
            query_builder.eq = Mock(return_value=query_builder)
            query_builder.limit = Mock(return_value=query_builder)
            # Default execute returns empty result
            query_builder.execute = AsyncMock(return_value=Mock(data=[]))
            query_builders[table_name] = query_builder
        return query_builders[table_name]

    client.table = Mock(side_effect=table_mock)
    client._query_builders = query_builders  # Expose for test configuration

    return client


@pytest.fixture
def mock_roster_supabase_client(mock_supabase_client):
    """Create a mock RosterSupabaseClient."""
    config = RosterConfig(
        backend="supabase",
        supabase_url="https://test.supabase.co",
        supabase_key="test-service-key-12345678901234567890",
        salt=TEST_SALT,
    )
    return RosterSupabaseClient(config=config, client=mock_supabase_client)


def setup_table_mock(client, table_name, execute_return_value):
    """
    Set up a table mock with a specific execute return value.

    Args:
        client: RosterSupabaseClient wrapping the mock client
        table_name: Name of the table
        execute_return_value: Mock result (or exception) for execute()
    """
    query_builder = client._client.table(table_name)
    if isinstance(execute_return_value, Exception):
        query_builder.execute = AsyncMock(side_effect=execute_return_value)
    else:
        query_builder.execute = AsyncMock(return_value=execute_return_value)
    return query_builder
