"""
Main Roster client.

This is the primary interface users interact with.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from .accounts import AccountManager, MembershipManager
from .audit import ActivityLogger
from .auth import AuthorizationGuard, UserManager
from .config import RosterConfig, load_config
from .invitations import Hasher, InvitationManager
from .notifications import NotificationGateway, create_notifier
from .store import DocumentStore, create_store

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Roster:
    """
    Main Roster client for account membership and invitations.

    Example:
        ```python
        from roster import Roster

        # Initialize from environment variables
        roster = await Roster.create()

        # Or with explicit config
        roster = await Roster.create(salt="long-random-secret", invite_expire_hours=48)

        account = await roster.accounts.create(caller, "Acme")
        await roster.invites.create(caller, account.id, "jane@example.com", "member")
        ```
    """

    def __init__(
        self,
        config: RosterConfig,
        store: DocumentStore,
        notifier: Optional[NotificationGateway] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Initialize Roster client.

        Args:
            config: Roster configuration
            store: Document store backend
            notifier: Invite email gateway (built from config when omitted)
            clock: Returns the current UTC time (for tests)

        Note:
            Use Roster.create() instead of direct instantiation.
        """
        self.config = config
        self.store = store
        self.notifier = notifier or create_notifier(config)
        self._clock = clock or utcnow

        self.hasher = Hasher(config.salt)
        self.guard = AuthorizationGuard()

        self.audit = ActivityLogger(self)
        self.users = UserManager(self)
        self.accounts = AccountManager(self)
        self.memberships = MembershipManager(self)
        self.invites = InvitationManager(self)

    def now(self) -> datetime:
        """Current time, timezone-aware UTC."""
        return self._clock()

    @classmethod
    async def create(
        cls,
        notifier: Optional[NotificationGateway] = None,
        **kwargs,
    ) -> "Roster":
        """
        Create and initialize a Roster client.

        Args:
            notifier: Invite email gateway (optional, built from config)
            **kwargs: Configuration overrides (see RosterConfig)

        Returns:
            Initialized Roster client

        Raises:
            ValidationError: If required configuration is missing or invalid
        """
        config = load_config(**kwargs)

        if config.debug:
            logging.getLogger("roster").setLevel(logging.DEBUG)

        store = await create_store(config)
        logger.debug("Roster initialized with %s backend", config.backend)

        return cls(config=config, store=store, notifier=notifier)

    async def close(self) -> None:
        """Close the notifier and the store."""
        await self.notifier.close()
        await self.store.close()

    async def __aenter__(self) -> "Roster":
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
