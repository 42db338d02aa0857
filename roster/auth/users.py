"""
User directory for Roster.

Reads user profiles from the users collection. Profiles are owned by the
identity provider; ``create`` exists for seeding and tooling.
"""

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from ..audit.models import ActivityAction
from ..store import Document
from .models import CallerIdentity, UserProfile, normalize_email

if TYPE_CHECKING:
    from ..client import Roster

logger = logging.getLogger(__name__)

USERS = "users"


class UserManager:
    """
    Manages lookups in the users collection.

    Example:
        ```python
        user = await roster.users.get(user_id)
        user = await roster.users.get_by_email("Jane@Example.com")
        ```
    """

    def __init__(self, roster: "Roster") -> None:
        """
        Initialize UserManager.

        Args:
            roster: Main Roster client instance
        """
        self.roster = roster
        self.store = roster.store

    def _to_profile(self, doc: Document) -> UserProfile:
        return UserProfile(id=doc.id, **doc.data)

    async def create(
        self,
        email: str,
        display_name: Optional[str] = None,
        photo_url: Optional[str] = None,
        user_id: Optional[str] = None,
        last_login_time: Optional[datetime] = None,
    ) -> UserProfile:
        """
        Create a user profile.

        Args:
            email: User email address (stored normalized)
            display_name: User's display name
            photo_url: URL to user's avatar image
            user_id: Identity provider's user ID (generated if omitted)
            last_login_time: Last sign-in time

        Returns:
            Created UserProfile
        """
        data = {
            "email": normalize_email(email),
            "display_name": display_name,
            "photo_url": photo_url,
            "last_login_time": last_login_time.isoformat() if last_login_time else None,
        }
        doc = await self.store.create(USERS, data, doc_id=user_id)
        logger.info("Created user profile %s", doc.id)

        await self.roster.audit.log(doc.id, ActivityAction.USER_CREATED)

        return self._to_profile(doc)

    async def get(self, user_id: str) -> Optional[UserProfile]:
        """
        Get a user profile by ID.

        Returns:
            UserProfile instance or None if not found
        """
        doc = await self.store.get(USERS, user_id)
        if doc is None:
            return None
        return self._to_profile(doc)

    async def get_by_email(self, email: str) -> Optional[UserProfile]:
        """
        Get a user profile by email address.

        The address is normalized before lookup, so case and surrounding
        whitespace do not matter.
        """
        docs = await self.store.find(USERS, "email", normalize_email(email), limit=1)
        if not docs:
            return None
        return self._to_profile(docs[0])

    async def identity(self, user_id: str) -> Optional[CallerIdentity]:
        """Build a CallerIdentity from a stored profile (used by the CLI)."""
        user = await self.get(user_id)
        if user is None:
            return None
        return CallerIdentity(
            user_id=user.id,
            email=user.email,
            display_name=user.display_name,
        )
