"""
Activity logging for Roster.

Appends one activity record per account lifecycle event. Activity writes
happen after the mutation they describe has committed, so a failed write is
reported through the module logger instead of failing the operation.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import uuid4

from ..store import Document, StoreError
from .models import ActivityAction, ActivityEntry

if TYPE_CHECKING:
    from ..client import Roster

logger = logging.getLogger(__name__)

ACTIVITIES = "activities"


class ActivityLogger:
    """
    Manages activity logging operations.

    Example:
        ```python
        await roster.audit.log(
            user_id=caller.user_id,
            action=ActivityAction.ACCOUNT_CREATED,
            account_id=account.id,
            metadata={"name": account.name},
        )

        entries = await roster.audit.list_by_user(caller.user_id)
        ```
    """

    def __init__(self, roster: "Roster") -> None:
        """
        Initialize ActivityLogger.

        Args:
            roster: Main Roster client instance
        """
        self.roster = roster
        self.store = roster.store
        self._enabled = roster.config.enable_activity_log

    def disable(self) -> None:
        """Disable activity logging (useful for bulk operations)."""
        self._enabled = False

    def enable(self) -> None:
        """Enable activity logging."""
        self._enabled = True

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    def _to_entry(self, doc: Document) -> ActivityEntry:
        return ActivityEntry(id=doc.id, **doc.data)

    async def log(
        self,
        user_id: str,
        action: ActivityAction | str,
        account_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Optional[ActivityEntry]:
        """
        Log an activity event.

        Args:
            user_id: User the activity belongs to
            action: The action (ActivityAction or custom string)
            account_id: Account context, if any
            metadata: Additional details; never include raw email addresses

        Returns:
            The stored ActivityEntry, or None when disabled or the write failed
        """
        if not self._enabled:
            return None

        now = self.roster.now()
        entry_data = {
            "user_id": user_id,
            "action": action.value if isinstance(action, ActivityAction) else action,
            "account_id": account_id,
            "metadata": metadata or {},
            "time": now.isoformat(),
        }

        # Time-ordered IDs keep a user's activity sortable by key
        doc_id = f"{int(now.timestamp() * 1000)}-{uuid4().hex[:8]}"

        try:
            doc = await self.store.create(ACTIVITIES, entry_data, doc_id=doc_id)
        except StoreError:
            logger.exception(
                "Failed to record activity %s for user %s", entry_data["action"], user_id
            )
            return None

        return self._to_entry(doc)

    async def list_by_user(self, user_id: str, limit: int = 100) -> List[ActivityEntry]:
        """
        List a user's activity entries, newest first.

        Args:
            user_id: User ID
            limit: Maximum entries to return
        """
        docs = await self.store.find(ACTIVITIES, "user_id", user_id, limit=limit)
        entries = [self._to_entry(doc) for doc in docs]
        entries.sort(key=lambda e: (e.time, e.id), reverse=True)
        return entries

    async def count_by_user(self, user_id: str) -> int:
        """Count all of a user's activity entries."""
        return await self.store.count(ACTIVITIES, "user_id", user_id)
