"""
Roster activity log models.

Pydantic models for per-user activity records.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ActivityAction(str, Enum):
    """Account lifecycle events recorded in the activity log."""

    # User actions
    USER_CREATED = "user.created"

    # Account actions
    ACCOUNT_CREATED = "account.created"

    # Membership actions
    MEMBER_ADDED = "member.added"
    MEMBER_ROLE_CHANGED = "member.role_changed"
    MEMBER_REMOVED = "member.removed"

    # Invitation actions
    INVITE_SENT = "invite.sent"
    INVITE_ACCEPTED = "invite.accepted"
    INVITE_REVOKED = "invite.revoked"


class ActivityEntry(BaseModel):
    """
    Activity entry - one event performed by (or on behalf of) a user.

    Stored in the activities collection.
    """

    id: str
    user_id: str
    action: str
    account_id: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    time: datetime

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user_id": "Hq3LZr8yWfTtVq2pN1bK",
                "action": "account.created",
                "account_id": "456e7890-e89b-12d3-a456-426614174000",
                "metadata": {"name": "Acme"},
                "time": "2024-01-01T00:00:00Z",
            }
        },
    }
