"""
Roster invitation models.

Pydantic models for account invitations.
"""

from datetime import datetime, timedelta
from typing import Literal

from pydantic import BaseModel, EmailStr, Field

from ..accounts.models import MemberRole
from ..store import Document


class Invite(BaseModel):
    """
    Invite - a time-bounded, email-bound grant of a role on an account.

    The invited address is only ever stored as ``hashed_email``.
    """

    id: str
    hashed_email: str
    owner: str
    account: str
    role: MemberRole
    time: datetime

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "hashed_email": "5d41402abc4b2a76b9719d911017c592...",
                "owner": "Hq3LZr8yWfTtVq2pN1bK",
                "account": "456e7890-e89b-12d3-a456-426614174000",
                "role": "member",
                "time": "2024-01-01T00:00:00Z",
            }
        },
    }

    @classmethod
    def from_document(cls, doc: Document) -> "Invite":
        return cls(id=doc.id, **doc.data)

    def is_expired(self, now: datetime, window: timedelta) -> bool:
        return now - self.time > window


class CreateInviteRequest(BaseModel):
    """Request model for inviting an email address to an account."""

    email: EmailStr = Field(..., description="Email address to invite")
    role: str = Field("member", description="Role to grant on acceptance (member or admin)")


class ResolvedInvite(BaseModel):
    account_id: str
    account_name: str


class InviteResult(BaseModel):
    result: Literal["success"] = "success"


class AcceptInviteResult(BaseModel):
    result: Literal["success"] = "success"
    account_id: str
