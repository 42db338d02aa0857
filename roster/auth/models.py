"""
Roster auth models.

Pydantic models for user profiles and authenticated callers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


def normalize_email(email: str) -> str:
    """Lower-case and trim an email address for lookups and digests."""
    return (email or "").strip().lower()


class UserProfile(BaseModel):
    """
    User profile - represents a document in the users collection.

    Profiles are written by the identity provider's sign-up flow. Roster
    only reads them to resolve emails and render member lists.
    """

    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    last_login_time: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "example": {
                "id": "Hq3LZr8yWfTtVq2pN1bK",
                "email": "user@example.com",
                "display_name": "Jane Doe",
                "photo_url": "https://example.com/jane.png",
                "last_login_time": "2024-01-01T00:00:00Z",
            }
        },
    }


class CallerIdentity(BaseModel):
    """
    The authenticated caller of an operation.

    Supplied out-of-band by the identity provider (a verified token in the
    HTTP integration, the --as option in the CLI). ``email`` is the caller's
    verified address and is used for invite binding.
    """

    user_id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
