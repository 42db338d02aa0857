"""
Roster invitations module.

Handles email-bound, time-limited invitations to accounts.
"""

from .hasher import Hasher
from .invites import InvitationManager
from .models import (
    AcceptInviteResult,
    CreateInviteRequest,
    Invite,
    InviteResult,
    ResolvedInvite,
)

__all__ = [
    "Hasher",
    "InvitationManager",
    "Invite",
    "CreateInviteRequest",
    "InviteResult",
    "AcceptInviteResult",
    "ResolvedInvite",
]
