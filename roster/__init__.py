"""
Roster - account membership and email-bound invitations.

Example:
    ```python
    from roster import Roster, CallerIdentity

    roster = await Roster.create()
    owner = CallerIdentity(user_id="u1", email="owner@example.com", display_name="Owner")

    # Accounts: the creator is the first member and admin
    account = await roster.accounts.create(owner, "Acme")

    # Direct roster edits (admins only)
    await roster.memberships.add_by_email(owner, account.id, "jane@example.com", "member")
    await roster.memberships.change_role(account.id, owner.user_id, jane_id, "admin")
    members = await roster.memberships.list(account.id, owner.user_id)

    # Invitations bound to a digest of the invited email
    invite = await roster.invites.create(owner, account.id, "new@example.com", "member")
    await roster.invites.accept(invite.id, new_user)
    ```
"""

from .accounts import (
    Account,
    AccountManager,
    MemberRecord,
    MemberRole,
    MembershipManager,
    RoleChange,
)
from .audit import ActivityAction, ActivityEntry, ActivityLogger
from .auth import AuthorizationGuard, CallerIdentity, UserProfile
from .client import Roster
from .config import RosterConfig, load_config
from .errors import (
    AlreadyMemberError,
    ErrorKind,
    InternalError,
    InvalidRoleError,
    InviteExpiredError,
    InviteMismatchError,
    NotFoundError,
    PermissionDeniedError,
    RosterError,
)
from .invitations import Hasher, InvitationManager, Invite
from .notifications import NotificationGateway

__version__ = "0.1.0"

__all__ = [
    # Main client
    "Roster",
    "RosterConfig",
    "load_config",
    # Accounts
    "Account",
    "AccountManager",
    "MembershipManager",
    "MemberRecord",
    "MemberRole",
    "RoleChange",
    # Auth
    "AuthorizationGuard",
    "CallerIdentity",
    "UserProfile",
    # Invitations
    "Hasher",
    "InvitationManager",
    "Invite",
    "NotificationGateway",
    # Activity logging
    "ActivityLogger",
    "ActivityEntry",
    "ActivityAction",
    # Errors
    "ErrorKind",
    "RosterError",
    "NotFoundError",
    "PermissionDeniedError",
    "AlreadyMemberError",
    "InvalidRoleError",
    "InviteMismatchError",
    "InviteExpiredError",
    "InternalError",
]
