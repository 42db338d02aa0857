"""
Roster error types.

Every failure raised by a Roster operation is a RosterError carrying a
stable ErrorKind and a human-readable message.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Stable error kinds surfaced to callers."""

    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    ALREADY_MEMBER = "already_member"
    INVALID_ROLE = "invalid_role"
    INVITE_MISMATCH = "invite_mismatch"
    INVITE_EXPIRED = "invite_expired"
    INTERNAL = "internal"


class RosterError(Exception):
    """
    Base class for all Roster operation failures.

    Example:
        ```python
        try:
            await roster.memberships.change_role(account_id, caller_id, user_id, "admin")
        except RosterError as e:
            print(e.kind.value, e.message)
        ```
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Serializable form used by the HTTP and CLI boundaries."""
        return {"kind": self.kind.value, "message": self.message}


class NotFoundError(RosterError):
    """Referenced account, user or invite does not exist."""

    kind = ErrorKind.NOT_FOUND


class PermissionDeniedError(RosterError):
    """Caller lacks admin or member standing for the action."""

    kind = ErrorKind.PERMISSION_DENIED


class AlreadyMemberError(RosterError):
    kind = ErrorKind.ALREADY_MEMBER


class InvalidRoleError(RosterError):
    kind = ErrorKind.INVALID_ROLE


class InviteMismatchError(RosterError):
    """Invite digest does not match the caller's verified email."""

    kind = ErrorKind.INVITE_MISMATCH


class InviteExpiredError(RosterError):
    kind = ErrorKind.INVITE_EXPIRED


class InternalError(RosterError):
    """Store or downstream transport failure."""

    kind = ErrorKind.INTERNAL
