"""
Invitation management for Roster.

Handles creating, resolving, accepting and revoking account invitations.

The invitation flow:
1. An admin invites an email address with a role
2. The address is digested with the configured salt and only the digest is stored
3. The notification gateway emails the invite link
4. The invitee, signed in with that verified address, resolves and accepts the invite
5. The invitee is added to the account and the invite is deleted
"""

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, List, Optional

from ..accounts.models import MemberRole, parse_role
from ..audit.models import ActivityAction
from ..auth.models import CallerIdentity
from ..decorators import internal_errors
from ..errors import (
    AlreadyMemberError,
    InternalError,
    InviteExpiredError,
    InviteMismatchError,
    NotFoundError,
)
from ..notifications import NotificationError
from .models import AcceptInviteResult, Invite, ResolvedInvite

if TYPE_CHECKING:
    from ..client import Roster

logger = logging.getLogger(__name__)

INVITES = "invites"


class InvitationManager:
    """
    Manages account invitation operations.

    Example:
        ```python
        invite = await roster.invites.create(admin, account.id, "jane@example.com", "member")

        # Later, signed in as jane@example.com
        details = await roster.invites.resolve(invite.id, jane.email)
        await roster.invites.accept(invite.id, jane)
        ```
    """

    def __init__(self, roster: "Roster") -> None:
        """
        Initialize InvitationManager.

        Args:
            roster: Main Roster client instance
        """
        self.roster = roster
        self.store = roster.store
        self.hasher = roster.hasher
        self.guard = roster.guard

    @property
    def expiry_window(self) -> timedelta:
        return timedelta(hours=self.roster.config.invite_expire_hours)

    async def _get_verified(self, invite_id: str, caller_email: Optional[str]) -> Invite:
        """Load an invite and check it was issued to the caller's email."""
        invite = await self.get(invite_id)
        if invite is None:
            raise NotFoundError(f"Invite {invite_id} not found")

        if not caller_email or not self.hasher.matches(caller_email, invite.hashed_email):
            raise InviteMismatchError("Invalid invite details.")

        return invite

    @internal_errors
    async def create(
        self,
        caller: CallerIdentity,
        account_id: str,
        email: str,
        role: MemberRole | str = MemberRole.MEMBER,
    ) -> Invite:
        """
        Invite an email address to an account.

        The invite record is written before the email is sent. If sending
        fails the invite stays stored and InternalError is raised.

        Args:
            caller: Authenticated caller (must be an admin of the account)
            account_id: Account to invite into
            email: Address to invite
            role: Role granted on acceptance

        Returns:
            Created Invite

        Raises:
            InvalidRoleError: If role is not member or admin
            NotFoundError: If the account does not exist
            PermissionDeniedError: If the caller is not an admin
            InternalError: If the invite email could not be sent
        """
        member_role = parse_role(role)

        account = await self.roster.accounts.get_required(account_id)
        self.guard.require_admin(account, caller.user_id)

        data = {
            "hashed_email": self.hasher.digest(email),
            "owner": caller.user_id,
            "account": account_id,
            "role": member_role.value,
            "time": self.roster.now().isoformat(),
        }
        doc = await self.store.create(INVITES, data)
        invite = Invite.from_document(doc)
        logger.info("User %s created invite %s for account %s", caller.user_id, invite.id, account_id)

        await self.roster.audit.log(
            caller.user_id,
            ActivityAction.INVITE_SENT,
            account_id=account_id,
            metadata={"invite_id": invite.id, "role": member_role.value},
        )

        sender_name = caller.display_name or caller.email or caller.user_id
        try:
            await self.roster.notifier.send_invite(email, sender_name, invite.id)
        except NotificationError as e:
            logger.error("Invite %s stored but email delivery failed: %s", invite.id, e)
            raise InternalError(f"Invite created but the email could not be sent: {e}") from e

        return invite

    @internal_errors
    async def get(self, invite_id: str) -> Optional[Invite]:
        """
        Get an invite by ID.

        Returns:
            Invite instance or None if not found
        """
        doc = await self.store.get(INVITES, invite_id)
        if doc is None:
            return None
        return Invite.from_document(doc)

    @internal_errors
    async def resolve(self, invite_id: str, caller_email: Optional[str]) -> ResolvedInvite:
        """
        Show the account an invite is for.

        Args:
            invite_id: Invite ID
            caller_email: Caller's verified email

        Raises:
            NotFoundError: If the invite or its account does not exist
            InviteMismatchError: If the invite was issued to another address
        """
        invite = await self._get_verified(invite_id, caller_email)
        account = await self.roster.accounts.get_required(invite.account)
        return ResolvedInvite(account_id=account.id, account_name=account.name)

    @internal_errors
    async def accept(self, invite_id: str, caller: CallerIdentity) -> AcceptInviteResult:
        """
        Accept an invite and join its account.

        The invite is deleted once the caller is a member, including when
        they already were one, so an interrupted acceptance can be retried.

        Raises:
            NotFoundError: If the invite (or its account) does not exist
            InviteMismatchError: If the invite was issued to another address
            InviteExpiredError: If the invite is past its expiry window
        """
        invite = await self._get_verified(invite_id, caller.email)

        if invite.is_expired(self.roster.now(), self.expiry_window):
            raise InviteExpiredError("The invite has expired.")

        try:
            await self.roster.memberships.add(
                invite.account,
                caller.user_id,
                as_admin=invite.role is MemberRole.ADMIN,
            )
        except AlreadyMemberError:
            logger.info("User %s already in account %s, consuming invite %s",
                        caller.user_id, invite.account, invite_id)

        if not await self.store.delete(INVITES, invite_id):
            raise NotFoundError(f"Invite {invite_id} not found")

        await self.roster.audit.log(
            caller.user_id,
            ActivityAction.INVITE_ACCEPTED,
            account_id=invite.account,
            metadata={"invite_id": invite_id, "role": invite.role.value},
        )

        return AcceptInviteResult(account_id=invite.account)

    @internal_errors
    async def revoke(self, caller: CallerIdentity, invite_id: str) -> None:
        """
        Revoke (delete) a pending invite.

        Raises:
            NotFoundError: If the invite does not exist
            PermissionDeniedError: If the caller is not an admin of its account
        """
        invite = await self.get(invite_id)
        if invite is None:
            raise NotFoundError(f"Invite {invite_id} not found")

        account = await self.roster.accounts.get_required(invite.account)
        self.guard.require_admin(account, caller.user_id)

        if not await self.store.delete(INVITES, invite_id):
            raise NotFoundError(f"Invite {invite_id} not found")
        logger.info("User %s revoked invite %s", caller.user_id, invite_id)

        await self.roster.audit.log(
            caller.user_id,
            ActivityAction.INVITE_REVOKED,
            account_id=account.id,
            metadata={"invite_id": invite_id},
        )

    @internal_errors
    async def list_pending(
        self,
        caller: CallerIdentity,
        account_id: str,
        limit: int = 100,
    ) -> List[Invite]:
        """
        List an account's invites that can still be accepted, newest first.

        Raises:
            NotFoundError: If the account does not exist
            PermissionDeniedError: If the caller is not an admin
        """
        account = await self.roster.accounts.get_required(account_id)
        self.guard.require_admin(account, caller.user_id)

        docs = await self.store.find(INVITES, "account", account_id, limit=limit)
        now = self.roster.now()
        invites = [
            invite
            for invite in (Invite.from_document(doc) for doc in docs)
            if not invite.is_expired(now, self.expiry_window)
        ]
        invites.sort(key=lambda invite: (invite.time, invite.id), reverse=True)
        return invites
