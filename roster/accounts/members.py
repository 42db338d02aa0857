"""
Membership management for Roster.

Every roster change is an optimistic read-modify-write on the account
document: read the account and its version, compute the new roster, write
it back conditional on that version, and start over on a conflict. Domain
checks run inside the cycle so they see the state being written over.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Callable, List, Optional

from ..audit.models import ActivityAction
from ..auth.models import CallerIdentity
from ..decorators import internal_errors
from ..errors import AlreadyMemberError, InternalError, NotFoundError
from ..store import WriteConflict
from .accounts import ACCOUNTS
from .models import (
    Account,
    AddMemberResult,
    MemberRecord,
    MemberRole,
    RoleChange,
    RoleChangeResult,
    apply_role_change,
    parse_role,
    parse_role_change,
)

if TYPE_CHECKING:
    from ..client import Roster

logger = logging.getLogger(__name__)


class MembershipManager:
    """
    Manager for account membership operations.

    Example:
        ```python
        roster = await Roster.create()

        # Add a user by email
        await roster.memberships.add_by_email(caller, account_id, "jane@example.com", "member")

        # Promote, demote or remove
        await roster.memberships.change_role(account_id, caller.user_id, jane_id, "admin")

        # List members (admins only)
        members = await roster.memberships.list(account_id, caller.user_id)
        ```
    """

    def __init__(self, roster: "Roster") -> None:
        """
        Initialize MembershipManager.

        Args:
            roster: Roster client instance
        """
        self.roster = roster
        self.store = roster.store
        self.guard = roster.guard

    async def _mutate(self, account_id: str, mutate: Callable[[Account], Account]) -> Account:
        """
        Apply ``mutate`` to the account with optimistic concurrency.

        ``mutate`` receives the freshly read account and returns the changed
        copy, or raises a RosterError to abort. Unchanged rosters are not written.
        """
        attempts = self.roster.config.max_write_retries

        for attempt in range(1, attempts + 1):
            account = await self.roster.accounts.get_required(account_id)
            updated = mutate(account)

            if updated.to_data() == account.to_data():
                return account

            try:
                doc = await self.store.replace(
                    ACCOUNTS, account_id, updated.to_data(), account.version
                )
            except WriteConflict:
                logger.warning(
                    "Roster write conflict on account %s (attempt %d/%d)",
                    account_id,
                    attempt,
                    attempts,
                )
                continue

            return Account.from_document(doc)

        raise InternalError(
            f"Account {account_id} is being modified concurrently, try again later"
        )

    @internal_errors
    async def add(
        self,
        account_id: str,
        user_id: str,
        as_admin: bool = False,
    ) -> AddMemberResult:
        """
        Add a user to an account.

        Args:
            account_id: Account ID
            user_id: User to add
            as_admin: Also grant admin standing

        Returns:
            AddMemberResult

        Raises:
            NotFoundError: If the account or the user does not exist
            AlreadyMemberError: If the user already has access
        """
        return await self._add(account_id, user_id, as_admin)

    async def _add(
        self,
        account_id: str,
        user_id: str,
        as_admin: bool,
        caller_id: Optional[str] = None,
    ) -> AddMemberResult:
        """Add ``user_id``, requiring ``caller_id`` to be an admin on every attempt when given."""
        user = await self.roster.users.get(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")

        def mutate(account: Account) -> Account:
            if caller_id is not None:
                self.guard.require_admin(account, caller_id)
            if self.guard.is_member(account, user_id):
                raise AlreadyMemberError("The user already has access to the account.")
            admins = account.admins + [user_id] if as_admin else account.admins
            return account.with_roster(account.access + [user_id], admins)

        await self._mutate(account_id, mutate)

        role = MemberRole.ADMIN if as_admin else MemberRole.MEMBER
        logger.info("Added user %s to account %s as %s", user_id, account_id, role.value)
        await self.roster.audit.log(
            user_id,
            ActivityAction.MEMBER_ADDED,
            account_id=account_id,
            metadata={"role": role.value},
        )

        return AddMemberResult(account_id=account_id)

    @internal_errors
    async def add_by_email(
        self,
        caller: CallerIdentity,
        account_id: str,
        email: str,
        role: MemberRole | str = MemberRole.MEMBER,
    ) -> AddMemberResult:
        """
        Add an existing user, found by email, to an account.

        Args:
            caller: Authenticated caller (must be an admin of the account)
            account_id: Account ID
            email: Email of the user to add
            role: Role to grant

        Raises:
            InvalidRoleError: If role is not member or admin
            PermissionDeniedError: If the caller is not an admin
            NotFoundError: If the account or the user does not exist
            AlreadyMemberError: If the user already has access
        """
        member_role = parse_role(role)

        account = await self.roster.accounts.get_required(account_id)
        self.guard.require_admin(account, caller.user_id)

        user = await self.roster.users.get_by_email(email)
        if user is None:
            raise NotFoundError("No user with that email address")

        if self.guard.is_member(account, user.id):
            raise AlreadyMemberError("The user already has access to the account.")

        return await self._add(
            account_id,
            user.id,
            as_admin=member_role is MemberRole.ADMIN,
            caller_id=caller.user_id,
        )

    @internal_errors
    async def change_role(
        self,
        account_id: str,
        caller_id: str,
        user_id: str,
        role: RoleChange | str,
    ) -> RoleChangeResult:
        """
        Promote, demote or remove a member.

        Args:
            account_id: Account ID
            caller_id: Caller's user ID (must be an admin)
            user_id: Member to change
            role: member, admin or remove

        Returns:
            RoleChangeResult

        Raises:
            InvalidRoleError: If role is not member, admin or remove
            PermissionDeniedError: If the caller is not an admin
            NotFoundError: If the account does not exist or user is not a member
        """
        change = parse_role_change(role)

        def mutate(account: Account) -> Account:
            self.guard.require_admin(account, caller_id)
            if not self.guard.is_member(account, user_id):
                raise NotFoundError(f"No user with ID: {user_id}")
            return apply_role_change(account, user_id, change)

        await self._mutate(account_id, mutate)

        if change is RoleChange.REMOVE:
            action = ActivityAction.MEMBER_REMOVED
        else:
            action = ActivityAction.MEMBER_ROLE_CHANGED
        logger.info("User %s set %s on %s in account %s", caller_id, change.value, user_id, account_id)
        await self.roster.audit.log(
            caller_id,
            action,
            account_id=account_id,
            metadata={"user_id": user_id, "role": change.value},
        )

        return RoleChangeResult(role=change)

    @internal_errors
    async def list(self, account_id: str, caller_id: str) -> List[MemberRecord]:
        """
        List the members of an account, ordered by display name.

        Ties on display name are broken by user ID so the order is total.

        Raises:
            NotFoundError: If the account does not exist
            PermissionDeniedError: If the caller is not an admin
        """
        account = await self.roster.accounts.get_required(account_id)
        self.guard.require_admin(account, caller_id)

        profiles = await asyncio.gather(
            *(self.roster.users.get(user_id) for user_id in account.access)
        )

        records = []
        for user_id, profile in zip(account.access, profiles):
            if profile is None:
                logger.warning("Account %s lists unknown user %s", account_id, user_id)
                continue
            records.append(
                MemberRecord(
                    id=user_id,
                    display_name=profile.display_name,
                    photo_url=profile.photo_url,
                    last_login_time=profile.last_login_time,
                    role=account.role_of(user_id),
                )
            )

        records.sort(key=lambda record: (record.display_name or "", record.id))
        return records

    @internal_errors
    async def get(self, account_id: str, caller_id: str, user_id: str) -> MemberRecord:
        """
        Get a single member of an account.

        Raises:
            PermissionDeniedError: If the caller is not an admin
            NotFoundError: If the account does not exist or user is not a member
        """
        account = await self.roster.accounts.get_required(account_id)
        self.guard.require_admin(account, caller_id)

        if not self.guard.is_member(account, user_id):
            raise NotFoundError(f"No user with ID: {user_id}")

        profile = await self.roster.users.get(user_id)
        if profile is None:
            raise NotFoundError(f"No user with ID: {user_id}")

        return MemberRecord(
            id=user_id,
            display_name=profile.display_name,
            photo_url=profile.photo_url,
            last_login_time=profile.last_login_time,
            role=account.role_of(user_id),
        )
