"""
Account management for Roster.

Handles creating and reading accounts (accounts collection). Roster
changes go through MembershipManager.
"""

import logging
from typing import TYPE_CHECKING, Optional

from ..audit.models import ActivityAction
from ..auth.models import CallerIdentity
from ..decorators import internal_errors
from ..errors import NotFoundError
from .models import Account, CreateAccountRequest

if TYPE_CHECKING:
    from ..client import Roster

logger = logging.getLogger(__name__)

ACCOUNTS = "accounts"


class AccountManager:
    """
    Manager for account operations.

    Example:
        ```python
        roster = await Roster.create()

        account = await roster.accounts.create(caller, "Acme")
        assert account.admins == [caller.user_id]
        ```
    """

    def __init__(self, roster: "Roster") -> None:
        """
        Initialize AccountManager.

        Args:
            roster: Roster client instance
        """
        self.roster = roster
        self.store = roster.store

    @internal_errors
    async def create(self, caller: CallerIdentity, name: str) -> Account:
        """
        Create a new account owned by the caller.

        The owner becomes the first member and first admin in the same
        write that creates the account.

        Args:
            caller: Authenticated caller (becomes the owner)
            name: Account display name

        Returns:
            Created Account
        """
        request = CreateAccountRequest(account_name=name)
        owner = caller.user_id

        data = {
            "name": request.account_name,
            "owner": owner,
            "access": [owner],
            "admins": [owner],
            "access_count": 1,
            "admin_count": 1,
            "creation_time": self.roster.now().isoformat(),
        }

        doc = await self.store.create(ACCOUNTS, data)
        account = Account.from_document(doc)
        logger.info("User %s created account %s", owner, account.id)

        await self.roster.audit.log(
            owner,
            ActivityAction.ACCOUNT_CREATED,
            account_id=account.id,
            metadata={"name": account.name},
        )

        return account

    @internal_errors
    async def get(self, account_id: str) -> Optional[Account]:
        """
        Get an account by ID.

        Returns:
            Account if found, None otherwise
        """
        doc = await self.store.get(ACCOUNTS, account_id)
        if doc is None:
            return None
        return Account.from_document(doc)

    async def get_required(self, account_id: str) -> Account:
        """
        Get an account that must exist.

        Raises:
            NotFoundError: If the account does not exist
        """
        account = await self.get(account_id)
        if account is None:
            raise NotFoundError(f"Account {account_id} not found")
        return account
