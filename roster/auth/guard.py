"""
Authorization checks over an account roster.
"""

from ..accounts.models import Account
from ..errors import PermissionDeniedError


class AuthorizationGuard:
    """
    Decides a caller's standing in an account.

    The guard is a precondition check only. It does not protect against
    concurrent writes; roster mutations re-run it on every retry.
    """

    def is_admin(self, account: Account, user_id: str) -> bool:
        return user_id in account.admins

    def is_member(self, account: Account, user_id: str) -> bool:
        return user_id in account.access

    def require_admin(self, account: Account, user_id: str) -> None:
        """
        Raises:
            PermissionDeniedError: If the user is not an admin of the account
        """
        if not self.is_admin(account, user_id):
            raise PermissionDeniedError("Permission denied.")
