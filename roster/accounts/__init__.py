"""
Roster accounts module.

Handles accounts and their membership rosters.
"""

from .accounts import AccountManager
from .members import MembershipManager
from .models import (
    Account,
    AddMemberResult,
    MemberRecord,
    MemberRole,
    RoleChange,
    RoleChangeResult,
)

__all__ = [
    "AccountManager",
    "MembershipManager",
    "Account",
    "AddMemberResult",
    "MemberRecord",
    "MemberRole",
    "RoleChange",
    "RoleChangeResult",
]
