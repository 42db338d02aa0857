"""
Roster auth module.

User profile lookups, caller identities and authorization checks.
"""

from .guard import AuthorizationGuard
from .models import CallerIdentity, UserProfile, normalize_email
from .users import UserManager

__all__ = [
    "AuthorizationGuard",
    "CallerIdentity",
    "UserManager",
    "UserProfile",
    "normalize_email",
]
