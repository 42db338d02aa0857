"""
Roster account models.

Pydantic models for accounts, member records and operation results, plus
the role enumerations and the roster transition table.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field

from ..errors import InvalidRoleError
from ..store import Document


class MemberRole(str, Enum):
    """Standing of a member within an account."""

    MEMBER = "member"
    ADMIN = "admin"

    @classmethod
    def _missing_(cls, value: object) -> Optional["MemberRole"]:
        # "user" is the legacy spelling of a plain member
        if value == "user":
            return cls.MEMBER
        return None


class RoleChange(str, Enum):
    """Requested change to a member's standing."""

    MEMBER = "member"
    ADMIN = "admin"
    REMOVE = "remove"

    @classmethod
    def _missing_(cls, value: object) -> Optional["RoleChange"]:
        if value == "user":
            return cls.MEMBER
        return None


def parse_role(value: MemberRole | str) -> MemberRole:
    """
    Raises:
        InvalidRoleError: If value is not a grantable role
    """
    try:
        return MemberRole(value)
    except ValueError:
        raise InvalidRoleError(f"Invalid role: {value!r}") from None


def parse_role_change(value: RoleChange | str) -> RoleChange:
    """
    Raises:
        InvalidRoleError: If value is not member, admin or remove
    """
    try:
        return RoleChange(value)
    except ValueError:
        raise InvalidRoleError("Invalid role or action.") from None


def _unique(ids: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for user_id in ids:
        if user_id not in seen:
            seen.add(user_id)
            result.append(user_id)
    return result


class Account(BaseModel):
    """
    Account - a tenant workspace owning a membership roster.

    ``access_count`` and ``admin_count`` are derived from the lists; build
    changed accounts with ``with_roster`` so they never drift.
    """

    id: str
    name: str
    owner: str
    access: List[str] = Field(default_factory=list)
    admins: List[str] = Field(default_factory=list)
    access_count: int = 0
    admin_count: int = 0
    creation_time: datetime

    # Store version the account was read at
    version: int = 1

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "Acme",
                "owner": "Hq3LZr8yWfTtVq2pN1bK",
                "access": ["Hq3LZr8yWfTtVq2pN1bK"],
                "admins": ["Hq3LZr8yWfTtVq2pN1bK"],
                "access_count": 1,
                "admin_count": 1,
                "creation_time": "2024-01-01T00:00:00Z",
            }
        },
    }

    @classmethod
    def from_document(cls, doc: Document) -> "Account":
        return cls(id=doc.id, version=doc.version, **doc.data)

    def with_roster(self, access: Iterable[str], admins: Iterable[str]) -> "Account":
        """Return a copy with a new roster, deduplicated, admins kept within access."""
        access = _unique(access)
        members = set(access)
        admins = [user_id for user_id in _unique(admins) if user_id in members]
        return self.model_copy(update={
            "access": access,
            "admins": admins,
            "access_count": len(access),
            "admin_count": len(admins),
        })

    def to_data(self) -> Dict[str, Any]:
        """Document body as stored (without ID and version)."""
        return {
            "name": self.name,
            "owner": self.owner,
            "access": list(self.access),
            "admins": list(self.admins),
            "access_count": len(self.access),
            "admin_count": len(self.admins),
            "creation_time": self.creation_time.isoformat(),
        }

    def role_of(self, user_id: str) -> MemberRole:
        return MemberRole.ADMIN if user_id in self.admins else MemberRole.MEMBER


RosterLists = Tuple[List[str], List[str]]


def _demote(access: List[str], admins: List[str], user_id: str) -> RosterLists:
    return access, [a for a in admins if a != user_id]


def _promote(access: List[str], admins: List[str], user_id: str) -> RosterLists:
    if user_id in admins:
        return access, admins
    return access, admins + [user_id]


def _remove(access: List[str], admins: List[str], user_id: str) -> RosterLists:
    return [a for a in access if a != user_id], [a for a in admins if a != user_id]


ROLE_TRANSITIONS: Dict[RoleChange, Callable[[List[str], List[str], str], RosterLists]] = {
    RoleChange.MEMBER: _demote,
    RoleChange.ADMIN: _promote,
    RoleChange.REMOVE: _remove,
}


def apply_role_change(account: Account, user_id: str, change: RoleChange) -> Account:
    """Apply a role change to a member of the account."""
    access, admins = ROLE_TRANSITIONS[change](list(account.access), list(account.admins), user_id)
    return account.with_roster(access, admins)


class MemberRecord(BaseModel):
    """A member of an account as shown to its admins."""

    id: str
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    last_login_time: Optional[datetime] = None
    role: MemberRole


class CreateAccountRequest(BaseModel):
    """Request model for creating an account."""

    account_name: str = Field(..., min_length=1, max_length=255)


class AddMemberResult(BaseModel):
    result: Literal["success"] = "success"
    account_id: str


class RoleChangeResult(BaseModel):
    result: Literal["success"] = "success"
    role: RoleChange
