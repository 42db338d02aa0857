"""
FastAPI integration for Roster.

Exposes the membership and invitation operations as HTTP endpoints.
Token verification belongs to the application's identity provider: pass an
``authenticate`` coroutine that turns a bearer token into a CallerIdentity.

Example:
    ```python
    from fastapi import FastAPI
    from roster.integrations.fastapi import RosterFastAPI

    async def authenticate(token: str) -> CallerIdentity | None:
        claims = await verify_with_identity_provider(token)
        if claims is None:
            return None
        return CallerIdentity(
            user_id=claims["uid"],
            email=claims["email"],
            display_name=claims.get("name"),
        )

    roster_api = RosterFastAPI(authenticate=authenticate)
    app = FastAPI(lifespan=roster_api.lifespan)
    roster_api.install(app)
    ```
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, List, Optional

try:
    from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
    from fastapi.responses import JSONResponse
    from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
except ImportError:
    raise ImportError(
        "FastAPI is required for this integration. "
        "Install it with: pip install roster[fastapi]"
    )

from pydantic import BaseModel

from ..accounts.models import AddMemberResult, CreateAccountRequest, MemberRecord, RoleChangeResult
from ..auth.models import CallerIdentity
from ..client import Roster
from ..errors import ErrorKind, RosterError
from ..invitations.models import (
    AcceptInviteResult,
    CreateInviteRequest,
    InviteResult,
    ResolvedInvite,
)

logger = logging.getLogger(__name__)

Authenticator = Callable[[str], Awaitable[Optional[CallerIdentity]]]

# Security scheme
security = HTTPBearer(auto_error=False)

ERROR_STATUS = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.PERMISSION_DENIED: 403,
    ErrorKind.ALREADY_MEMBER: 409,
    ErrorKind.INVALID_ROLE: 422,
    ErrorKind.INVITE_MISMATCH: 403,
    ErrorKind.INVITE_EXPIRED: 410,
    ErrorKind.INTERNAL: 500,
}


class CreateAccountResponse(BaseModel):
    account_id: str


class AddMemberRequest(BaseModel):
    email: str
    role: str = "member"


class ChangeRoleRequest(BaseModel):
    role: str


async def roster_error_handler(request: Request, exc: RosterError) -> JSONResponse:
    """Render a RosterError as ``{"error": {"kind", "message"}}``."""
    status = ERROR_STATUS.get(exc.kind, 500)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status, content={"error": exc.to_dict()})


class RosterFastAPI:
    """
    FastAPI integration for Roster.

    Provides:
    - Automatic Roster client lifecycle management
    - Dependency injection for the authenticated caller
    - A router with the account, member and invite endpoints
    - Translation of RosterError into JSON error responses
    """

    def __init__(
        self,
        app: Optional[FastAPI] = None,
        authenticate: Optional[Authenticator] = None,
        roster: Optional[Roster] = None,
        prefix: str = "",
    ) -> None:
        """
        Initialize RosterFastAPI integration.

        Args:
            app: FastAPI application (optional; routes and error handler are installed on it)
            authenticate: Coroutine verifying a bearer token
            roster: Pre-built Roster client (created from env on startup when omitted)
            prefix: URL prefix for the router
        """
        self.authenticate = authenticate
        self._roster = roster
        self._owns_roster = roster is None
        self.router = self._build_router(prefix)

        if app:
            self.install(app)

    def install(self, app: FastAPI) -> None:
        """Attach router and error handler to an app."""
        app.include_router(self.router)
        app.add_exception_handler(RosterError, roster_error_handler)

    @asynccontextmanager
    async def lifespan(self, app: FastAPI) -> AsyncIterator[None]:
        """Lifespan handler creating and closing the Roster client."""
        await self.setup()
        try:
            yield
        finally:
            await self.teardown()

    async def setup(self) -> None:
        """Initialize Roster client."""
        if self._roster is None:
            self._roster = await Roster.create()

    async def teardown(self) -> None:
        """Close Roster client if this integration created it."""
        if self._roster and self._owns_roster:
            await self._roster.close()
            self._roster = None

    @property
    def roster(self) -> Roster:
        """Get the Roster instance."""
        if not self._roster:
            raise RuntimeError("Roster not initialized. Call setup() first.")
        return self._roster

    def require_caller(self) -> Callable:
        """
        Dependency that requires an authenticated caller.

        Returns the CallerIdentity or raises 401.
        """

        async def dependency(
            credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
        ) -> CallerIdentity:
            if not credentials:
                raise HTTPException(
                    status_code=401,
                    detail="Not authenticated",
                    headers={"WWW-Authenticate": "Bearer"},
                )

            if self.authenticate is None:
                raise RuntimeError("No authenticate callback configured for RosterFastAPI")

            caller = await self.authenticate(credentials.credentials)
            if not caller:
                raise HTTPException(
                    status_code=401,
                    detail="Invalid or expired token",
                    headers={"WWW-Authenticate": "Bearer"},
                )

            return caller

        return dependency

    def _build_router(self, prefix: str) -> APIRouter:
        router = APIRouter(prefix=prefix, tags=["roster"])
        caller_dependency = self.require_caller()

        @router.post("/accounts", response_model=CreateAccountResponse)
        async def create_account(
            body: CreateAccountRequest,
            caller: CallerIdentity = Depends(caller_dependency),
        ) -> CreateAccountResponse:
            account = await self.roster.accounts.create(caller, body.account_name)
            return CreateAccountResponse(account_id=account.id)

        @router.get("/accounts/{account_id}/members", response_model=List[MemberRecord])
        async def list_members(
            account_id: str,
            caller: CallerIdentity = Depends(caller_dependency),
        ) -> List[MemberRecord]:
            return await self.roster.memberships.list(account_id, caller.user_id)

        @router.get("/accounts/{account_id}/members/{user_id}", response_model=MemberRecord)
        async def get_member(
            account_id: str,
            user_id: str,
            caller: CallerIdentity = Depends(caller_dependency),
        ) -> MemberRecord:
            return await self.roster.memberships.get(account_id, caller.user_id, user_id)

        @router.post("/accounts/{account_id}/members", response_model=AddMemberResult)
        async def add_member(
            account_id: str,
            body: AddMemberRequest,
            caller: CallerIdentity = Depends(caller_dependency),
        ) -> AddMemberResult:
            return await self.roster.memberships.add_by_email(
                caller, account_id, body.email, body.role
            )

        @router.patch("/accounts/{account_id}/members/{user_id}", response_model=RoleChangeResult)
        async def change_role(
            account_id: str,
            user_id: str,
            body: ChangeRoleRequest,
            caller: CallerIdentity = Depends(caller_dependency),
        ) -> RoleChangeResult:
            return await self.roster.memberships.change_role(
                account_id, caller.user_id, user_id, body.role
            )

        @router.post("/accounts/{account_id}/invites", response_model=InviteResult)
        async def create_invite(
            account_id: str,
            body: CreateInviteRequest,
            caller: CallerIdentity = Depends(caller_dependency),
        ) -> InviteResult:
            await self.roster.invites.create(caller, account_id, body.email, body.role)
            return InviteResult()

        @router.get("/invites/{invite_id}", response_model=ResolvedInvite)
        async def resolve_invite(
            invite_id: str,
            caller: CallerIdentity = Depends(caller_dependency),
        ) -> ResolvedInvite:
            return await self.roster.invites.resolve(invite_id, caller.email)

        @router.post("/invites/{invite_id}/accept", response_model=AcceptInviteResult)
        async def accept_invite(
            invite_id: str,
            caller: CallerIdentity = Depends(caller_dependency),
        ) -> AcceptInviteResult:
            return await self.roster.invites.accept(invite_id, caller)

        return router
