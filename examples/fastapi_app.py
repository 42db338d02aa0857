"""
FastAPI application example with Roster integration.

Bearer tokens are resolved by a stand-in identity provider: the token is a
user ID from the users collection. Replace ``authenticate`` with real token
verification in production.

Run with:
    ROSTER_SALT=change-me-please uvicorn examples.fastapi_app:app --reload
"""

from typing import Optional

from fastapi import FastAPI

from roster import CallerIdentity
from roster.integrations.fastapi import RosterFastAPI


async def authenticate(token: str) -> Optional[CallerIdentity]:
    """Resolve a bearer token to the caller's identity."""
    return await roster_api.roster.users.identity(token)


# =================================================================
# FastAPI App Setup
# =================================================================

roster_api = RosterFastAPI(authenticate=authenticate, prefix="/api")

app = FastAPI(
    title="Roster Example API",
    description="Account membership and invitations",
    version="1.0.0",
    lifespan=roster_api.lifespan,
)

roster_api.install(app)


@app.get("/health")
async def health():
    return {"status": "ok"}
