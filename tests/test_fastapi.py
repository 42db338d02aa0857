"""
Tests for roster.integrations.fastapi module.
"""

from typing import Optional

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from roster.auth.models import CallerIdentity
from roster.integrations.fastapi import ERROR_STATUS, RosterFastAPI
from roster.errors import ErrorKind


@pytest.fixture
def client(roster, seeded_sync):
    """TestClient whose bearer token is the caller's user ID."""
    _, users = seeded_sync

    async def authenticate(token: str) -> Optional[CallerIdentity]:
        return users.get(token)

    app = FastAPI()
    RosterFastAPI(app, authenticate=authenticate, roster=roster)
    return TestClient(app)


@pytest.fixture
def account_id(seeded_sync):
    return seeded_sync[0].id


def auth(user_id: str) -> dict:
    return {"Authorization": f"Bearer {user_id}"}


class TestErrorMapping:
    def test_every_kind_has_a_status(self):
        assert set(ERROR_STATUS) == set(ErrorKind)


class TestAuthentication:
    """Tests for bearer authentication."""

    def test_missing_token(self, client, account_id):
        response = client.get(f"/accounts/{account_id}/members")
        assert response.status_code == 401

    def test_unknown_token(self, client, account_id):
        response = client.get(f"/accounts/{account_id}/members", headers=auth("nobody"))
        assert response.status_code == 401


class TestAccountEndpoints:
    """Tests for account and member endpoints."""

    def test_create_account(self, client, roster):
        response = client.post("/accounts", json={"account_name": "Beta"}, headers=auth("bob"))

        assert response.status_code == 200
        assert response.json()["account_id"]

    def test_create_account_empty_name(self, client):
        response = client.post("/accounts", json={"account_name": ""}, headers=auth("bob"))
        assert response.status_code == 422

    def test_list_members(self, client, account_id):
        response = client.get(f"/accounts/{account_id}/members", headers=auth("owner"))

        assert response.status_code == 200
        members = response.json()
        assert [m["id"] for m in members] == ["jane", "owner"]
        assert members[1]["role"] == "admin"

    def test_list_members_forbidden(self, client, account_id):
        response = client.get(f"/accounts/{account_id}/members", headers=auth("jane"))

        assert response.status_code == 403
        assert response.json() == {
            "error": {"kind": "permission_denied", "message": "Permission denied."}
        }

    def test_get_member(self, client, account_id):
        response = client.get(f"/accounts/{account_id}/members/jane", headers=auth("owner"))

        assert response.status_code == 200
        assert response.json()["display_name"] == "Jane Doe"

    def test_get_member_not_found(self, client, account_id):
        response = client.get(f"/accounts/{account_id}/members/bob", headers=auth("owner"))

        assert response.status_code == 404
        assert response.json()["error"]["kind"] == "not_found"

    def test_add_member(self, client, account_id):
        response = client.post(
            f"/accounts/{account_id}/members",
            json={"email": "bob@example.com", "role": "admin"},
            headers=auth("owner"),
        )

        assert response.status_code == 200
        assert response.json() == {"result": "success", "account_id": account_id}

    def test_add_member_conflict(self, client, account_id):
        response = client.post(
            f"/accounts/{account_id}/members",
            json={"email": "jane@example.com"},
            headers=auth("owner"),
        )
        assert response.status_code == 409

    def test_change_role(self, client, account_id):
        response = client.patch(
            f"/accounts/{account_id}/members/jane",
            json={"role": "admin"},
            headers=auth("owner"),
        )

        assert response.status_code == 200
        assert response.json() == {"result": "success", "role": "admin"}

    def test_change_role_invalid(self, client, account_id):
        response = client.patch(
            f"/accounts/{account_id}/members/jane",
            json={"role": "owner"},
            headers=auth("owner"),
        )

        assert response.status_code == 422
        assert response.json()["error"]["kind"] == "invalid_role"


class TestInviteEndpoints:
    """Tests for invitation endpoints."""

    def _invite(self, client, account_id, email="bob@example.com"):
        response = client.post(
            f"/accounts/{account_id}/invites",
            json={"email": email, "role": "member"},
            headers=auth("owner"),
        )
        assert response.status_code == 200
        return response

    def test_invite_flow(self, client, account_id, notifier):
        response = self._invite(client, account_id)
        assert response.json() == {"result": "success"}
        invite_id = notifier.send_invite.call_args[0][2]

        resolved = client.get(f"/invites/{invite_id}", headers=auth("bob"))
        assert resolved.status_code == 200
        assert resolved.json() == {"account_id": account_id, "account_name": "Acme"}

        accepted = client.post(f"/invites/{invite_id}/accept", headers=auth("bob"))
        assert accepted.status_code == 200
        assert accepted.json() == {"result": "success", "account_id": account_id}

        again = client.post(f"/invites/{invite_id}/accept", headers=auth("bob"))
        assert again.status_code == 404

    def test_invite_mismatch(self, client, account_id, notifier):
        self._invite(client, account_id)
        invite_id = notifier.send_invite.call_args[0][2]

        response = client.get(f"/invites/{invite_id}", headers=auth("jane"))

        assert response.status_code == 403
        assert response.json()["error"]["kind"] == "invite_mismatch"

    def test_invite_expired(self, client, account_id, notifier, clock):
        self._invite(client, account_id)
        invite_id = notifier.send_invite.call_args[0][2]
        clock.advance(hours=73)

        response = client.post(f"/invites/{invite_id}/accept", headers=auth("bob"))

        assert response.status_code == 410

    def test_invite_invalid_email(self, client, account_id):
        response = client.post(
            f"/accounts/{account_id}/invites",
            json={"email": "not-an-email"},
            headers=auth("owner"),
        )
        assert response.status_code == 422

    def test_invite_delivery_failure(self, client, account_id, notifier):
        from roster.notifications import NotificationError

        notifier.send_invite.side_effect = NotificationError("mail down")

        response = client.post(
            f"/accounts/{account_id}/invites",
            json={"email": "bob@example.com"},
            headers=auth("owner"),
        )

        assert response.status_code == 500
        assert response.json()["error"]["kind"] == "internal"
