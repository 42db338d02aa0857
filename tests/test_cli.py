"""
Tests for roster.cli module.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from roster.cli.main import app
from roster.client import Roster

from tests.conftest import TEST_SALT, seed


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_roster(roster_config, store, notifier, clock):
    """Make every command use a seeded Roster configured for a persistent backend."""
    config = roster_config.model_copy(update={"backend": "supabase"})
    roster = Roster(config=config, store=store, notifier=notifier, clock=clock)
    seeded = asyncio.run(seed(roster))
    with patch.object(Roster, "create", AsyncMock(return_value=roster)):
        yield seeded


class TestBackendCheck:
    """Tests for the CLI's configuration checks."""

    def test_memory_backend_refused(self, runner):
        result = runner.invoke(
            app,
            ["accounts", "create", "Acme", "--as", "u1"],
            env={"ROSTER_SALT": TEST_SALT, "ROSTER_BACKEND": "memory"},
        )

        assert result.exit_code == 1
        assert "ROSTER_BACKEND=supabase" in result.output
        assert "No user profile" not in result.output

    def test_invalid_config(self, runner):
        result = runner.invoke(
            app,
            ["invites", "list", "acct", "--as", "u1"],
            env={"ROSTER_SALT": "short", "ROSTER_BACKEND": "memory"},
        )

        assert result.exit_code == 1
        assert "Configuration error" in result.output

class TestAccountsCommands:
    """Tests for the accounts command group."""

    def test_create(self, runner, cli_roster):
        result = runner.invoke(app, ["accounts", "create", "Beta", "--as", "bob"])

        assert result.exit_code == 0
        assert "Account created" in result.output
        assert "Beta" in result.output

    def test_create_unknown_caller(self, runner, cli_roster):
        result = runner.invoke(app, ["accounts", "create", "Beta", "--as", "ghost"])

        assert result.exit_code == 1
        assert "No user profile" in result.output

    def test_members(self, runner, cli_roster):
        account, _ = cli_roster

        result = runner.invoke(app, ["accounts", "members", account.id, "--as", "owner"])

        assert result.exit_code == 0
        assert "Jane Doe" in result.output
        assert "Olivia Owner" in result.output

    def test_members_denied(self, runner, cli_roster):
        account, _ = cli_roster

        result = runner.invoke(app, ["accounts", "members", account.id, "--as", "jane"])

        assert result.exit_code == 1
        assert "permission_denied" in result.output

    def test_members_unknown_caller(self, runner, cli_roster):
        account, _ = cli_roster

        result = runner.invoke(app, ["accounts", "members", account.id, "--as", "ghost"])

        assert result.exit_code == 1
        assert "No user profile for ghost" in result.output

    def test_set_role_unknown_caller(self, runner, cli_roster):
        account, _ = cli_roster

        result = runner.invoke(
            app, ["accounts", "set-role", account.id, "jane", "admin", "--as", "ghost"]
        )

        assert result.exit_code == 1
        assert "No user profile for ghost" in result.output

    def test_member(self, runner, cli_roster):
        account, _ = cli_roster

        result = runner.invoke(app, ["accounts", "member", account.id, "jane", "--as", "owner"])

        assert result.exit_code == 0
        assert "member" in result.output

    def test_add_member(self, runner, cli_roster):
        account, _ = cli_roster

        result = runner.invoke(
            app,
            ["accounts", "add-member", account.id, "bob@example.com", "--role", "admin", "--as", "owner"],
        )

        assert result.exit_code == 0
        assert "Added bob@example.com as admin" in result.output

    def test_set_role_invalid(self, runner, cli_roster):
        account, _ = cli_roster

        result = runner.invoke(
            app, ["accounts", "set-role", account.id, "jane", "owner", "--as", "owner"]
        )

        assert result.exit_code == 1
        assert "invalid_role" in result.output

    def test_set_role(self, runner, cli_roster):
        account, _ = cli_roster

        result = runner.invoke(
            app, ["accounts", "set-role", account.id, "jane", "remove", "--as", "owner"]
        )

        assert result.exit_code == 0
        assert "jane: remove" in result.output


class TestInvitesCommands:
    """Tests for the invites command group."""

    def test_send_and_accept(self, runner, cli_roster, notifier):
        account, _ = cli_roster

        sent = runner.invoke(app, ["invites", "send", account.id, "bob@example.com", "--as", "owner"])
        assert sent.exit_code == 0
        assert "Invitation sent to bob@example.com" in sent.output
        invite_id = notifier.send_invite.call_args[0][2]

        listed = runner.invoke(app, ["invites", "list", account.id, "--as", "owner"])
        assert listed.exit_code == 0
        assert "member" in listed.output

        resolved = runner.invoke(app, ["invites", "resolve", invite_id, "--as", "bob"])
        assert resolved.exit_code == 0
        assert "Acme" in resolved.output

        accepted = runner.invoke(app, ["invites", "accept", invite_id, "--as", "bob"])
        assert accepted.exit_code == 0
        assert "Invitation accepted" in accepted.output

    def test_accept_wrong_user(self, runner, cli_roster, notifier):
        account, _ = cli_roster
        runner.invoke(app, ["invites", "send", account.id, "bob@example.com", "--as", "owner"])
        invite_id = notifier.send_invite.call_args[0][2]

        result = runner.invoke(app, ["invites", "accept", invite_id, "--as", "jane"])

        assert result.exit_code == 1
        assert "invite_mismatch" in result.output

    def test_revoke(self, runner, cli_roster, notifier):
        account, _ = cli_roster
        runner.invoke(app, ["invites", "send", account.id, "bob@example.com", "--as", "owner"])
        invite_id = notifier.send_invite.call_args[0][2]

        result = runner.invoke(app, ["invites", "revoke", invite_id, "--as", "owner"])

        assert result.exit_code == 0
        assert "revoked" in result.output

    def test_list_empty(self, runner, cli_roster):
        account, _ = cli_roster

        result = runner.invoke(app, ["invites", "list", account.id, "--as", "owner"])

        assert result.exit_code == 0
        assert "No pending invitations" in result.output
