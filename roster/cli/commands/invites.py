"""
CLI commands for invitation management.
"""

import asyncio

import typer
from rich.table import Table

from ...errors import RosterError
from .common import console, fail, open_roster, resolve_caller

app = typer.Typer(help="Manage account invitations")


@app.command("send")
def invites_send_command(
    account_id: str = typer.Argument(..., help="Account ID"),
    email: str = typer.Argument(..., help="Email address to invite"),
    role: str = typer.Option("member", "--role", "-r", help="member or admin"),
    as_user: str = typer.Option(..., "--as", help="User ID of the inviting admin"),
) -> None:
    """Send an invitation to join an account."""

    async def _send():
        roster = await open_roster()
        try:
            caller = await resolve_caller(roster, as_user)
            invite = await roster.invites.create(caller, account_id, email, role)
            console.print(f"[green]✓[/green] Invitation sent to {email}")
            console.print(f"  ID: {invite.id}")
        except RosterError as e:
            fail(e)
        finally:
            await roster.close()

    asyncio.run(_send())


@app.command("list")
def invites_list_command(
    account_id: str = typer.Argument(..., help="Account ID"),
    as_user: str = typer.Option(..., "--as", help="User ID of the caller (must be admin)"),
) -> None:
    """List pending invitations for an account."""

    async def _list():
        roster = await open_roster()
        try:
            caller = await resolve_caller(roster, as_user)
            invites = await roster.invites.list_pending(caller, account_id)

            if not invites:
                console.print("[yellow]No pending invitations[/yellow]")
                return

            table = Table(title="Invitations")
            table.add_column("ID", style="cyan")
            table.add_column("Role", style="magenta")
            table.add_column("Invited by", style="green")
            table.add_column("Created", style="yellow")

            for invite in invites:
                table.add_row(
                    invite.id,
                    invite.role.value,
                    invite.owner,
                    invite.time.strftime("%Y-%m-%d %H:%M"),
                )

            console.print(table)
        except RosterError as e:
            fail(e)
        finally:
            await roster.close()

    asyncio.run(_list())


@app.command("resolve")
def invites_resolve_command(
    invite_id: str = typer.Argument(..., help="Invitation ID"),
    as_user: str = typer.Option(..., "--as", help="User ID of the invitee"),
) -> None:
    """Show which account an invitation is for."""

    async def _resolve():
        roster = await open_roster()
        try:
            caller = await resolve_caller(roster, as_user)
            details = await roster.invites.resolve(invite_id, caller.email)
            console.print(f"Account: [cyan]{details.account_name}[/cyan] ({details.account_id})")
        except RosterError as e:
            fail(e)
        finally:
            await roster.close()

    asyncio.run(_resolve())


@app.command("accept")
def invites_accept_command(
    invite_id: str = typer.Argument(..., help="Invitation ID"),
    as_user: str = typer.Option(..., "--as", help="User ID of the invitee"),
) -> None:
    """Accept an invitation."""

    async def _accept():
        roster = await open_roster()
        try:
            caller = await resolve_caller(roster, as_user)
            result = await roster.invites.accept(invite_id, caller)
            console.print("[green]✓[/green] Invitation accepted")
            console.print(f"  Account: {result.account_id}")
        except RosterError as e:
            fail(e)
        finally:
            await roster.close()

    asyncio.run(_accept())


@app.command("revoke")
def invites_revoke_command(
    invite_id: str = typer.Argument(..., help="Invitation ID to revoke"),
    as_user: str = typer.Option(..., "--as", help="User ID of the caller (must be admin)"),
) -> None:
    """Revoke (delete) a pending invitation."""

    async def _revoke():
        roster = await open_roster()
        try:
            caller = await resolve_caller(roster, as_user)
            await roster.invites.revoke(caller, invite_id)
            console.print(f"[green]✓[/green] Invitation {invite_id[:8]}... revoked")
        except RosterError as e:
            fail(e)
        finally:
            await roster.close()

    asyncio.run(_revoke())
