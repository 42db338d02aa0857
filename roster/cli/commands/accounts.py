"""
roster accounts command - Account and member management CLI.
"""

import asyncio

import typer
from rich.table import Table

from ...errors import RosterError
from .common import console, fail, open_roster, resolve_caller

app = typer.Typer(help="Manage accounts and their members")


@app.command("create")
def accounts_create_command(
    name: str = typer.Argument(..., help="Account name"),
    as_user: str = typer.Option(..., "--as", help="User ID of the caller (becomes owner)"),
) -> None:
    """
    Create a new account owned by the caller.

    Example:
        $ roster accounts create "Acme" --as Hq3LZr8y
    """

    async def _create():
        roster = await open_roster()
        try:
            caller = await resolve_caller(roster, as_user)
            account = await roster.accounts.create(caller, name)
            console.print("[green]✓[/green] Account created")
            console.print(f"  ID: [cyan]{account.id}[/cyan]")
            console.print(f"  Name: [cyan]{account.name}[/cyan]")
        except RosterError as e:
            fail(e)
        finally:
            await roster.close()

    asyncio.run(_create())


@app.command("members")
def accounts_members_command(
    account_id: str = typer.Argument(..., help="Account ID"),
    as_user: str = typer.Option(..., "--as", help="User ID of the caller (must be admin)"),
) -> None:
    """List the members of an account."""

    async def _members():
        roster = await open_roster()
        try:
            caller = await resolve_caller(roster, as_user)
            members = await roster.memberships.list(account_id, caller.user_id)

            if not members:
                console.print("[yellow]No members found[/yellow]")
                return

            table = Table(title=f"Members ({len(members)})")
            table.add_column("Name", style="cyan")
            table.add_column("Role", style="magenta")
            table.add_column("Last login", style="blue")
            table.add_column("ID", style="dim")

            for member in members:
                table.add_row(
                    member.display_name or "-",
                    member.role.value,
                    member.last_login_time.strftime("%Y-%m-%d %H:%M") if member.last_login_time else "-",
                    member.id,
                )

            console.print(table)
        except RosterError as e:
            fail(e)
        finally:
            await roster.close()

    asyncio.run(_members())


@app.command("member")
def accounts_member_command(
    account_id: str = typer.Argument(..., help="Account ID"),
    user_id: str = typer.Argument(..., help="Member's user ID"),
    as_user: str = typer.Option(..., "--as", help="User ID of the caller (must be admin)"),
) -> None:
    """Show one member of an account."""

    async def _member():
        roster = await open_roster()
        try:
            caller = await resolve_caller(roster, as_user)
            member = await roster.memberships.get(account_id, caller.user_id, user_id)
            console.print(f"ID: [cyan]{member.id}[/cyan]")
            console.print(f"Name: [cyan]{member.display_name or '-'}[/cyan]")
            console.print(f"Role: [cyan]{member.role.value}[/cyan]")
            if member.last_login_time:
                console.print(f"Last login: [cyan]{member.last_login_time}[/cyan]")
        except RosterError as e:
            fail(e)
        finally:
            await roster.close()

    asyncio.run(_member())


@app.command("add-member")
def accounts_add_member_command(
    account_id: str = typer.Argument(..., help="Account ID"),
    email: str = typer.Argument(..., help="Email of an existing user"),
    role: str = typer.Option("member", "--role", "-r", help="member or admin"),
    as_user: str = typer.Option(..., "--as", help="User ID of the caller (must be admin)"),
) -> None:
    """Add an existing user to an account by email."""

    async def _add():
        roster = await open_roster()
        try:
            caller = await resolve_caller(roster, as_user)
            await roster.memberships.add_by_email(caller, account_id, email, role)
            console.print(f"[green]✓[/green] Added {email} as {role}")
        except RosterError as e:
            fail(e)
        finally:
            await roster.close()

    asyncio.run(_add())


@app.command("set-role")
def accounts_set_role_command(
    account_id: str = typer.Argument(..., help="Account ID"),
    user_id: str = typer.Argument(..., help="Member's user ID"),
    role: str = typer.Argument(..., help="member, admin or remove"),
    as_user: str = typer.Option(..., "--as", help="User ID of the caller (must be admin)"),
) -> None:
    """Promote, demote or remove a member."""

    async def _set_role():
        roster = await open_roster()
        try:
            caller = await resolve_caller(roster, as_user)
            result = await roster.memberships.change_role(account_id, caller.user_id, user_id, role)
            console.print(f"[green]✓[/green] {user_id}: {result.role.value}")
        except RosterError as e:
            fail(e)
        finally:
            await roster.close()

    asyncio.run(_set_role())
