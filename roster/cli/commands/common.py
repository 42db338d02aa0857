"""
Helpers shared by CLI commands.
"""

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from ...auth.models import CallerIdentity
from ...client import Roster
from ...errors import RosterError

console = Console()


async def open_roster() -> Roster:
    """
    Create the Roster client for one command.

    Each command runs in its own process, so the in-memory backend would
    start empty every time. Only persistent backends are accepted.
    """
    try:
        roster = await Roster.create()
    except ValidationError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if roster.config.backend == "memory":
        await roster.close()
        console.print(
            "[red]Error:[/red] The CLI needs a persistent store; set ROSTER_BACKEND=supabase"
        )
        raise typer.Exit(1)

    return roster


async def resolve_caller(roster: Roster, user_id: str) -> CallerIdentity:
    """Build the caller identity from the user's stored profile."""
    caller = await roster.users.identity(user_id)
    if caller is None:
        console.print(f"[red]Error:[/red] No user profile for {user_id}")
        raise typer.Exit(1)
    return caller


def fail(error: RosterError) -> None:
    """Print a RosterError and exit non-zero."""
    console.print(f"[red]Error ({error.kind.value}):[/red] {error.message}")
    raise typer.Exit(1)
