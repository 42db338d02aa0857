"""
Roster CLI - Command-line interface for account membership.

Usage:
    roster accounts         Manage accounts and members
    roster invites          Manage account invitations

Every command acts on behalf of a caller given with --as USER_ID.
"""

import logging

import typer

from .commands import accounts, invites

# Create the main Typer app
app = typer.Typer(
    name="roster",
    help="Account membership and invitations",
    add_completion=False,
)

app.add_typer(accounts.app, name="accounts")
app.add_typer(invites.app, name="invites")


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show log output"),
) -> None:
    """
    Roster - account membership and email-bound invitations.

    Configure with ROSTER_* environment variables or a .env file. Commands
    need a persistent backend (ROSTER_BACKEND=supabase).
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
