"""
Basic Roster usage example.

This example walks through the account membership lifecycle:
- Account creation
- Direct roster edits by an admin
- Email-bound invitations

Uses the in-memory backend, so it runs without any services:

    ROSTER_SALT=change-me-please python examples/basic_usage.py
"""

import asyncio

from roster import CallerIdentity, Roster, RosterError


async def main():
    # Create Roster client (loads config from .env / ROSTER_* variables)
    roster = await Roster.create()

    try:
        # =================================================================
        # 1. Seed user profiles (normally written by your identity provider)
        # =================================================================
        print("Creating users...")

        for user_id, email, name in [
            ("olivia", "olivia@example.com", "Olivia Owner"),
            ("jane", "jane@example.com", "Jane Doe"),
            ("sam", "sam@example.com", "Sam Smith"),
        ]:
            await roster.users.create(email, display_name=name, user_id=user_id)
            print(f"  Created user: {email} (ID: {user_id})")

        olivia = await roster.users.identity("olivia")
        sam = await roster.users.identity("sam")

        # =================================================================
        # 2. Create Account
        # =================================================================
        print("\nCreating account...")

        account = await roster.accounts.create(olivia, "Acme")
        print(f"  Created account: {account.name} (ID: {account.id})")
        print(f"  Admins: {account.admins}")

        # =================================================================
        # 3. Add and promote a member
        # =================================================================
        print("\nAdding Jane...")

        await roster.memberships.add_by_email(olivia, account.id, "jane@example.com", "member")
        await roster.memberships.change_role(account.id, olivia.user_id, "jane", "admin")
        print("  Jane is now an admin")

        # =================================================================
        # 4. Invite Sam
        # =================================================================
        print("\nInviting Sam...")

        invite = await roster.invites.create(olivia, account.id, "sam@example.com", "member")
        details = await roster.invites.resolve(invite.id, sam.email)
        print(f"  Invite {invite.id[:8]}... is for {details.account_name}")

        await roster.invites.accept(invite.id, sam)
        print("  Sam accepted")

        # =================================================================
        # 5. List members
        # =================================================================
        print("\nMembers:")

        for member in await roster.memberships.list(account.id, olivia.user_id):
            print(f"  {member.display_name:<15} {member.role.value}")

        # =================================================================
        # 6. Errors carry a stable kind
        # =================================================================
        try:
            await roster.memberships.change_role(account.id, sam.user_id, "olivia", "remove")
        except RosterError as e:
            print(f"\nSam cannot remove Olivia: {e.kind.value} ({e.message})")

        # =================================================================
        # 7. Activity
        # =================================================================
        print("\nOlivia's activity:")

        for entry in await roster.audit.list_by_user(olivia.user_id):
            print(f"  {entry.time:%H:%M:%S} {entry.action}")

    finally:
        await roster.close()


if __name__ == "__main__":
    asyncio.run(main())
