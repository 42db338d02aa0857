"""
Roster framework integrations.

Import the integration you need directly, e.g.
``from roster.integrations.fastapi import RosterFastAPI``.
"""
