"""
Roster CLI commands.
"""
