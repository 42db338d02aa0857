"""
Roster CLI.
"""
