"""
Roster utilities.
"""
