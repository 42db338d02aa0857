"""
Roster decorators module.
"""

from .errors import internal_errors

__all__ = [
    "internal_errors",
]
